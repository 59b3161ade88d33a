"""Console logging for the ``sphrender`` package and its progress bars."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from tqdm.contrib.logging import logging_redirect_tqdm

__all__ = ["PACKAGE_LOGGER", "progress_logging", "setup_logging"]

PACKAGE_LOGGER = "sphrender"
HANDLER_NAME = "sphrender-console"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure the package logger and return it.

    Sets DEBUG when ``verbose``, INFO otherwise. A console handler is added
    only once, and only when the root logger has no handlers of its own, so
    embedding applications keep control of where records go.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    has_console = any(h.get_name() == HANDLER_NAME for h in logger.handlers)
    if not has_console and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
    return logger


@contextmanager
def progress_logging(enabled: bool = True) -> Iterator[None]:
    """
    Route package log records through tqdm.write while a progress bar is shown.

    Only the console handler installed by :func:`setup_logging` is redirected;
    when records go to handlers owned by the application nothing changes.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    has_console = any(h.get_name() == HANDLER_NAME for h in logger.handlers)
    if not enabled or not has_console:
        yield
        return
    with logging_redirect_tqdm(loggers=[logger]):
        yield
