import logging

import pytest

from sphrender.logging_utils import PACKAGE_LOGGER, progress_logging, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.mark.parametrize("verbose,level", [(True, logging.DEBUG), (False, logging.INFO)])
def test_setup_logging_sets_package_level(package_logger, verbose, level):
    assert setup_logging(verbose) is package_logger
    assert package_logger.level == level


def test_console_handler_added_once(package_logger, monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [])

    setup_logging()
    setup_logging(verbose=True)

    consoles = [h for h in package_logger.handlers if h.get_name() == "sphrender-console"]
    assert len(consoles) == 1
    assert "%(name)s" in consoles[0].formatter._fmt


def test_no_console_handler_when_root_is_configured(package_logger):
    # pytest's capture handlers are already installed on the root logger
    setup_logging()
    assert not any(h.get_name() == "sphrender-console" for h in package_logger.handlers)


def test_progress_logging_restores_handlers(package_logger, monkeypatch):
    monkeypatch.setattr(logging.getLogger(), "handlers", [])
    setup_logging()
    before = list(package_logger.handlers)

    with progress_logging():
        assert package_logger.handlers != before
        logging.getLogger("sphrender.driver").info("inside progress bar")

    assert package_logger.handlers == before


def test_progress_logging_disabled_is_a_no_op(package_logger):
    before = list(package_logger.handlers)
    with progress_logging(enabled=False):
        assert package_logger.handlers == before


def test_progress_logging_leaves_application_handlers_alone(package_logger):
    # root already has handlers under pytest, so no console handler was added
    setup_logging()
    before = list(package_logger.handlers)
    with progress_logging():
        assert package_logger.handlers == before
