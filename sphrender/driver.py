"""
Render every (l, m) image for 1 <= l <= max_l, -l <= m <= l.

Evaluation errors (missing levels, bad indices, mismatched sampling) abort the
whole run. Any error raised by the writer for a single image is logged and
the run moves on to the next pair.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator

import numpy as np
from tqdm import tqdm

from sphrender import config
from sphrender.image_io import output_filename, write_png
from sphrender.legendre.table import LegendreTable
from sphrender.render import HarmonicIndex, render

logger = logging.getLogger(__name__)

__all__ = ["ImageWriter", "RenderOutcome", "iter_harmonic_indices", "render_all"]

ImageWriter = Callable[[Path, np.ndarray], None]


@dataclass(slots=True)
class RenderOutcome:
    """Result of rendering and writing one (l, m) image."""

    index: HarmonicIndex
    path: Path
    ok: bool
    vmin: float
    vmax: float
    error: str | None = None


def iter_harmonic_indices(max_l: int) -> Iterator[HarmonicIndex]:
    """Yield (l, m) in ascending l, then ascending m."""
    for l in range(1, max_l + 1):  # noqa: E741
        for m in range(-l, l + 1):
            yield HarmonicIndex(l, m)


def _render_and_write(
    table: LegendreTable,
    index: HarmonicIndex,
    width: int,
    height: int,
    output_dir: Path,
    writer: ImageWriter,
) -> RenderOutcome:
    image = render(table, index.l, index.m, width, height)
    path = output_dir / output_filename(index.l, index.m)
    try:
        writer(path, image.pixels)
    except Exception as exc:
        logger.warning("Failed to write %s for (l=%d, m=%d): %s", path, index.l, index.m, exc)
        return RenderOutcome(index, path, False, image.vmin, image.vmax, error=str(exc))
    logger.debug("Wrote %s", path)
    return RenderOutcome(index, path, True, image.vmin, image.vmax)


def render_all(
    max_l: int,
    width: int,
    height: int,
    table: LegendreTable,
    *,
    output_dir: Path | None = None,
    writer: ImageWriter | None = None,
    max_workers: int = 1,
    show_progress: bool = False,
) -> list[RenderOutcome]:
    """
    Render and write one image per (l, m) pair.

    Args:
        max_l: Highest degree rendered (inclusive).
        width: Image width, also the number of φ samples.
        height: Image height; must equal ``table.height``.
        table: Shared, read-only Legendre table.
        output_dir: Destination directory (default: ``config.OUTPUT_DIR``).
        writer: Callable ``(path, pixels)`` that stores one image
            (default: :func:`write_png`).
        max_workers: Number of pairs rendered concurrently; 1 renders and
            writes strictly in enumeration order.
        show_progress: Display a tqdm progress bar.

    Returns:
        One RenderOutcome per pair, in enumeration order.

    Raises:
        MissingLevel: if any degree 1..max_l is absent, before rendering starts.
    """
    start = datetime.now()
    output_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR
    writer = writer or write_png

    table.require_levels(range(1, max_l + 1))
    indices = list(iter_harmonic_indices(max_l))
    logger.info(
        "Rendering %d images (max_l=%d, %dx%d) into %s",
        len(indices),
        max_l,
        width,
        height,
        output_dir,
    )

    outcomes: dict[HarmonicIndex, RenderOutcome] = {}
    if max_workers <= 1:
        for index in tqdm(indices, desc="Rendering", unit="image", disable=not show_progress):
            outcomes[index] = _render_and_write(table, index, width, height, output_dir, writer)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(
                    _render_and_write, table, index, width, height, output_dir, writer
                ): index
                for index in indices
            }
            try:
                for future in tqdm(
                    as_completed(futures),
                    total=len(futures),
                    desc="Rendering",
                    unit="image",
                    disable=not show_progress,
                ):
                    outcomes[futures[future]] = future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    ordered = [outcomes[index] for index in indices]
    failed = sum(1 for outcome in ordered if not outcome.ok)
    duration = datetime.now() - start
    logger.info(
        "Done in %.1fs: %d/%d images written",
        duration.total_seconds(),
        len(ordered) - failed,
        len(ordered),
    )
    if failed:
        logger.warning("%d image(s) could not be written", failed)
    return ordered
