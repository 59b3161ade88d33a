"""
Load precomputed associated Legendre samples from per-degree CSV files.

Each ``legendres-<l>.csv`` holds l + 1 rows (row m = P_l,m) of comma-separated
samples of P_l,m(cos θ) on the grid θ_i = π·i/height. The first successful
parse is written to an NPZ cache so later runs skip the CSV step.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from sphrender import config
from sphrender.errors import DataCorrupt, DataUnavailable
from sphrender.legendre.cache import load_table_cache, save_table_cache
from sphrender.legendre.table import LegendreTable

logger = logging.getLogger(__name__)

__all__ = ["discover_source_files", "load_legendre_table", "read_source_file", "read_source_files"]


def _parse_degree(path: Path) -> int | None:
    """Return l encoded in ``legendres-<l>.csv``, or None if the name does not match."""
    stem = path.name[: -len(config.SOURCE_SUFFIX)]
    if not stem.startswith(config.SOURCE_PREFIX):
        return None
    try:
        return int(stem[len(config.SOURCE_PREFIX) :])
    except ValueError:
        return None


def discover_source_files(source_dir: Path) -> dict[int, Path]:
    """Map degree l to its CSV file under ``source_dir``."""
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        return {}

    files: dict[int, Path] = {}
    for path in sorted(source_dir.glob(config.SOURCE_GLOB)):
        l = _parse_degree(path)  # noqa: E741
        if l is None or l < 0:
            logger.warning("Skipping %s: file name does not encode a degree", path)
            continue
        if l in files:
            raise DataCorrupt(
                f"Both {files[l]} and {path} hold Legendre samples for l={l}"
            )
        files[l] = path
    return files


def read_source_file(path: Path, l: int, height: int | None = None) -> np.ndarray:  # noqa: E741
    """
    Parse one degree's CSV into an (l + 1, height) float64 array.

    Raises:
        DataCorrupt: if the file cannot be parsed or its shape is wrong.
    """
    try:
        samples = np.loadtxt(path, delimiter=",", dtype=np.float64, ndmin=2)
    except ValueError as exc:
        raise DataCorrupt(f"Cannot parse Legendre samples in {path}: {exc}") from exc

    if samples.shape[0] != l + 1:
        raise DataCorrupt(
            f"{path} has {samples.shape[0]} rows, expected {l + 1} (m = 0..{l})"
        )
    if height is not None and samples.shape[1] != height:
        raise DataCorrupt(
            f"{path} has {samples.shape[1]} samples per row, expected height={height}"
        )
    return samples


def read_source_files(
    source_dir: Path,
    max_l: int,
    height: int | None = None,
) -> LegendreTable:
    """
    Build a table from every ``legendres-<l>.csv`` with l <= max_l.

    Degrees with no file are left as holes. When ``height`` is None it is
    taken from the first file read; every other file must agree with it.

    Raises:
        DataUnavailable: if no matching file exists.
        DataCorrupt: if any file is malformed.
    """
    files = discover_source_files(source_dir)
    if not files:
        raise DataUnavailable(
            f"No {config.SOURCE_GLOB} files found in {source_dir}"
        )

    blocks: dict[int, np.ndarray] = {}
    for l, path in sorted(files.items()):  # noqa: E741
        if l > max_l:
            logger.debug("Ignoring %s (l=%d > max_l=%d)", path, l, max_l)
            continue
        samples = read_source_file(path, l, height)
        if height is None:
            height = int(samples.shape[1])
        blocks[l] = samples

    if height is None:
        raise DataUnavailable(
            f"No {config.SOURCE_GLOB} files with l <= {max_l} found in {source_dir}"
        )

    missing = [l for l in range(max_l + 1) if l not in blocks]  # noqa: E741
    if missing:
        logger.warning("No Legendre source file for l in %s", missing)
    logger.info(
        "Read %d Legendre source file(s) from %s (height=%d)", len(blocks), source_dir, height
    )
    return LegendreTable.from_levels(max_l, height, blocks)


def _check_cached_shape(
    table: LegendreTable, cache_path: Path, max_l: int, height: int | None
) -> None:
    if table.max_l != max_l:
        raise DataCorrupt(
            f"Stale Legendre cache {cache_path}: built for max_l={table.max_l}, requested {max_l}"
        )
    if height is not None and table.height != height:
        raise DataCorrupt(
            f"Stale Legendre cache {cache_path}: built for height={table.height}, requested {height}"
        )


def load_legendre_table(
    max_l: int,
    source_dir: Path,
    *,
    height: int | None = None,
    cache_path: Path | None = None,
    rebuild_on_corrupt: bool = False,
) -> LegendreTable:
    """
    Load the Legendre table, preferring the binary cache.

    Args:
        max_l: Highest degree the table must cover (inclusive).
        source_dir: Directory holding ``legendres-<l>.csv`` files.
        height: Expected number of θ samples per row; None accepts the
            source/cached value.
        cache_path: NPZ cache location (default: ``source_dir/legendres.npz``).
        rebuild_on_corrupt: Re-read the CSV files when the cache is
            unreadable or stale. Without source files the error still stands.

    Returns:
        LegendreTable covering l = 0..max_l.
    """
    source_dir = Path(source_dir)
    cache_path = Path(cache_path) if cache_path is not None else source_dir / config.CACHE_FILE

    if cache_path.exists():
        try:
            table = load_table_cache(cache_path)
            _check_cached_shape(table, cache_path, max_l, height)
            logger.info("Using Legendre cache %s", cache_path)
            return table
        except DataCorrupt as exc:
            if not (rebuild_on_corrupt and discover_source_files(source_dir)):
                raise
            logger.warning("%s; rebuilding from %s", exc, source_dir)

    table = read_source_files(source_dir, max_l, height)

    try:
        save_table_cache(table, cache_path)
    except OSError as exc:
        logger.warning("Could not write Legendre cache %s: %s", cache_path, exc)

    return table
