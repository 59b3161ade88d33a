"""Binary NPZ cache for Legendre sample tables."""

from __future__ import annotations

import logging
import os
import tempfile
import zipfile
from pathlib import Path

import numpy as np

from sphrender import config
from sphrender.errors import DataCorrupt
from sphrender.legendre.table import LegendreTable

logger = logging.getLogger(__name__)

__all__ = ["load_table_cache", "save_table_cache"]


def _table_payload(table: LegendreTable) -> dict[str, np.ndarray]:
    """
    Flatten a table into NPZ arrays.

    Levels are stored in ascending l with rows in ascending m, so level l
    occupies l + 1 consecutive rows of ``samples``; ``levels`` lists which
    degrees are present.
    """
    present = table.present_levels
    blocks = [table.level(l) for l in present]  # noqa: E741
    if blocks:
        samples = np.concatenate(blocks, axis=0)
    else:
        samples = np.empty((0, table.height), dtype=np.float64)

    return {
        "format_version": np.int32(config.CACHE_FORMAT_VERSION),
        "max_l": np.int32(table.max_l),
        "height": np.int32(table.height),
        "levels": np.asarray(present, dtype=np.int32),
        "samples": samples.astype(np.float64, copy=False),
    }


def _write_npz_atomic(out_path: Path, payload: dict[str, np.ndarray]) -> None:
    """Write NPZ file atomically using temporary file and rename."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        dir=out_path.parent, suffix=".tmp", delete=False
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            np.savez(tmp, **payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    os.replace(tmp_path, out_path)


def save_table_cache(table: LegendreTable, path: Path) -> None:
    """Persist ``table`` to ``path``; raises OSError when the file cannot be written."""
    _write_npz_atomic(Path(path), _table_payload(table))
    logger.info("Saved Legendre cache to %s", path)


def load_table_cache(path: Path) -> LegendreTable:
    """
    Load a table written by :func:`save_table_cache`.

    Raises:
        DataCorrupt: if the file cannot be read, has an unknown format
            version, or its arrays do not describe a consistent table.
    """
    path = Path(path)
    try:
        data = np.load(path, allow_pickle=False)
    except (OSError, ValueError, EOFError, zipfile.BadZipFile) as exc:
        raise DataCorrupt(f"Cannot read Legendre cache {path}: {exc}") from exc
    if not isinstance(data, np.lib.npyio.NpzFile):
        raise DataCorrupt(f"Legendre cache {path} is not an NPZ archive")

    try:
        with data:
            version = int(data["format_version"])
            max_l = int(data["max_l"])
            height = int(data["height"])
            levels = data["levels"].astype(np.int64)
            samples = np.asarray(data["samples"], dtype=np.float64)
    except (OSError, ValueError, TypeError, KeyError, EOFError, zipfile.BadZipFile) as exc:
        raise DataCorrupt(f"Cannot read Legendre cache {path}: {exc}") from exc

    if version != config.CACHE_FORMAT_VERSION:
        raise DataCorrupt(
            f"Legendre cache {path} has format version {version}, "
            f"expected {config.CACHE_FORMAT_VERSION}"
        )
    if samples.ndim != 2 or samples.shape[1] != height:
        raise DataCorrupt(
            f"Legendre cache {path} holds samples of shape {samples.shape}, "
            f"expected (*, {height})"
        )
    expected_rows = int(np.sum(levels + 1))
    if samples.shape[0] != expected_rows:
        raise DataCorrupt(
            f"Legendre cache {path} holds {samples.shape[0]} rows, "
            f"levels {levels.tolist()} need {expected_rows}"
        )

    blocks: dict[int, np.ndarray] = {}
    offset = 0
    for l in levels.tolist():  # noqa: E741
        blocks[l] = samples[offset : offset + l + 1]
        offset += l + 1

    logger.debug("Loaded Legendre cache %s (max_l=%d, height=%d)", path, max_l, height)
    return LegendreTable.from_levels(max_l, height, blocks)
