from pathlib import Path

import numpy as np
import pytest
from scipy.special import lpmv

from sphrender.legendre.table import LegendreTable

SYNTHETIC_MAX_L = 3
SYNTHETIC_HEIGHT = 8


def legendre_rows(l: int, height: int) -> np.ndarray:  # noqa: E741
    """P_l,m(cos θ_i) for m = 0..l on θ_i = π·i/height, as the Octave script tabulates them."""
    x = np.cos(np.pi * np.arange(height) / height)
    return np.array([lpmv(m, l, x) for m in range(l + 1)], dtype=np.float64)


def write_legendre_csvs(
    directory: Path, max_l: int, height: int, skip: tuple[int, ...] = ()
) -> dict[int, np.ndarray]:
    """Write legendres-<l>.csv for l = 0..max_l (minus ``skip``); return what was written."""
    directory.mkdir(parents=True, exist_ok=True)
    written = {}
    for l in range(max_l + 1):  # noqa: E741
        if l in skip:
            continue
        rows = legendre_rows(l, height)
        np.savetxt(directory / f"legendres-{l}.csv", rows, delimiter=",", fmt="%.17g")
        written[l] = rows
    return written


@pytest.fixture
def csv_writer():
    """Expose the CSV writer to tests that need custom layouts."""
    return write_legendre_csvs


@pytest.fixture
def legendre_dir(tmp_path: Path) -> Path:
    """Directory with CSVs for l = 0..3 sampled at height 8."""
    source = tmp_path / "legendre"
    write_legendre_csvs(source, SYNTHETIC_MAX_L, SYNTHETIC_HEIGHT)
    return source


@pytest.fixture
def lpmv_table() -> LegendreTable:
    """In-memory table matching ``legendre_dir``."""
    levels = {l: legendre_rows(l, SYNTHETIC_HEIGHT) for l in range(SYNTHETIC_MAX_L + 1)}  # noqa: E741
    return LegendreTable.from_levels(SYNTHETIC_MAX_L, SYNTHETIC_HEIGHT, levels)


@pytest.fixture
def two_row_table() -> LegendreTable:
    """max_l=1, height=2 table with P_1,0 = [1.0, -1.0]."""
    return LegendreTable.from_levels(
        1,
        2,
        {
            0: [[1.0, 1.0]],
            1: [[1.0, -1.0], [0.0, 0.5]],
        },
    )
