import numpy as np
import pytest

from sphrender.errors import DataCorrupt, InvalidHarmonicIndex, MissingLevel
from sphrender.legendre.table import LegendreTable


def test_from_levels_shapes(lpmv_table):
    assert lpmv_table.max_l == 3
    assert lpmv_table.height == 8
    assert lpmv_table.present_levels == [0, 1, 2, 3]
    for l in range(4):  # noqa: E741
        assert lpmv_table.level(l).shape == (l + 1, 8)


def test_arrays_are_read_only(lpmv_table):
    with pytest.raises(ValueError):
        lpmv_table.level(2)[0, 0] = 42.0


def test_level_returns_stored_block(lpmv_table):
    assert lpmv_table.level(2) is lpmv_table.levels[2]
    assert lpmv_table.row(2, 1).base is not None


def test_source_rows_are_copied():
    rows = np.array([[1.0, 2.0], [3.0, 4.0]])
    table = LegendreTable.from_levels(1, 2, {1: rows})
    rows[0, 0] = -1.0
    assert table.row(1, 0)[0] == 1.0


def test_hole_raises_missing_level():
    table = LegendreTable.from_levels(2, 3, {0: [[1.0, 1.0, 1.0]]})
    assert not table.has_level(1)
    with pytest.raises(MissingLevel) as excinfo:
        table.row(1, 0)
    assert excinfo.value.l == 1
    assert "l=1" in str(excinfo.value)


def test_level_beyond_max_l_is_missing(lpmv_table):
    with pytest.raises(MissingLevel):
        lpmv_table.level(4)


def test_row_rejects_order_above_degree(lpmv_table):
    with pytest.raises(InvalidHarmonicIndex):
        lpmv_table.row(1, 2)


def test_require_levels_reports_first_hole():
    table = LegendreTable.from_levels(3, 2, {1: [[0.0, 0.0], [0.0, 0.0]]})
    with pytest.raises(MissingLevel) as excinfo:
        table.require_levels(range(1, 4))
    assert excinfo.value.l == 2


@pytest.mark.parametrize(
    "levels",
    [
        {1: [[1.0, 2.0]]},  # one row, l=1 needs two
        {1: [[1.0], [2.0]]},  # wrong height
        {5: [[1.0, 2.0]] * 6},  # l above max_l
    ],
)
def test_from_levels_rejects_bad_shapes(levels):
    with pytest.raises(DataCorrupt):
        LegendreTable.from_levels(2, 2, levels)
