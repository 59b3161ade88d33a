import numpy as np
import pytest

from sphrender.colormap import MIDPOINT_STEP, map_color, map_colors, scale_steps


def _color_at_step(t: int) -> tuple[int, int, int]:
    # value t / 1024 on a [0, 1] range lands exactly on step t
    return map_color(t / 1024, 0.0, 1.0)


@pytest.mark.parametrize(
    "t,expected",
    [
        (0, (0, 0, 255)),
        (128, (0, 128, 255)),
        (255, (0, 255, 255)),
        (256, (0, 255, 255)),
        (300, (0, 255, 211)),
        (511, (0, 255, 0)),
        (512, (0, 255, 0)),
        (600, (88, 255, 0)),
        (767, (255, 255, 0)),
        (768, (255, 255, 0)),
        (900, (255, 123, 0)),
        (1023, (255, 0, 0)),
    ],
)
def test_band_colors(t, expected):
    assert _color_at_step(t) == expected


def test_band_boundaries_are_continuous():
    for boundary in (256, 512, 768):
        before = np.array(_color_at_step(boundary - 1))
        after = np.array(_color_at_step(boundary))
        # every channel moves by at most one step across a band edge
        assert np.max(np.abs(after - before)) <= 1


def test_extremes_map_to_blue_and_red():
    assert map_color(-3.0, -3.0, 5.0) == (0, 0, 255)
    assert map_color(5.0, -3.0, 5.0) == (255, 0, 0)


def test_out_of_range_values_are_clamped():
    assert map_color(-3.0000001, -3.0, 5.0) == (0, 0, 255)
    assert map_color(5.0000001, -3.0, 5.0) == (255, 0, 0)


def test_monotone_red_and_blue():
    values = np.linspace(-2.0, 7.0, 5001)
    rgb = map_colors(values, -2.0, 7.0).astype(int)
    assert np.all(np.diff(rgb[:, 0]) >= 0)
    assert np.all(np.diff(rgb[:, 2]) <= 0)


@pytest.mark.parametrize("value", [-1e9, -1.0, 0.0, 0.25, 42.0])
@pytest.mark.parametrize("constant", [-2.5, 0.0, 3.0])
def test_degenerate_range_maps_to_midpoint(value, constant):
    assert map_color(value, constant, constant) == (0, 255, 0)


def test_non_finite_values_map_to_midpoint():
    rgb = map_colors(np.array([np.nan, 0.0]), 0.0, 1.0)
    assert tuple(rgb[0]) == (0, 255, 0)
    assert tuple(rgb[1]) == (0, 0, 255)


def test_scale_steps_range():
    steps = scale_steps(np.linspace(0.0, 1.0, 11), 0.0, 1.0)
    assert steps[0] == 0
    assert steps[-1] == 1023
    assert steps[5] == MIDPOINT_STEP


def test_map_colors_shape_and_dtype():
    values = np.arange(12, dtype=float).reshape(3, 4)
    rgb = map_colors(values, 0.0, 11.0)
    assert rgb.shape == (3, 4, 3)
    assert rgb.dtype == np.uint8


def test_scalar_and_vector_agree():
    values = np.linspace(-1.0, 1.0, 37)
    rgb = map_colors(values, -1.0, 1.0)
    for value, color in zip(values, rgb):
        assert map_color(value, -1.0, 1.0) == tuple(int(c) for c in color)
