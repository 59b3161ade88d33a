"""Four-band diverging color scale: blue -> cyan -> green -> yellow -> red."""

from __future__ import annotations

import numpy as np

from sphrender import config

__all__ = ["MIDPOINT_STEP", "map_color", "map_colors", "scale_steps"]

MIDPOINT_STEP = config.COLOR_STEPS // 2


def scale_steps(values, vmin: float, vmax: float) -> np.ndarray:
    """
    Integer position of each value on the [0, COLOR_STEPS) scale.

    A degenerate range (vmin == vmax) and non-finite positions map to the
    midpoint; values that round just outside the range are clamped.
    """
    values = np.asarray(values, dtype=np.float64)
    if vmax == vmin:
        return np.full(values.shape, MIDPOINT_STEP, dtype=np.int64)

    with np.errstate(invalid="ignore", over="ignore"):
        t = np.floor(config.COLOR_STEPS * (values - vmin) / (vmax - vmin))
    t = np.where(np.isfinite(t), t, MIDPOINT_STEP)
    return np.clip(t, 0, config.COLOR_STEPS - 1).astype(np.int64)


def map_colors(values, vmin: float, vmax: float) -> np.ndarray:
    """Map an array of values to uint8 RGB, shape ``values.shape + (3,)``."""
    t = scale_steps(values, vmin, vmax)
    band = config.COLOR_BAND
    rgb = np.zeros(t.shape + (3,), dtype=np.uint8)

    # blue to aqua: (0, 0, 255) to (0, 255, 255)
    sel = t < band
    rgb[sel] = np.stack(
        [np.zeros_like(t[sel]), t[sel], np.full_like(t[sel], 255)], axis=-1
    )
    # aqua to green: (0, 255, 255) to (0, 255, 0)
    sel = (t >= band) & (t < 2 * band)
    rgb[sel] = np.stack(
        [np.zeros_like(t[sel]), np.full_like(t[sel], 255), 255 - (t[sel] - band)], axis=-1
    )
    # green to yellow: (0, 255, 0) to (255, 255, 0)
    sel = (t >= 2 * band) & (t < 3 * band)
    rgb[sel] = np.stack(
        [t[sel] - 2 * band, np.full_like(t[sel], 255), np.zeros_like(t[sel])], axis=-1
    )
    # yellow to red: (255, 255, 0) to (255, 0, 0)
    sel = t >= 3 * band
    rgb[sel] = np.stack(
        [np.full_like(t[sel], 255), 255 - (t[sel] - 3 * band), np.zeros_like(t[sel])], axis=-1
    )
    return rgb


def map_color(value: float, vmin: float, vmax: float) -> tuple[int, int, int]:
    """Map a single value to an (r, g, b) tuple of 8-bit channels."""
    r, g, b = map_colors(np.array([value]), vmin, vmax)[0]
    return int(r), int(g), int(b)
