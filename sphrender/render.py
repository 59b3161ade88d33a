"""Render one (l, m) harmonic component to an RGB pixel buffer."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from sphrender.colormap import map_colors
from sphrender.errors import DataCorrupt
from sphrender.harmonics import evaluate_grid
from sphrender.legendre.table import LegendreTable

logger = logging.getLogger(__name__)

__all__ = ["HarmonicImage", "HarmonicIndex", "compute_value_grid", "render"]


@dataclass(frozen=True, slots=True)
class HarmonicIndex:
    """Degree and order of one rendered component."""

    l: int  # noqa: E741
    m: int


@dataclass(slots=True)
class HarmonicImage:
    """
    Rendered component.

    - pixels: (height, width, 3) uint8 RGB, row 0 at θ = 0.
    - vmin/vmax: extrema of the raw value grid that set the color scale.
    """

    index: HarmonicIndex
    pixels: np.ndarray
    vmin: float
    vmax: float


def compute_value_grid(
    table: LegendreTable, l: int, m: int, width: int, height: int  # noqa: E741
) -> np.ndarray:
    """Raw harmonic values, shape (height, width)."""
    if height != table.height:
        raise DataCorrupt(
            f"Image height {height} does not match the Legendre sampling "
            f"height {table.height} (l={l}, m={m})"
        )
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    return evaluate_grid(table, l, m, width)


def render(
    table: LegendreTable, l: int, m: int, width: int, height: int  # noqa: E741
) -> HarmonicImage:
    """
    Evaluate the component on the full grid, then color it.

    The color scale spans this image's own min/max, so two images are not on
    a common scale.
    """
    values = compute_value_grid(table, l, m, width, height)
    vmin = float(np.min(values))
    vmax = float(np.max(values))
    logger.debug("Rendered values for (l=%d, m=%d): min=%g max=%g", l, m, vmin, vmax)

    pixels = map_colors(values, vmin, vmax)
    return HarmonicImage(index=HarmonicIndex(l, m), pixels=pixels, vmin=vmin, vmax=vmax)
