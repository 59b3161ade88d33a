"""Equirectangular images of real spherical harmonics from tabulated Legendre samples."""

from .colormap import map_color, map_colors
from .driver import RenderOutcome, iter_harmonic_indices, render_all
from .errors import (
    DataCorrupt,
    DataUnavailable,
    InvalidHarmonicIndex,
    MissingLevel,
    SphRenderError,
)
from .harmonics import evaluate, evaluate_grid, normalization
from .legendre import LegendreTable, load_legendre_table
from .render import HarmonicImage, HarmonicIndex, render

__all__ = [
    # table
    "LegendreTable",
    "load_legendre_table",
    # evaluation
    "evaluate",
    "evaluate_grid",
    "normalization",
    # color
    "map_color",
    "map_colors",
    # rendering
    "HarmonicImage",
    "HarmonicIndex",
    "RenderOutcome",
    "iter_harmonic_indices",
    "render",
    "render_all",
    # errors
    "DataCorrupt",
    "DataUnavailable",
    "InvalidHarmonicIndex",
    "MissingLevel",
    "SphRenderError",
]
