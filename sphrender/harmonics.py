"""
Real spherical harmonic components evaluated from tabulated Legendre samples.

For a single component of the harmonic decomposition with a_l,m fixed to 1:
    Re(Y_l,m) = N_l,m × P_l,|m|(cos θ) × (cos(mφ) − sin(mφ))
    N_l,m = sqrt((2l + 1) / (4π) × (l − m)! / (l + m)!)

and for m < 0 the standard negative-order relation
    P_l,−|m| = (−1)^m × (l − m)! / (l + m)! × P_l,|m|
is applied on top of the |m| lookup. m keeps its sign throughout, in both
N_l,m and the correction factor.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.special import gamma

from sphrender.errors import InvalidHarmonicIndex
from sphrender.legendre.table import LegendreTable

__all__ = [
    "evaluate",
    "evaluate_grid",
    "factorial",
    "negative_order_factor",
    "normalization",
    "phi_samples",
]


def factorial(n: int) -> float:
    """Gamma-based factorial n! for non-negative integers."""
    if n < 0:
        raise ValueError(f"factorial is undefined for n={n}")
    return float(gamma(n + 1.0))


def _check_index(l: int, m: int) -> None:  # noqa: E741
    if l < 0 or abs(m) > l:
        raise InvalidHarmonicIndex(l, m)


def normalization(l: int, m: int) -> float:  # noqa: E741
    """N_l,m = sqrt((2l + 1) / (4π) × (l − m)! / (l + m)!)."""
    _check_index(l, m)
    return math.sqrt((2 * l + 1) / (4 * math.pi) * factorial(l - m) / factorial(l + m))


def negative_order_factor(l: int, m: int) -> float:  # noqa: E741
    """(−1)^m × (l − m)! / (l + m)!, applied when m < 0; 1.0 otherwise."""
    _check_index(l, m)
    if m >= 0:
        return 1.0
    return (-1.0) ** m * factorial(l - m) / factorial(l + m)


def phi_samples(width: int) -> np.ndarray:
    """Azimuth of each pixel column, φ_x = 2π·x/width."""
    return 2 * np.pi * np.arange(width, dtype=np.float64) / width


def evaluate(
    table: LegendreTable, l: int, m: int, sample_index: int, phi: float  # noqa: E741
) -> float:
    """
    Value of the real harmonic component at θ sample ``sample_index`` and azimuth ``phi``.

    Raises:
        InvalidHarmonicIndex: if l < 0 or |m| > l.
        MissingLevel: if the table has no samples for l.
        IndexError: if ``sample_index`` is outside [0, table.height).
    """
    _check_index(l, m)
    if not 0 <= sample_index < table.height:
        raise IndexError(
            f"Sample index {sample_index} outside [0, {table.height}) for (l={l}, m={m})"
        )
    p = table.row(l, abs(m))[sample_index]
    result = normalization(l, m) * p * (np.cos(m * phi) - np.sin(m * phi))
    if m < 0:
        result *= negative_order_factor(l, m)
    return float(result)


def evaluate_grid(table: LegendreTable, l: int, m: int, width: int) -> np.ndarray:  # noqa: E741
    """
    Evaluate the component on the full equirectangular grid.

    Returns:
        Array of shape (table.height, width); row y uses θ sample y and
        column x uses φ_x = 2π·x/width.
    """
    _check_index(l, m)
    p = table.row(l, abs(m))
    phi = phi_samples(width)
    angular = np.cos(m * phi) - np.sin(m * phi)
    grid = (normalization(l, m) * p)[:, np.newaxis] * angular[np.newaxis, :]
    if m < 0:
        grid *= negative_order_factor(l, m)
    return grid
