"""Immutable container for precomputed associated Legendre samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, cast

import numpy as np

from sphrender.errors import DataCorrupt, InvalidHarmonicIndex, MissingLevel


def _freeze(samples: np.ndarray) -> np.ndarray:
    frozen = np.array(samples, dtype=np.float64, copy=True)
    frozen.setflags(write=False)
    return frozen


@dataclass(frozen=True)
class LegendreTable:
    """
    Samples of P_l,m(cos θ) for l in [0, max_l], m in [0, l].

    ``levels[l]`` is an array of shape (l + 1, height) whose row m holds
    P_l,m(cos θ_i) with θ_i = π·i/height, or None when no data was loaded
    for that degree. Arrays are read-only so one table can be shared across
    worker threads.
    """

    max_l: int
    height: int
    levels: tuple[np.ndarray | None, ...]

    def __post_init__(self) -> None:
        if len(self.levels) != self.max_l + 1:
            raise DataCorrupt(
                f"Expected {self.max_l + 1} levels for max_l={self.max_l}, got {len(self.levels)}"
            )
        for l, samples in enumerate(self.levels):  # noqa: E741
            if samples is None:
                continue
            if samples.shape != (l + 1, self.height):
                raise DataCorrupt(
                    f"Level l={l} has shape {samples.shape}, expected {(l + 1, self.height)}"
                )

    @classmethod
    def from_levels(
        cls,
        max_l: int,
        height: int,
        levels: Mapping[int, np.ndarray | Iterable[Iterable[float]]],
    ) -> LegendreTable:
        """Build a table from a mapping ``l -> rows``; absent degrees become holes."""
        slots: list[np.ndarray | None] = [None] * (max_l + 1)
        for l, rows in levels.items():  # noqa: E741
            if not 0 <= l <= max_l:
                raise DataCorrupt(f"Level l={l} lies outside [0, {max_l}]")
            slots[l] = _freeze(np.asarray(rows, dtype=np.float64))
        return cls(max_l=max_l, height=height, levels=tuple(slots))

    @property
    def present_levels(self) -> list[int]:
        return [l for l, samples in enumerate(self.levels) if samples is not None]  # noqa: E741

    def has_level(self, l: int) -> bool:  # noqa: E741
        return 0 <= l <= self.max_l and self.levels[l] is not None

    def level(self, l: int) -> np.ndarray:  # noqa: E741
        """Return the (l + 1, height) sample block for degree l."""
        if not self.has_level(l):
            raise MissingLevel(l)
        return cast(np.ndarray, self.levels[l])

    def row(self, l: int, m: int) -> np.ndarray:  # noqa: E741
        """Return the ``height`` samples of P_l,m for 0 <= m <= l."""
        if not 0 <= m <= l:
            raise InvalidHarmonicIndex(l, m)
        return self.level(l)[m]

    def require_levels(self, degrees: Iterable[int]) -> None:
        """Raise MissingLevel for the first degree in ``degrees`` with no samples."""
        for l in degrees:  # noqa: E741
            if not self.has_level(l):
                raise MissingLevel(
                    l, f"No Legendre samples loaded for l={l} (table covers {self.present_levels})"
                )
