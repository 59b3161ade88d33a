"""Exception types raised while loading Legendre tables and rendering harmonics."""

from __future__ import annotations

__all__ = [
    "SphRenderError",
    "DataUnavailable",
    "DataCorrupt",
    "MissingLevel",
    "InvalidHarmonicIndex",
]


class SphRenderError(Exception):
    """Base class for all renderer errors."""


class DataUnavailable(SphRenderError, FileNotFoundError):
    """Neither a cache file nor any Legendre source file could be found."""


class DataCorrupt(SphRenderError, ValueError):
    """A cache or source file exists but does not hold a usable table."""


class MissingLevel(SphRenderError, LookupError):
    """The table has no samples for degree ``l``."""

    def __init__(self, l: int, message: str | None = None):  # noqa: E741
        self.l = l
        super().__init__(message or f"No Legendre samples loaded for l={l}")

    def __str__(self) -> str:
        # LookupError would otherwise repr() the message
        return str(self.args[0])


class InvalidHarmonicIndex(SphRenderError, ValueError):
    """(l, m) lies outside l >= 0, |m| <= l."""

    def __init__(self, l: int, m: int):  # noqa: E741
        self.l = l
        self.m = m
        super().__init__(f"Invalid harmonic index (l={l}, m={m}); need l >= 0 and |m| <= l")
