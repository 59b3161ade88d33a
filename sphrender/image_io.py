"""PNG output for rendered harmonic images."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from sphrender import config

__all__ = ["output_filename", "write_png"]


def output_filename(l: int, m: int) -> str:  # noqa: E741
    """File name for the image of (l, m), e.g. ``sphericalharmonic-3_-2.png``."""
    return config.OUTPUT_TEMPLATE.format(l=l, m=m)


def write_png(path: Path, pixels: np.ndarray) -> None:
    """
    Write a (height, width, 3) uint8 buffer as an 8-bit RGB PNG.

    Raises:
        ValueError: if ``pixels`` is not an RGB uint8 buffer.
        OSError: if the file cannot be written.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError(
            f"Expected (height, width, 3) uint8 pixels, got {pixels.shape} {pixels.dtype}"
        )
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(pixels)).save(path, format="PNG")
