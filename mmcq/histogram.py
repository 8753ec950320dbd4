# mmcq/histogram.py
from __future__ import annotations

"""
Colour histogram over the quantized RGB cube.

Exports:
  quantize_channel(v) -> int
  color_index(r, g, b) -> int            # quantized channels in
  Histogram                              # read-only counts, flat and cube views
  build_histogram(pixels) -> Histogram   # validated int (N,3) pixels in

Notes:
  Each channel keeps its SIGBITS most significant bits, so 256 levels
  collapse to SIDE levels and the table has HISTO_SIZE cells.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import HISTO_SIZE, RSHIFT, SIDE, SIGBITS
from .core_types import PixelInput


def quantize_channel(value: int) -> int:
    """8-bit channel to its quantized level."""
    return int(value) >> RSHIFT


def color_index(r: int, g: int, b: int) -> int:
    """Histogram key of a quantized (r, g, b) cell."""
    return (r << (2 * SIGBITS)) + (g << SIGBITS) + b


class Histogram:
    """
    Pixel counts per quantized cell.

    The backing array is frozen (writeable=False) once built and shared by
    every box derived from it.
    """

    def __init__(self, counts: NDArray[np.int64]) -> None:
        counts = np.array(counts, dtype=np.int64)
        if counts.shape != (HISTO_SIZE,):
            raise ValueError(f"histogram must have {HISTO_SIZE} cells, got {counts.shape}")
        counts.flags.writeable = False
        self._counts = counts
        self._cube = counts.reshape(SIDE, SIDE, SIDE)

    @property
    def counts(self) -> NDArray[np.int64]:
        """Flat read-only view indexed by color_index()."""
        return self._counts

    @property
    def cube(self) -> NDArray[np.int64]:
        """Read-only [r, g, b] view of the same counts."""
        return self._cube

    @property
    def total(self) -> int:
        return int(self._counts.sum())

    @property
    def occupied(self) -> int:
        """Number of cells with at least one pixel."""
        return int(np.count_nonzero(self._counts))

    def __getitem__(self, index: int) -> int:
        return int(self._counts[index])

    def __len__(self) -> int:
        return HISTO_SIZE

    def region(self, lo: Tuple[int, int, int], hi: Tuple[int, int, int]) -> NDArray[np.int64]:
        """Counts inside the inclusive box lo..hi, as an [r, g, b] sub-cube."""
        return self._cube[lo[0] : hi[0] + 1, lo[1] : hi[1] + 1, lo[2] : hi[2] + 1]


def quantize_pixels(pixels: PixelInput) -> NDArray[np.int64]:
    """Validated pixels to their quantized (N, 3) levels."""
    arr = np.asarray(pixels, dtype=np.int64).reshape(-1, 3)
    return arr >> RSHIFT


def build_histogram(pixels: PixelInput) -> Histogram:
    """Count validated pixels into a fresh Histogram."""
    q = quantize_pixels(pixels)
    index = (q[:, 0] << (2 * SIGBITS)) + (q[:, 1] << SIGBITS) + q[:, 2]
    counts = np.bincount(index, minlength=HISTO_SIZE).astype(np.int64, copy=False)
    return Histogram(counts)


__all__ = [
    "quantize_channel",
    "color_index",
    "Histogram",
    "quantize_pixels",
    "build_histogram",
]
