# mmcq/vbox.py
from __future__ import annotations

"""
VolumeBox: an axis-aligned box over the quantized RGB cube.

Count, volume and average are computed on first read and cached. Passing
force=True recomputes and overwrites the cache. Caches are never
invalidated automatically: set the bounds before the first read.
"""

from typing import Optional, Tuple

import numpy as np

from .constants import MULT, RSHIFT, SIDE
from .core_types import AXIS_NAMES, Axis, Bounds, I64Pixels, PixelLike, RGBTuple
from .histogram import Histogram, quantize_pixels


class VolumeBox:
    """Inclusive range r_min..r_max x g_min..g_max x b_min..b_max."""

    def __init__(
        self,
        r_min: int,
        r_max: int,
        g_min: int,
        g_max: int,
        b_min: int,
        b_max: int,
        histogram: Histogram,
    ) -> None:
        for lo, hi in ((r_min, r_max), (g_min, g_max), (b_min, b_max)):
            if not (0 <= lo <= hi < SIDE):
                raise ValueError(f"invalid box bounds {lo}..{hi}")
        self.r_min, self.r_max = int(r_min), int(r_max)
        self.g_min, self.g_max = int(g_min), int(g_max)
        self.b_min, self.b_max = int(b_min), int(b_max)
        self.histogram = histogram
        self._count: Optional[int] = None
        self._volume: Optional[int] = None
        self._average: Optional[RGBTuple] = None

    # Geometry

    @property
    def lo(self) -> Tuple[int, int, int]:
        return (self.r_min, self.g_min, self.b_min)

    @property
    def hi(self) -> Tuple[int, int, int]:
        return (self.r_max, self.g_max, self.b_max)

    def axis_bounds(self, axis: Axis) -> Bounds:
        """(min, max) along one axis."""
        name = AXIS_NAMES[axis]
        return getattr(self, f"{name}_min"), getattr(self, f"{name}_max")

    def widths(self) -> Tuple[int, int, int]:
        """Cell extent along r, g, b."""
        return (
            self.r_max - self.r_min + 1,
            self.g_max - self.g_min + 1,
            self.b_max - self.b_min + 1,
        )

    def contains(self, pixel: PixelLike) -> bool:
        """True when the pixel's quantized cell lies inside the box."""
        r, g, b = (int(v) >> RSHIFT for v in pixel)
        return (
            self.r_min <= r <= self.r_max
            and self.g_min <= g <= self.g_max
            and self.b_min <= b <= self.b_max
        )

    # Cached statistics

    def count(self, force: bool = False) -> int:
        """Pixels inside the box."""
        if self._count is None or force:
            self._count = int(self.histogram.region(self.lo, self.hi).sum())
        return self._count

    def volume(self, force: bool = False) -> int:
        """Cells inside the box."""
        if self._volume is None or force:
            w_r, w_g, w_b = self.widths()
            self._volume = w_r * w_g * w_b
        return self._volume

    def average(self, force: bool = False) -> RGBTuple:
        """
        Mass-weighted centre of the box in 8-bit RGB, truncated.

        Each cell contributes at its centre, (coord + 0.5) * MULT. Boxes with
        no pixels fall back to the midpoint of their own bounds.
        """
        if self._average is None or force:
            self._average = self._compute_average()
        return self._average

    def _compute_average(self) -> RGBTuple:
        sub = self.histogram.region(self.lo, self.hi)
        ntot = int(sub.sum())
        if ntot == 0:
            return (
                MULT * (self.r_min + self.r_max + 1) // 2,
                MULT * (self.g_min + self.g_max + 1) // 2,
                MULT * (self.b_min + self.b_max + 1) // 2,
            )
        out = []
        for axis in range(3):
            lo, hi = self.axis_bounds(axis)
            others = tuple(a for a in range(3) if a != axis)
            mass = sub.sum(axis=others)
            # (coord + 0.5) * MULT == (2 * coord + 1) * MULT / 2, kept integral
            centres = 2 * np.arange(lo, hi + 1, dtype=np.int64) + 1
            weighted = int(np.dot(mass, centres)) * MULT
            out.append(weighted // (2 * ntot))
        return (out[0], out[1], out[2])

    @property
    def size(self) -> int:
        """Box cardinality used by the refiner; same as count()."""
        return self.count()

    # Copies

    def copy(self) -> "VolumeBox":
        """Same bounds and histogram; caches copied as they are."""
        other = VolumeBox(
            self.r_min, self.r_max, self.g_min, self.g_max, self.b_min, self.b_max, self.histogram
        )
        other._count = self._count
        other._volume = self._volume
        other._average = self._average
        return other

    def with_axis_bounds(self, axis: Axis, lo: int, hi: int) -> "VolumeBox":
        """New box with one axis replaced and empty caches."""
        bounds = [self.r_min, self.r_max, self.g_min, self.g_max, self.b_min, self.b_max]
        bounds[2 * axis] = lo
        bounds[2 * axis + 1] = hi
        return VolumeBox(*bounds, histogram=self.histogram)

    def set_average(self, rgb: RGBTuple) -> None:
        """Overwrite the cached average (used by the greyscale snap)."""
        self._average = (int(rgb[0]), int(rgb[1]), int(rgb[2]))

    def __repr__(self) -> str:
        return (
            f"VolumeBox(r={self.r_min}..{self.r_max}, g={self.g_min}..{self.g_max}, "
            f"b={self.b_min}..{self.b_max})"
        )


def vbox_from_pixels(pixels: I64Pixels, histogram: Histogram) -> VolumeBox:
    """Smallest box holding every (validated) pixel."""
    q = quantize_pixels(pixels)
    lo = q.min(axis=0)
    hi = q.max(axis=0)
    return VolumeBox(
        int(lo[0]), int(hi[0]), int(lo[1]), int(hi[1]), int(lo[2]), int(hi[2]), histogram
    )


__all__ = ["VolumeBox", "vbox_from_pixels"]
