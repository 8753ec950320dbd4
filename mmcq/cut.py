# mmcq/cut.py
from __future__ import annotations

"""
Median cut of one VolumeBox.

Exports:
  cut_axis(vbox) -> Axis
  median_cut_apply(histogram, vbox) -> None | (box,) | (box, box)

Result shapes:
  None        : the box cannot be split (empty, or no usable cut point)
  (copy,)     : a single-pixel box, passed through unchanged
  (low, high) : two children with fresh caches
"""

from typing import Optional, Tuple

import numpy as np

from .core_types import Axis
from .histogram import Histogram
from .vbox import VolumeBox

SplitResult = Optional[Tuple[VolumeBox, ...]]


def cut_axis(vbox: VolumeBox) -> Axis:
    """Widest axis; ties go to r, then g, then b."""
    widths = vbox.widths()
    return widths.index(max(widths))


def _partial_sums(histogram: Histogram, vbox: VolumeBox, axis: Axis) -> np.ndarray:
    """Cumulative mass along the axis, over the full extent of the other two."""
    sub = histogram.region(vbox.lo, vbox.hi)
    others = tuple(a for a in range(3) if a != axis)
    return np.cumsum(sub.sum(axis=others), dtype=np.int64)


def _find_cut(partial: np.ndarray, lo: int, hi: int) -> Optional[int]:
    """
    Cut coordinate along one axis, or None.

    partial[i] is the mass at coordinates lo..lo+i. The returned coordinate
    ends the low child; the high child starts one past it.
    """
    total = int(partial[-1])
    above = np.nonzero(partial > total / 2)[0]
    if above.size == 0:
        return None
    candidate = lo + int(above[0])

    left = candidate - lo
    right = hi - candidate
    if left <= right:
        cut = min(hi - 1, int(candidate + right / 2))
    else:
        cut = max(lo, int(candidate - 1 - left / 2))

    def psum(c: int) -> int:
        return int(partial[c - lo]) if lo <= c <= hi else 0

    # skip leading empty cells so the low child is never empty
    while cut <= hi and psum(cut) == 0:
        cut += 1
    if cut > hi:
        return None

    # step back while nothing lies beyond the cut
    lookahead = total - psum(cut)
    while lookahead == 0 and cut - 1 >= lo and psum(cut - 1) > 0:
        cut -= 1
        lookahead = total - psum(cut)

    if cut >= hi:
        return None
    return cut


def median_cut_apply(histogram: Histogram, vbox: VolumeBox) -> SplitResult:
    """Split a box near the median of its mass along its widest axis."""
    size = vbox.count()
    if size == 0:
        return None
    if size == 1:
        return (vbox.copy(),)

    axis = cut_axis(vbox)
    lo, hi = vbox.axis_bounds(axis)
    partial = _partial_sums(histogram, vbox, axis)
    cut = _find_cut(partial, lo, hi)
    if cut is None:
        return None

    return (
        vbox.with_axis_bounds(axis, lo, cut),
        vbox.with_axis_bounds(axis, cut + 1, hi),
    )


__all__ = ["SplitResult", "cut_axis", "median_cut_apply"]
