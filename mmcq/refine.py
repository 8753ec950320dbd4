# mmcq/refine.py
from __future__ import annotations

"""
Iterative box splitting.

Exports:
  population_key(box) -> int    # split the most populated box first
  occupancy_key(box)  -> int    # split the largest count * volume first
  iterate(colormap, histogram, target, key, ...) -> RefineStats

The ColorMap doubles as the queue: it is sorted ascending by key and the
last box is taken, so the highest-key box is always split next.
"""

from typing import NamedTuple

from .constants import MAX_ITERATIONS
from .core_types import PriorityKey
from .colormap import ColorMap
from .cut import median_cut_apply
from .histogram import Histogram
from .utils import warn
from .vbox import VolumeBox


class RefineStats(NamedTuple):
    """Outcome of one iterate() call."""

    boxes: int
    iterations: int
    stalled: bool  # a box could not be cut and the phase stopped early


def population_key(box: VolumeBox) -> int:
    return box.count()


def occupancy_key(box: VolumeBox) -> int:
    return box.count() * box.volume()


def iterate(
    colormap: ColorMap,
    histogram: Histogram,
    target: float,
    key: PriorityKey,
    max_iterations: int = MAX_ITERATIONS,
    phase: str = "refine",
) -> RefineStats:
    """
    Split boxes until the map holds `target` boxes or the iteration cap is hit.

    Empty boxes are put back untouched and still use up an iteration. A
    single-pixel box comes back as one child and does not add a colour. If
    a box cannot be cut at all the phase stops and the map keeps what it has.
    """
    ncolors = len(colormap)
    niters = 0
    while ncolors < target and niters < max_iterations:
        niters += 1
        colormap.sort(key)
        vbox = colormap.pop()
        if vbox.count() == 0:
            colormap.push(vbox)
            continue

        children = median_cut_apply(histogram, vbox)
        if children is None:
            colormap.push(vbox)
            warn(f"{phase}: no usable cut in {vbox!r}; keeping {len(colormap)} boxes")
            return RefineStats(len(colormap), niters, True)

        for child in children:
            colormap.push(child)
        if len(children) == 2:
            ncolors += 1

    return RefineStats(len(colormap), niters, False)


__all__ = ["RefineStats", "population_key", "occupancy_key", "iterate"]
