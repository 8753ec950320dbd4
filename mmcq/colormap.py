# mmcq/colormap.py
from __future__ import annotations

"""
ColorMap: the ordered boxes produced by quantize(), one palette entry each.

Exports:
  ColorMap
    palette()            -> list[RGBTuple]   # box averages, current order
    map(pixel)           -> RGBTuple         # exact hit, else nearest
    nearest(pixel)       -> RGBTuple         # Euclidean in RGB, first wins ties
    greyscale(create_copy=False)             # snap near-black / near-white ends
    push / pop / sort / reverse              # queue operations for the refiner

Notes:
  palette(), map() and nearest() never reorder. Only the refiner and
  greyscale() do, so results stay stable between calls otherwise.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .colour_convert import validate_pixels
from .constants import BLACK, GREY_DARK_MAX, GREY_LIGHT_MIN, WHITE
from .core_types import PixelLike, PriorityKey, RGBTuple, coerce_to_rgb_tuple
from .utils import nearest_palette_indices
from .vbox import VolumeBox


def brightness_key(box: VolumeBox) -> int:
    """Sum of the box's average channels."""
    return sum(box.average())


class ColorMap:
    """Sequence of VolumeBoxes plus the key it was last sorted by."""

    def __init__(self, boxes: Optional[Iterable[VolumeBox]] = None) -> None:
        self._boxes: List[VolumeBox] = list(boxes) if boxes is not None else []
        # key the sequence is currently sorted by; None when dirty
        self._sorted_by: Optional[PriorityKey] = None

    # Queue operations

    def push(self, box: VolumeBox) -> None:
        self._boxes.append(box)
        self._sorted_by = None

    def pop(self) -> VolumeBox:
        """Remove and return the last box (the highest key after sort())."""
        if not self._boxes:
            raise IndexError("pop from empty ColorMap")
        return self._boxes.pop()

    def sort(self, key: PriorityKey) -> None:
        """Stable ascending sort by key; skipped if already sorted by it."""
        if self._sorted_by is key:
            return
        self._boxes.sort(key=key)
        self._sorted_by = key

    def reverse(self) -> None:
        self._boxes.reverse()
        self._sorted_by = None

    @property
    def is_sorted(self) -> bool:
        return self._sorted_by is not None

    @property
    def boxes(self) -> Tuple[VolumeBox, ...]:
        return tuple(self._boxes)

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[VolumeBox]:
        return iter(list(self._boxes))

    # Palette

    def palette(self) -> List[RGBTuple]:
        """Box averages in the current order; a fresh list each call."""
        return [box.average() for box in self._boxes]

    def _palette_array(self) -> np.ndarray:
        return np.array(self.palette(), dtype=np.int64).reshape(-1, 3)

    def map(self, pixel: PixelLike) -> RGBTuple:
        """Palette entry equal to the pixel if there is one, else nearest()."""
        rgb = coerce_to_rgb_tuple(validate_pixels([pixel])[0])
        for box in self._boxes:
            if box.average() == rgb:
                return box.average()
        return self.nearest(rgb)

    def nearest(self, pixel: PixelLike) -> RGBTuple:
        """Palette entry closest to the pixel; the earliest box wins ties."""
        if not self._boxes:
            raise ValueError("nearest() on an empty ColorMap")
        src = validate_pixels([pixel])
        idx = int(nearest_palette_indices(src, self._palette_array())[0])
        return self._boxes[idx].average()

    def map_pixels(self, pixels: Iterable[PixelLike]) -> List[RGBTuple]:
        """nearest() for many pixels at once."""
        src = validate_pixels(list(pixels))
        if src.shape[0] == 0:
            return []
        pal = self.palette()
        return [pal[int(i)] for i in nearest_palette_indices(src, np.array(pal))]

    # Greyscale snap

    def greyscale(self, create_copy: bool = False) -> Optional["ColorMap"]:
        """
        Order boxes brightest first, then snap the ends: a dimmest average
        with every channel below GREY_DARK_MAX becomes black, a brightest
        average with every channel above GREY_LIGHT_MIN becomes white.

        Mutates in place and returns None, or with create_copy=True returns
        a new ColorMap over the same (shared) boxes.
        """
        ordered = sorted(self._boxes, key=brightness_key, reverse=True)
        if ordered:
            dimmest = ordered[-1]
            if all(c < GREY_DARK_MAX for c in dimmest.average()):
                dimmest.set_average(BLACK)
            brightest = ordered[0]
            if all(c > GREY_LIGHT_MIN for c in brightest.average()):
                brightest.set_average(WHITE)

        if create_copy:
            return ColorMap(ordered)
        self._boxes = ordered
        self._sorted_by = None
        return None

    def __repr__(self) -> str:
        return f"ColorMap({len(self._boxes)} boxes)"


__all__ = ["ColorMap", "brightness_key"]
