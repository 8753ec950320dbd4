# mmcq/core_types.py
from __future__ import annotations

"""
Core type aliases and lightweight helpers.
"""

from typing import Callable, Sequence, Tuple, Union, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:  # pragma: no cover
    from .vbox import VolumeBox

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str
Axis = int  # 0=r, 1=g, 2=b
Bounds = Tuple[int, int]  # inclusive (lo, hi) on one quantized axis

I64Pixels = NDArray[np.int64]  # (N, 3), validated to [0, 255]
PixelLike = Union[Sequence[int], NDArray[np.generic]]
PixelInput = Union[Sequence[PixelLike], NDArray[np.generic]]

# Priority policy: box -> sortable key, lowest is removed last
PriorityKey = Callable[["VolumeBox"], float]

AXIS_NAMES: Tuple[str, str, str] = ("r", "g", "b")

# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def coerce_to_rgb_tuple(value: PixelLike) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


__all__ = [
    "RGBTuple",
    "HexStr",
    "Axis",
    "Bounds",
    "I64Pixels",
    "PixelLike",
    "PixelInput",
    "PriorityKey",
    "AXIS_NAMES",
    "rgb_to_hex",
    "hex_to_rgb",
    "coerce_to_rgb_tuple",
]
