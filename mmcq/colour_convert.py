# mmcq/colour_convert.py
from __future__ import annotations

"""
Boundary conversions: float colours to 8-bit triples, and pixel validation.

Exports:
  unit_float_to_u8(x) -> int
  rgb_from_unit_floats(r, g, b) -> RGBTuple
  pixels_from_unit_floats(colours) -> list[RGBTuple]
  validate_pixels(pixels) -> int64 [N,3]

Notes:
  Float colours are clamped to [0, 1] and rounded half up before scaling
  to [0, 255]. Validation never clamps: out-of-range values raise.
"""

import math
from numbers import Integral, Real
from typing import Any, Iterable, List

import numpy as np

from .core_types import AXIS_NAMES, I64Pixels, PixelInput, RGBTuple
from .errors import InvalidPixelComponentError, InvalidPixelError


# Float -> u8


def unit_float_to_u8(x: float) -> int:
    """Clamp a [0,1] float channel and scale it to an 8-bit value."""
    v = float(x)
    if math.isnan(v):
        raise ValueError("colour channel is NaN")
    v = 0.0 if v < 0.0 else 1.0 if v > 1.0 else v
    return int(math.floor(v * 255.0 + 0.5))


def rgb_from_unit_floats(r: float, g: float, b: float) -> RGBTuple:
    """Three unit-float channels to an RGB tuple."""
    return (unit_float_to_u8(r), unit_float_to_u8(g), unit_float_to_u8(b))


def pixels_from_unit_floats(colours: Iterable[Any]) -> List[RGBTuple]:
    """
    Convert float colours to 8-bit triples.

    Each colour is either an object exposing .r/.g/.b floats or a
    3-length float sequence.
    """
    out: List[RGBTuple] = []
    for colour in colours:
        if all(hasattr(colour, name) for name in AXIS_NAMES):
            out.append(rgb_from_unit_floats(colour.r, colour.g, colour.b))
        else:
            r, g, b = colour
            out.append(rgb_from_unit_floats(r, g, b))
    return out


# Validation


def _check_channel(index: int, axis: int, value: Any) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidPixelComponentError(index, AXIS_NAMES[axis], value)
    if isinstance(value, (Integral, np.integer)):
        v = int(value)
    elif isinstance(value, (Real, np.floating)) and float(value).is_integer():
        v = int(value)
    else:
        raise InvalidPixelComponentError(index, AXIS_NAMES[axis], value)
    if v < 0 or v > 255:
        raise InvalidPixelComponentError(index, AXIS_NAMES[axis], value)
    return v


def _validate_array(arr: np.ndarray) -> I64Pixels:
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidPixelError(0, f"expected an (N, 3) array, got shape {arr.shape}")
    kind = arr.dtype.kind
    if kind not in "iuf":
        # bool / object arrays go through the per-element checks
        return _validate_sequence(arr.tolist())

    bad = (arr < 0) | (arr > 255)
    if kind == "f":
        bad |= ~np.isfinite(arr)
        bad |= np.isfinite(arr) & (arr != np.floor(arr))
    if np.any(bad):
        i, c = (int(v) for v in np.argwhere(bad)[0])
        raise InvalidPixelComponentError(i, AXIS_NAMES[c], arr[i, c].item())
    return arr.astype(np.int64)


def _validate_sequence(pixels: Iterable[Any]) -> I64Pixels:
    rows: List[RGBTuple] = []
    for index, pixel in enumerate(pixels):
        if isinstance(pixel, (str, bytes)):
            raise InvalidPixelError(index, f"expected 3 channels, got {pixel!r}")
        try:
            n = len(pixel)
        except TypeError:
            raise InvalidPixelError(index, f"expected 3 channels, got {pixel!r}") from None
        if n != 3:
            raise InvalidPixelError(index, f"expected 3 channels, got {n}")
        rows.append(
            (
                _check_channel(index, 0, pixel[0]),
                _check_channel(index, 1, pixel[1]),
                _check_channel(index, 2, pixel[2]),
            )
        )
    return np.array(rows, dtype=np.int64).reshape(-1, 3)


def validate_pixels(pixels: PixelInput) -> I64Pixels:
    """
    Validate pixels and return them as an int64 (N, 3) array.

    Accepts a sequence of 3-channel values or an (N, 3) numeric array.
    Raises InvalidPixelError / InvalidPixelComponentError naming the first
    offending position.
    """
    if isinstance(pixels, np.ndarray):
        return _validate_array(pixels)
    return _validate_sequence(pixels)


__all__ = [
    "unit_float_to_u8",
    "rgb_from_unit_floats",
    "pixels_from_unit_floats",
    "validate_pixels",
]
