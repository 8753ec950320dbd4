# mmcq/quantize.py
from __future__ import annotations

"""
quantize(): pixels in, ColorMap out.

Pipeline:
  validate -> histogram -> root box -> split by population (to
  fract_by_population * max_colors boxes) -> split by occupancy (to
  max_colors boxes) -> ColorMap in descending occupancy order.
"""

import time
from collections.abc import Sequence
from typing import Optional

import numpy as np

from .colormap import ColorMap
from .colour_convert import validate_pixels
from .constants import (
    FRACT_BY_POPULATION,
    MAX_COLORS,
    MAX_ITERATIONS,
    MIN_COLORS,
    OUTPUT_DEPTHS,
)
from .core_types import PixelInput
from .errors import EmptyInputError, InvalidColorCountError, InvalidOutputDepthError
from .histogram import build_histogram
from .refine import iterate, occupancy_key, population_key
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string
from .vbox import vbox_from_pixels


def check_color_count(max_colors: int) -> int:
    """Return max_colors as int, or raise InvalidColorCountError."""
    if isinstance(max_colors, bool) or not isinstance(max_colors, (int, np.integer)):
        raise InvalidColorCountError(max_colors, MIN_COLORS, MAX_COLORS)
    if not (MIN_COLORS <= int(max_colors) <= MAX_COLORS):
        raise InvalidColorCountError(max_colors, MIN_COLORS, MAX_COLORS)
    return int(max_colors)


def check_output_depth(output_depth: Optional[int], max_colors: Optional[int]) -> None:
    """Depth must be in OUTPUT_DEPTHS and hold max_colors entries."""
    if output_depth is None:
        return
    if isinstance(output_depth, bool) or output_depth not in OUTPUT_DEPTHS:
        raise InvalidOutputDepthError(
            output_depth,
            max_colors,
            f"output_depth must be one of {OUTPUT_DEPTHS}, got {output_depth!r}",
        )
    if max_colors is not None and max_colors > (1 << int(output_depth)):
        raise InvalidOutputDepthError(
            output_depth,
            max_colors,
            f"max_colors {max_colors} does not fit in {output_depth} bit(s)",
        )


def quantize(
    pixels: PixelInput,
    max_colors: int,
    output_depth: Optional[int] = None,
    *,
    fract_by_population: float = FRACT_BY_POPULATION,
    max_iterations: int = MAX_ITERATIONS,
    debug: bool = False,
) -> ColorMap:
    """
    Reduce pixels to at most max_colors representative colours.

    Args:
      pixels       : sequence of (r, g, b) ints in [0, 255], or an (N, 3) array
      max_colors   : palette size in [2, 256]
      output_depth : optional bits per index in {1, 2, 4, 8}; max_colors must fit
      debug        : print per-phase stats

    Returns:
      ColorMap with 1..max_colors boxes (fewer when splitting stalls).

    Raises:
      EmptyInputError, InvalidColorCountError, InvalidOutputDepthError,
      InvalidPixelError / InvalidPixelComponentError.
    """
    t_start = time.perf_counter()
    if not isinstance(pixels, (np.ndarray, Sequence)):
        pixels = list(pixels)
    if len(pixels) == 0:
        raise EmptyInputError()
    max_colors = check_color_count(max_colors)
    check_output_depth(output_depth, max_colors)

    arr = validate_pixels(pixels)
    histogram = build_histogram(arr)
    root = vbox_from_pixels(arr, histogram)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", int(arr.shape[0])),
                    ("Cells", histogram.occupied),
                    ("Root", repr(root)),
                    ("Colours", max_colors),
                ]
            )
        )

    cmap = ColorMap([root])
    stats = iterate(
        cmap,
        histogram,
        fract_by_population * max_colors,
        population_key,
        max_iterations=max_iterations,
        phase="population",
    )
    cmap.sort(population_key)
    cmap.reverse()
    if debug:
        debug_log(f"population phase: boxes={stats.boxes} iterations={stats.iterations}")

    stats = iterate(
        cmap,
        histogram,
        max_colors,
        occupancy_key,
        max_iterations=max_iterations,
        phase="occupancy",
    )
    cmap.sort(occupancy_key)
    cmap.reverse()
    if debug:
        debug_log(f"occupancy phase: boxes={stats.boxes} iterations={stats.iterations}")
        debug_log(f"quantize took {format_seconds_compact(time.perf_counter() - t_start)}")
    return cmap


__all__ = ["check_color_count", "check_output_depth", "quantize"]
