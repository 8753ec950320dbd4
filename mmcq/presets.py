# mmcq/presets.py
from __future__ import annotations

"""
Preset calling conventions over quantize().

Exports:
- quantize_default(pixels, debug=False) -> ColorMap
- quantize_to_depth(pixels, output_depth, debug=False) -> ColorMap
- quantize_greyscale(pixels, max_colors, debug=False) -> ColorMap

Notes:
- Depth 8 is capped at MAX_COLORS; depth 1 asks for exactly two colours.
"""

from .colormap import ColorMap
from .constants import DEFAULT_COLORS, MAX_COLORS
from .core_types import PixelInput
from .quantize import check_output_depth, quantize


def quantize_default(pixels: PixelInput, debug: bool = False) -> ColorMap:
    return quantize(pixels, DEFAULT_COLORS, debug=debug)


def quantize_to_depth(pixels: PixelInput, output_depth: int, debug: bool = False) -> ColorMap:
    """Use the whole index range of an output bit depth."""
    check_output_depth(output_depth, None)
    max_colors = min(1 << int(output_depth), MAX_COLORS)
    return quantize(pixels, max_colors, output_depth, debug=debug)


def quantize_greyscale(pixels: PixelInput, max_colors: int, debug: bool = False) -> ColorMap:
    """quantize() followed by the in-place greyscale snap."""
    cmap = quantize(pixels, max_colors, debug=debug)
    cmap.greyscale()
    return cmap


__all__ = ["quantize_default", "quantize_to_depth", "quantize_greyscale"]
