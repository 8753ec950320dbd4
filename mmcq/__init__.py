# mmcq/__init__.py
"""
mmcq package.

Purpose:
  Modified median cut colour quantization: reduce RGB pixels to a small
  palette and map any colour to its nearest entry. See quantize_palette.py
  for the CLI.

Public API:
  quantize       : pixels -> ColorMap entry point.
  ColorMap       : palette(), map(), nearest(), greyscale().
  VolumeBox      : box over the quantized colour cube with cached stats.
  Histogram      : read-only quantized colour counts.
  presets        : quantize_default / quantize_to_depth / quantize_greyscale.
  colour_convert : unit-float colours to 8-bit triples, pixel validation.
  errors         : QuantizeError and its subclasses.

Quick start:
  from mmcq import quantize
  cmap = quantize([(190, 197, 190), (202, 204, 200)], 4)
  cmap.palette(); cmap.map((190, 197, 190))
"""

__version__ = "0.1.0"

from . import colour_convert
from . import constants
from . import core_types
from . import errors
from . import presets
from . import utils

from .colormap import ColorMap
from .cut import median_cut_apply
from .errors import (
    EmptyInputError,
    InvalidColorCountError,
    InvalidOutputDepthError,
    InvalidPixelComponentError,
    InvalidPixelError,
    QuantizeError,
)
from .histogram import Histogram, build_histogram
from .presets import quantize_default, quantize_greyscale, quantize_to_depth
from .quantize import quantize
from .refine import iterate, occupancy_key, population_key
from .vbox import VolumeBox, vbox_from_pixels

__all__ = [
    "__version__",
    "colour_convert",
    "constants",
    "core_types",
    "errors",
    "presets",
    "utils",
    "ColorMap",
    "Histogram",
    "VolumeBox",
    "build_histogram",
    "vbox_from_pixels",
    "median_cut_apply",
    "iterate",
    "population_key",
    "occupancy_key",
    "quantize",
    "quantize_default",
    "quantize_to_depth",
    "quantize_greyscale",
    "QuantizeError",
    "EmptyInputError",
    "InvalidColorCountError",
    "InvalidOutputDepthError",
    "InvalidPixelError",
    "InvalidPixelComponentError",
]
