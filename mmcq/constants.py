# mmcq/constants.py
"""
Tunables used across the quantizer.

- Histogram resolution (SIGBITS, RSHIFT, HISTO_SIZE)
- Refinement limits (MAX_ITERATIONS, FRACT_BY_POPULATION)
- Input bounds (MIN_COLORS, MAX_COLORS, OUTPUT_DEPTHS)
- Greyscale snap thresholds (GREY_*)
"""
from __future__ import annotations

from typing import Tuple

# ==================
# Histogram geometry
# ==================
SIGBITS: int = 5
RSHIFT: int = 8 - SIGBITS
MULT: int = 1 << RSHIFT
SIDE: int = 1 << SIGBITS  # quantized levels per channel
HISTO_SIZE: int = 1 << (3 * SIGBITS)

# ==========
# Refinement
# ==========
MAX_ITERATIONS: int = 1000
FRACT_BY_POPULATION: float = 0.75

# ============
# Input bounds
# ============
MIN_COLORS: int = 2
MAX_COLORS: int = 256
DEFAULT_COLORS: int = 16
OUTPUT_DEPTHS: Tuple[int, ...] = (1, 2, 4, 8)

# ==============
# Greyscale snap
# ==============
GREY_DARK_MAX: int = 5
GREY_LIGHT_MIN: int = 251
BLACK: Tuple[int, int, int] = (0, 0, 0)
WHITE: Tuple[int, int, int] = (255, 255, 255)

__all__ = [
    "SIGBITS",
    "RSHIFT",
    "MULT",
    "SIDE",
    "HISTO_SIZE",
    "MAX_ITERATIONS",
    "FRACT_BY_POPULATION",
    "MIN_COLORS",
    "MAX_COLORS",
    "DEFAULT_COLORS",
    "OUTPUT_DEPTHS",
    "GREY_DARK_MAX",
    "GREY_LIGHT_MIN",
    "BLACK",
    "WHITE",
]
