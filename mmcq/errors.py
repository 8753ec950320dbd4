# mmcq/errors.py
from __future__ import annotations

"""
Exceptions raised at the quantize call boundary.

All of them are ValueErrors so callers that only guard against bad input
with `except ValueError` keep working.
"""

from typing import Any, Optional


class QuantizeError(ValueError):
    """Base class for invalid quantize() input."""


class EmptyInputError(QuantizeError):
    """The pixel sequence has no elements."""

    def __init__(self, message: str = "pixel sequence is empty") -> None:
        super().__init__(message)


class InvalidColorCountError(QuantizeError):
    """max_colors is outside [MIN_COLORS, MAX_COLORS]."""

    def __init__(self, max_colors: Any, lo: int, hi: int) -> None:
        self.max_colors = max_colors
        super().__init__(f"max_colors must be an integer in [{lo}, {hi}], got {max_colors!r}")


class InvalidOutputDepthError(QuantizeError):
    """Output depth is not allowed, or too shallow for max_colors."""

    def __init__(self, output_depth: Any, max_colors: Optional[int], message: str) -> None:
        self.output_depth = output_depth
        self.max_colors = max_colors
        super().__init__(message)


class InvalidPixelError(QuantizeError):
    """A pixel is not a 3-channel value."""

    def __init__(self, index: int, message: str) -> None:
        self.index = index
        super().__init__(f"pixel {index}: {message}")


class InvalidPixelComponentError(InvalidPixelError):
    """A pixel channel is non-integral or outside [0, 255]."""

    def __init__(self, index: int, channel: str, value: Any) -> None:
        self.channel = channel
        self.value = value
        super().__init__(
            index, f"channel {channel} must be an integer in [0, 255], got {value!r}"
        )


__all__ = [
    "QuantizeError",
    "EmptyInputError",
    "InvalidColorCountError",
    "InvalidOutputDepthError",
    "InvalidPixelError",
    "InvalidPixelComponentError",
]
