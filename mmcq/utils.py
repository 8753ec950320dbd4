# mmcq/utils.py
from __future__ import annotations

"""
Shared utilities for mmcq.

Includes nearest-colour search, time / number formatting, and tidy logging.
"""

import sys
from typing import Any, Iterable, List, Tuple

import numpy as np


#  Time / size formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Nearest colour


def nearest_palette_indices(src_rgb: np.ndarray, pal_rgb: np.ndarray) -> np.ndarray:
    """
    For each source RGB row, index of the nearest palette row by Euclidean
    distance. Ties resolve to the lowest palette index.
    """
    src = np.asarray(src_rgb, dtype=np.int64).reshape(-1, 3)
    pal = np.asarray(pal_rgb, dtype=np.int64).reshape(-1, 3)
    diff = pal[None, :, :] - src[:, None, :]
    dist2 = np.sum(diff * diff, axis=2)
    return np.argmin(dist2, axis=1).astype(np.int32)


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Pixels: 1,024  Colours: 16  Depth: -
    Routes to debug() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def enable_line_buffered_stdout() -> None:
    """Enable line-buffered stdout when supported."""
    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    "format_seconds_compact",
    "nearest_palette_indices",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "enable_line_buffered_stdout",
    "log",
    "debug_log",
    "warn",
    "error",
]
