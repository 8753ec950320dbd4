#!/usr/bin/env python3
"""
quantize_palette.py
Reduce a list of colours to a small palette with modified median cut.

Usage:
  python quantize_palette.py [COLOUR ...] --file PATH --colors N --depth [1|2|4|8] --greyscale --map COLOUR ... --json --debug

Colours:
  '#rrggbb', '#rgb' or 'r,g,b'. --file reads one colour per line; blank
  lines and any line starting with '#' that is not a 3- or 6-digit hex
  code are skipped as comments.

Output:
  One '#rrggbb  r,g,b' line per palette entry, then 'query -> entry' lines
  for --map. With --json a single JSON object is printed on stdout and any
  warnings or debug lines go to stderr.

Exit status:
  0 on success, 2 on unreadable input or invalid colours / options.
"""

from __future__ import annotations

import argparse
import json
import re
import sys
import time
from contextlib import nullcontext, redirect_stdout
from pathlib import Path
from typing import ContextManager, Dict, List, Optional, Sequence

from mmcq.constants import DEFAULT_COLORS, OUTPUT_DEPTHS
from mmcq.core_types import RGBTuple, hex_to_rgb, rgb_to_hex
from mmcq.errors import QuantizeError
from mmcq.quantize import quantize
from mmcq.utils import (
    debug_log,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    key_value_pairs_to_string,
    log,
    print_config_line,
)

# CLI args & small helpers

_HEX_COLOUR = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def parse_colour(text: str) -> RGBTuple:
    """Parse '#rrggbb', '#rgb' or 'r,g,b'. Channels are not range-checked here."""
    s = text.strip()
    if s.startswith("#"):
        return hex_to_rgb(s)
    parts = [p.strip() for p in s.split(",")]
    if len(parts) != 3:
        raise ValueError(f"cannot parse colour {text!r}")
    try:
        r, g, b = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"cannot parse colour {text!r}") from None
    return (r, g, b)


def read_colour_file(path: Path) -> List[RGBTuple]:
    """One colour per line; blanks and non-hex '#' lines skipped."""
    out: List[RGBTuple] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        s = line.strip()
        if not s or (s.startswith("#") and not _HEX_COLOUR.fullmatch(s)):
            continue
        out.append(parse_colour(s))
    return out


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        colours: list of colour strings
        file: optional Path with one colour per line
        colors: palette size
        depth: optional output depth
        greyscale: bool, snap near-black / near-white ends
        map: colour strings to map onto the palette
        json: bool, machine-readable output
        debug: bool for verbose stats
    """
    parser = argparse.ArgumentParser(
        prog="quantize_palette",
        description="Reduce colours to a small palette with modified median cut.",
    )
    parser.add_argument("colours", nargs="*", help="Input colours")
    parser.add_argument("--file", type=Path, default=None, help="File with one colour per line")
    parser.add_argument(
        "--colors", type=int, default=DEFAULT_COLORS, help="Palette size (2..256)"
    )
    parser.add_argument(
        "--depth",
        type=int,
        choices=list(OUTPUT_DEPTHS),
        default=None,
        help="Output bits per index; palette size must fit.",
    )
    parser.add_argument(
        "--greyscale", action="store_true", help="Snap near-black/near-white entries"
    )
    parser.add_argument(
        "--map", nargs="+", default=[], metavar="COLOUR", help="Colours to map to the palette"
    )
    parser.add_argument("--json", action="store_true", help="Print one JSON object")
    parser.add_argument("--debug", action="store_true", help="Verbose quantizer stats")
    return parser.parse_args(argv)


def _diagnostics(as_json: bool) -> ContextManager[object]:
    """Route log lines to stderr when stdout carries JSON."""
    return redirect_stdout(sys.stderr) if as_json else nullcontext()


def _report(palette: List[RGBTuple], mapped: Dict[str, RGBTuple], as_json: bool) -> None:
    if as_json:
        print(
            json.dumps(
                {
                    "palette": [list(c) for c in palette],
                    "mapped": {k: list(v) for k, v in mapped.items()},
                }
            ),
            flush=True,
        )
        return
    log(f"Palette ({len(palette)}):")
    for c in palette:
        log(f"  {rgb_to_hex(c)}  {c[0]},{c[1]},{c[2]}")
    for query, entry in mapped.items():
        log(f"  {query} -> {rgb_to_hex(entry)}")


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    try:
        pixels = [parse_colour(c) for c in args.colours]
        if args.file is not None:
            pixels.extend(read_colour_file(args.file))
        queries = [parse_colour(c) for c in args.map]
    except OSError as e:
        error(f"cannot read {args.file}: {e}")
        return 2
    except ValueError as e:
        error(str(e))
        return 2

    if not args.json:
        print_config_line(
            "run",
            [
                ("Pixels", len(pixels)),
                ("Colours", args.colors),
                ("Depth", args.depth or "-"),
                ("Greyscale", args.greyscale),
            ],
            debug=False,
        )

    t_start = time.perf_counter()
    try:
        with _diagnostics(args.json):
            cmap = quantize(pixels, args.colors, args.depth, debug=args.debug)
            if args.greyscale:
                cmap.greyscale()
            mapped = {rgb_to_hex(q): cmap.map(q) for q in queries}
        _report(cmap.palette(), mapped, args.json)
    except QuantizeError as e:
        error(str(e))
        return 2

    if args.debug:
        with _diagnostics(args.json):
            debug_log(
                key_value_pairs_to_string(
                    [
                        ("Entries", len(cmap)),
                        ("Total", format_seconds_compact(time.perf_counter() - t_start)),
                    ]
                )
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
