"""Command line entry point for lgtm-stamp."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import load_config
from .const import AUTO, DEFAULT_COLOR, DEFAULT_FONT_SIZE, DEFAULT_TEXT, VERSION
from .exceptions import StampError
from .imagegen import AggregationPolicy, Stamper, parse_coordinate

_LOGGER = logging.getLogger(__name__)

# Options that override config values, only present in the namespace when given
_OVERRIDES = ("text", "color", "size", "font", "x", "y", "policy", "antialias")


def _coordinate(value: str) -> int | None:
    try:
        return parse_coordinate(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _positive_int(value: str) -> int:
    try:
        size = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid font size {value!r}") from None
    if size <= 0:
        raise argparse.ArgumentTypeError(f"font size must be positive, got {size}")
    return size


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="lgtm-stamp",
        description="Stamp a line of text onto an image.",
    )
    parser.add_argument(
        "-t", "--text",
        default=argparse.SUPPRESS,
        help=f"text to draw (default: {DEFAULT_TEXT})",
    )
    parser.add_argument(
        "-x",
        type=_coordinate,
        default=argparse.SUPPRESS,
        help=f"x coordinate, '{AUTO}' to center or a signed offset such as +10 or -10 (default: {AUTO})",
    )
    parser.add_argument(
        "-y",
        type=_coordinate,
        default=argparse.SUPPRESS,
        help=f"y coordinate, '{AUTO}' to center or a signed offset such as +10 or -10 (default: {AUTO})",
    )
    parser.add_argument(
        "-c", "--color",
        default=argparse.SUPPRESS,
        help=f"text color: #RRGGBB, #RGB or a color name (default: {DEFAULT_COLOR})",
    )
    parser.add_argument(
        "-s", "--size",
        type=_positive_int,
        default=argparse.SUPPRESS,
        help=f"font size in pixels (default: {DEFAULT_FONT_SIZE})",
    )
    parser.add_argument(
        "-f", "--font",
        default=argparse.SUPPRESS,
        help="OTF/TTF font file",
    )
    parser.add_argument(
        "-i", "--image",
        required=True,
        help="background image file",
    )
    parser.add_argument(
        "-o", "--output",
        help="output image file, its extension selects the format (default: <image>_out.<ext>)",
    )
    parser.add_argument(
        "--policy",
        type=AggregationPolicy,
        choices=list(AggregationPolicy),
        default=argparse.SUPPRESS,
        help="glyph aggregation used to center the text (default: bbox)",
    )
    parser.add_argument(
        "--no-antialias",
        dest="antialias",
        action="store_false",
        default=argparse.SUPPRESS,
        help="draw glyphs as a hard 1-bit stamp",
    )
    parser.add_argument(
        "--config",
        help="YAML config file with default options",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="log pipeline details")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def _setup_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the stamp pipeline from command line arguments.

    Returns:
        int: Process exit status, 0 on success and 1 on any stamp error
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.quiet)

    overrides = {key: value for key, value in vars(args).items() if key in _OVERRIDES}

    try:
        config = load_config(args.config).replace(**overrides)
        output = Stamper(config).stamp(args.image, args.output)
    except StampError as err:
        print(f"{parser.prog}: error: {err}", file=sys.stderr)
        return 1

    _LOGGER.info("Wrote %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
