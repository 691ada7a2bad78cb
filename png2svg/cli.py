"""Command-line converter: PNG file or directory → SVG.

CLI:
    png2svg input.png                      # writes input.svg
    png2svg input.png -o out/icon.svg -l   # 4096 colors, short hex fills
    png2svg sprites/ -o svg/               # batch, mirrors the tree under svg/
    png2svg input.png -c -v                # pink merged rectangles, progress

Flags:
    -o OUTPUT   output file or directory; a path ending in "/" is created as a directory
    -p          single-pixel rectangles only
    -c          color expanded rectangles pink (turns -p off)
    -l          limit colors to a maximum of 4096 (#abcdef → #ace)
    -q, -z      deprecated aliases of -l
    -v          verbose (debug logging with progress)
    -V          print version and exit
    --config    YAML config (png2svg.v1 schema); flags override it

Exit status: 0 on success, 1 on any error.
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import VERSION_STRING
from .utils import fs, validators
from .utils.logging_config import get_logger, setup_logging
from .vectorizer import convert_directory, convert_file

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="png2svg",
        description="Convert PNG images to SVG made of solid rectangles",
    )
    parser.add_argument("input", nargs="?", help="PNG file or directory of PNG files")
    parser.add_argument("-o", dest="output", help="SVG output filename (or directory)")
    parser.add_argument("-p", dest="single_pixel", action="store_true",
                        help="use only single pixel rectangles")
    parser.add_argument("-c", dest="pink", action="store_true",
                        help="color expanded rectangles pink")
    parser.add_argument("-l", dest="limit", action="store_true",
                        help="limit colors to a maximum of 4096 (#abcdef -> #ace)")
    parser.add_argument("-q", dest="quantize", action="store_true",
                        help="deprecated (same as -l)")
    parser.add_argument("-z", dest="color_optimize", action="store_true",
                        help="deprecated (same as -l)")
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose")
    parser.add_argument("-V", dest="version", action="store_true", help="version")
    parser.add_argument("--config", help="YAML config file (png2svg.v1 schema)")
    parser.add_argument("--log-file", help="also write logs to this file")
    parser.add_argument("--json-logs", action="store_true",
                        help="write the log file as JSON lines")
    return parser


def resolve_options(
    args: argparse.Namespace,
    base: validators.ConversionOptions,
) -> validators.ConversionOptions:
    """Apply command-line flags on top of the config file options."""
    if args.quantize or args.color_optimize:
        logger.warning("-q and -z are deprecated, use -l")

    limit = args.limit or args.quantize or args.color_optimize
    overrides = {
        "single_pixel": True if args.single_pixel else None,
        "quantize": True if limit else None,
        "pink": True if args.pink else None,
    }

    pink = args.pink or base.pink
    if pink and (args.single_pixel or base.single_pixel):
        logger.warning("Pink coloring needs expanded rectangles, ignoring single-pixel mode")
        overrides["single_pixel"] = False

    return validators.merge_options(base, overrides)


def _names_directory(output: str) -> bool:
    """An existing directory, or a path written with a trailing separator."""
    separators = tuple(s for s in (os.sep, os.altsep) if s)
    return output.endswith(separators) or Path(output).is_dir()


def run(args: argparse.Namespace) -> int:
    """Convert the file or directory named on the command line."""
    cfg = (
        validators.load_converter_config(args.config)
        if args.config else validators.ConverterConfigV1()
    )

    setup_logging(
        log_level="DEBUG" if args.verbose else cfg.logging.log_level,
        log_file=args.log_file or cfg.logging.log_file,
        json=args.json_logs or cfg.logging.json_format,
        color=cfg.logging.color,
        max_bytes=cfg.logging.max_bytes,
        backup_count=cfg.logging.backup_count,
        quiet_libs=["PIL"],
        context={"app": "png2svg"},
    )

    options = resolve_options(args, cfg.options)
    logger.debug(f"Options: {options.model_dump()}")

    input_path = Path(args.input)
    if input_path.is_dir():
        output_dir = Path(args.output) if args.output else input_path
        written = convert_directory(input_path, output_dir, options)
        logger.info(f"Converted {len(written)} files into {output_dir}")
        return 0

    if not input_path.exists():
        raise FileNotFoundError(f"Input not found: {input_path}")

    if args.output is None:
        output_path = input_path.with_suffix(".svg")
    elif _names_directory(args.output):
        output_path = fs.ensure_dir(args.output) / input_path.with_suffix(".svg").name
    else:
        output_path = Path(args.output)

    convert_file(input_path, output_path, options)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(VERSION_STRING)
        return 0

    if args.input is None:
        parser.error("an input PNG filename is required")

    try:
        return run(args)
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
