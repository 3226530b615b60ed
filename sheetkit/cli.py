"""Command-line entry point for contact sheet generation."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.interfaces import MissingFramePolicy, SheetConfig
from .sheet_generator import SheetGenerator, generate_sheet_safely

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        stream=sys.stdout,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    # -h is taken by --frame-height, so help is registered by hand.
    parser = argparse.ArgumentParser(
        prog="sheetkit",
        description="Generate a contact sheet of thumbnails for each video file.",
        add_help=False,
    )
    parser.add_argument("inputs", type=Path, nargs="*", metavar="FILE", help="Video files")
    parser.add_argument("--help", action="help", help="Show this message and exit")
    parser.add_argument(
        "-w", "--frame-width",
        type=int,
        default=320,
        help="Thumbnail width, 0 derives it from the height (default: 320)",
    )
    parser.add_argument(
        "-h", "--frame-height",
        type=int,
        default=0,
        help="Thumbnail height, 0 derives it from the width (default: 0)",
    )
    parser.add_argument(
        "-r", "--row-count",
        type=int,
        default=4,
        help="Thumbnails per row (default: 4)",
    )
    parser.add_argument(
        "-c", "--col-count",
        type=int,
        default=10,
        help="Thumbnails per column (default: 10)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the PNG files (default: current directory)",
    )
    parser.add_argument(
        "--on-missing-frame",
        choices=[policy.value for policy in MissingFramePolicy],
        default=MissingFramePolicy.FAIL.value,
        help="Cell without a decodable frame: fail the file, skip the cell "
             "or reuse the previous frame (default: fail)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> SheetConfig:
    return SheetConfig(
        frame_width=args.frame_width,
        frame_height=args.frame_height,
        row_count=args.row_count,
        col_count=args.col_count,
        output_dir=args.output_dir,
        missing_frame_policy=MissingFramePolicy(args.on_missing_frame),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    generator = SheetGenerator(config_from_args(args))
    for path in args.inputs:
        logger.info(f"Generating screens for {path}")
        if not path.exists():
            logger.warning(f"File: {path} does not exist!")
            continue
        generate_sheet_safely(generator, path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
