"""
SheetKit - Contact sheet generator for video files.

Decodes frames at evenly spaced times, scales them into a thumbnail grid
and writes the grid, topped by a summary header, as a PNG image:
- File name, duration, resolution and size in the header
- Cell size derived from the source aspect ratio
- Multi-file runs where one broken file does not stop the rest

Example usage:
    from sheetkit import SheetGenerator, SheetConfig

    generator = SheetGenerator(SheetConfig(frame_width=200, row_count=4, col_count=6))
    sheet = generator.generate(Path("movie.mp4"))
    print(f"Wrote {sheet.output_path}")

    # Several files, failures are logged and reported per file
    from sheetkit import generate_sheets

    for outcome in generate_sheets([Path("a.mkv"), Path("b.avi")]):
        print(outcome.source_path, outcome.succeeded)
"""

from .sheet_generator import SheetGenerator, generate_sheets, generate_sheet_safely
from .core.interfaces import (
    MissingFramePolicy,
    VideoDimensions,
    LayoutParams,
    SheetConfig,
    GeneratedSheet,
    SheetOutcome,
)
from .core.errors import (
    SheetError,
    OpenError,
    NoVideoStreamError,
    UnsupportedCodecError,
    SeekError,
    NoMoreFrames,
    DecodeError,
    DurationError,
    EncodeError,
)
from .video import (
    MediaSource,
    FrameConverter,
    ScaledImageBuffer,
    LayoutCalculator,
    GridScheduler,
    build_header_text,
)
from .render import Canvas

__version__ = "1.0.0"

__all__ = [
    # Main facade
    "SheetGenerator",
    "generate_sheets",
    "generate_sheet_safely",

    # Data types
    "MissingFramePolicy",
    "VideoDimensions",
    "LayoutParams",
    "SheetConfig",
    "GeneratedSheet",
    "SheetOutcome",

    # Errors
    "SheetError",
    "OpenError",
    "NoVideoStreamError",
    "UnsupportedCodecError",
    "SeekError",
    "NoMoreFrames",
    "DecodeError",
    "DurationError",
    "EncodeError",

    # Components
    "MediaSource",
    "FrameConverter",
    "ScaledImageBuffer",
    "LayoutCalculator",
    "GridScheduler",
    "build_header_text",
    "Canvas",
]
