"""
Video module for sheetkit.
Provides decoding, frame conversion, scheduling and header text.
"""
from .source import MediaSource, initialize_av
from .converter import FrameConverter, ScaledImageBuffer
from .schedule import (
    LayoutCalculator,
    GridScheduler,
    GridSchedule,
    GridCell,
)
from .header import (
    format_duration,
    format_size,
    format_file_size,
    build_header_text,
)

__all__ = [
    # Decoding
    "MediaSource",
    "initialize_av",

    # Conversion
    "FrameConverter",
    "ScaledImageBuffer",

    # Layout and scheduling
    "LayoutCalculator",
    "GridScheduler",
    "GridSchedule",
    "GridCell",

    # Header
    "format_duration",
    "format_size",
    "format_file_size",
    "build_header_text",
]
