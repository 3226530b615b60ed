"""
Core module - Interfaces, errors, and data types for sheetkit.
"""
from .interfaces import (
    # Enums
    MissingFramePolicy,

    # Data classes
    VideoDimensions,
    LayoutParams,
    SheetConfig,
    GeneratedSheet,
    SheetOutcome,

    # Abstract interfaces
    IMediaSource,
    IFrameConverter,
    ICanvas,
    ISheetGenerator,
)
from .errors import (
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

__all__ = [
    # Enums
    "MissingFramePolicy",

    # Data classes
    "VideoDimensions",
    "LayoutParams",
    "SheetConfig",
    "GeneratedSheet",
    "SheetOutcome",

    # Abstract interfaces
    "IMediaSource",
    "IFrameConverter",
    "ICanvas",
    "ISheetGenerator",

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
]
