"""
Error taxonomy for contact sheet generation.
Every error carries the failing operation and the native error code when known.
"""
from typing import Optional


class SheetError(RuntimeError):
    """Base class for failures raised while generating a sheet for one file."""
    
    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        code: Optional[int] = None
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.code = code
    
    def __str__(self) -> str:
        details = []
        if self.operation:
            details.append(f"operation={self.operation}")
        if self.code is not None:
            details.append(f"code={self.code}")
        if details:
            return f"{self.message} [{', '.join(details)}]"
        return self.message


class OpenError(SheetError):
    """Container cannot be opened or its stream info cannot be read."""


class NoVideoStreamError(SheetError):
    """Container holds no stream of video type."""


class UnsupportedCodecError(SheetError):
    """No decoder is available for the video stream, or it failed to open."""


class SeekError(SheetError):
    """Seek request rejected by the demuxer."""


class NoMoreFrames(SheetError):
    """End of stream reached before a complete frame was decoded."""


class DecodeError(SheetError):
    """Decoder or scaler failed on stream data."""


class DurationError(SheetError):
    """Duration is unknown or too short to place every grid cell."""


class EncodeError(SheetError):
    """Final image could not be written."""
