"""
Frame conversion into fixed-size pixel buffers.
Binds one scaling context per run and reuses one backing buffer for every cell.
"""
from typing import Optional
import logging

import numpy as np
from av.error import FFmpegError
from av.video.reformatter import VideoReformatter

from ..core.errors import DecodeError
from ..core.interfaces import IFrameConverter

logger = logging.getLogger(__name__)

# Packed 32-bit pixels, B,G,R,A in memory (little-endian ARGB).
OUTPUT_PIX_FMT = "bgra"
INTERPOLATION = "POINT"


class ScaledImageBuffer:
    """Fixed-size BGRA pixel buffer. Width and height never change."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        self._width = width
        self._height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the pixels."""
        view = self.pixels.view()
        view.flags.writeable = False
        return view


class FrameConverter(IFrameConverter):
    """
    Scales and color-converts decoded frames into a ScaledImageBuffer.

    Nearest-neighbour resampling keeps thumbnail extraction fast.
    """

    def __init__(
        self,
        native_width: int,
        native_height: int,
        native_pix_fmt: Optional[str],
        target_width: int,
        target_height: int
    ):
        self.native_width = native_width
        self.native_height = native_height
        self.native_pix_fmt = native_pix_fmt
        self.buffer = ScaledImageBuffer(target_width, target_height)
        self.filled = False
        self._reformatter = VideoReformatter()

        logger.debug(
            f"Scaling {native_width}x{native_height} {native_pix_fmt} -> "
            f"{target_width}x{target_height} {OUTPUT_PIX_FMT}"
        )

    def __enter__(self) -> "FrameConverter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def data(self) -> np.ndarray:
        return self.buffer.data

    def fill(self, frame) -> None:
        """
        Convert `frame` into the backing buffer. The frame is not retained.

        Only the backing buffer is reused across calls; PyAV allocates the
        intermediate converted frame on each call.
        """
        try:
            converted = self._reformatter.reformat(
                frame,
                width=self.buffer.width,
                height=self.buffer.height,
                format=OUTPUT_PIX_FMT,
                interpolation=INTERPOLATION,
            )
            pixels = converted.to_ndarray()
        except FFmpegError as e:
            raise DecodeError(
                f"Scaling {self.native_width}x{self.native_height} frame failed: {e}",
                operation="sws_scale",
                code=getattr(e, "errno", None)
            ) from e
        np.copyto(self.buffer.pixels, pixels)
        self.filled = True

    def close(self) -> None:
        self._reformatter = None
