"""
Media source backed by PyAV.
Owns the demuxer and decoder session for one input file: stream selection,
keyframe-anchored seeking and decoding of the next complete video frame.
"""
from fractions import Fraction
from pathlib import Path
from typing import Optional
import logging

import av
import av.logging
from av.error import FFmpegError, InvalidDataError

from ..core.errors import (
    OpenError,
    NoVideoStreamError,
    UnsupportedCodecError,
    SeekError,
    NoMoreFrames,
    DecodeError,
)
from ..core.interfaces import IMediaSource, VideoDimensions

logger = logging.getLogger(__name__)

_av_initialized = False


def initialize_av() -> None:
    """One-time process-wide setup of the decoding library. Safe to call repeatedly."""
    global _av_initialized
    if _av_initialized:
        return
    av.logging.set_level(av.logging.ERROR)
    _av_initialized = True
    logger.debug("PyAV initialized")


class MediaSource(IMediaSource):
    """
    Demux and decode session over a single video file.

    The first video stream is selected and its decoder opened at construction;
    construction fails if either step fails, and nothing is left open.
    Use as a context manager so the container is released on every exit path.
    """

    def __init__(self, input_path: Path):
        initialize_av()
        self.input_path = Path(input_path)
        self._container = self._open(self.input_path)
        try:
            self._stream = self._select_video_stream()
            self._codec_context = self._open_codec()
        except Exception:
            self.close()
            raise

        logger.debug(
            f"Opened {self.input_path.name}: stream #{self._stream.index} "
            f"{self._codec_context.name} {self.width}x{self.height} "
            f"{self.pix_fmt}, {self.duration_seconds}s"
        )

    def __enter__(self) -> "MediaSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @staticmethod
    def _open(input_path: Path):
        try:
            return av.open(str(input_path))
        except FFmpegError as e:
            raise OpenError(
                f"Cannot open '{input_path.name}': {e}",
                operation="avformat_open_input",
                code=getattr(e, "errno", None)
            ) from e

    def _select_video_stream(self):
        """First stream of video type wins."""
        for stream in self._container.streams:
            if stream.type == "video":
                return stream
        raise NoVideoStreamError(
            f"No video stream found in '{self.input_path.name}'",
            operation="find_video_stream"
        )

    def _open_codec(self):
        codec_context = self._stream.codec_context
        if codec_context is None:
            raise UnsupportedCodecError(
                f"Codec is not supported for stream #{self._stream.index}",
                operation="avcodec_find_decoder"
            )
        try:
            codec_context.open(strict=False)
        except FFmpegError as e:
            raise UnsupportedCodecError(
                f"Codec {codec_context.name} failed to open: {e}",
                operation="avcodec_open2",
                code=getattr(e, "errno", None)
            ) from e
        return codec_context

    @property
    def stream_index(self) -> int:
        return self._stream.index

    @property
    def width(self) -> int:
        return self._codec_context.width

    @property
    def height(self) -> int:
        return self._codec_context.height

    @property
    def dimensions(self) -> VideoDimensions:
        return VideoDimensions(width=self.width, height=self.height)

    @property
    def pix_fmt(self) -> Optional[str]:
        return self._codec_context.pix_fmt

    @property
    def has_duration(self) -> bool:
        return self._container.duration is not None

    @property
    def duration(self) -> Optional[float]:
        """Container duration in seconds, or None when unknown."""
        if not self.has_duration:
            return None
        return self._container.duration / av.time_base

    @property
    def duration_seconds(self) -> int:
        """Container duration truncated to whole seconds; 0 when unknown."""
        if not self.has_duration:
            return 0
        return int(self._container.duration // av.time_base)

    @property
    def file_size(self) -> int:
        return self.input_path.stat().st_size

    def seek(self, seconds: int) -> None:
        """
        Seek to the keyframe at or before `seconds` and flush the decoder.

        The target is expressed in the video stream's time base.
        """
        offset = int(Fraction(seconds) / self._stream.time_base)
        try:
            self._container.seek(
                offset, backward=True, any_frame=False, stream=self._stream
            )
        except FFmpegError as e:
            raise SeekError(
                f"Seek to {seconds}s failed in '{self.input_path.name}': {e}",
                operation="avformat_seek_file",
                code=getattr(e, "errno", None)
            ) from e
        self._codec_context.flush_buffers()
        logger.debug(f"Seeked to {seconds}s (pts {offset})")

    def decode_next_video_frame(self):
        """
        Decode the first complete video frame after the most recent seek.

        Packets of other streams are discarded by the demuxer. Packets with
        invalid data are skipped. Raises NoMoreFrames at end of stream and
        DecodeError when the demuxer or decoder fails in any other way.
        """
        try:
            for packet in self._container.demux(self._stream):
                try:
                    frames = packet.decode()
                except InvalidDataError as e:
                    logger.debug(f"Skipping undecodable packet at pts {packet.pts}: {e}")
                    continue
                except FFmpegError as e:
                    raise DecodeError(
                        f"Decoding failed in '{self.input_path.name}' at pts {packet.pts}: {e}",
                        operation="avcodec_send_packet",
                        code=getattr(e, "errno", None)
                    ) from e
                if frames:
                    return frames[0]
        except FFmpegError as e:
            raise DecodeError(
                f"Reading packets failed in '{self.input_path.name}': {e}",
                operation="av_read_frame",
                code=getattr(e, "errno", None)
            ) from e

        raise NoMoreFrames(
            f"End of stream reached in '{self.input_path.name}' before a complete frame",
            operation="av_read_frame"
        )

    def close(self) -> None:
        if self._container is not None:
            self._container.close()
            self._container = None
