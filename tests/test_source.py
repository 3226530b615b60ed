"""
Tests for the PyAV-backed media source.

Conditions a real file cannot easily produce (no video stream, seek
failure, end of stream) are driven through a mocked container.
"""
import pytest
from fractions import Fraction
from unittest.mock import Mock, patch

from av.error import ExternalError, FFmpegError, InvalidDataError

from sheetkit.core.errors import (
    DecodeError,
    NoMoreFrames,
    NoVideoStreamError,
    OpenError,
    SeekError,
    UnsupportedCodecError,
)
from sheetkit.video import source as source_module
from sheetkit.video.source import MediaSource, initialize_av


def make_container(streams=None, duration=60_000_000):
    video = Mock()
    video.type = "video"
    video.index = 0
    video.time_base = Fraction(1, 1000)
    video.codec_context.width = 640
    video.codec_context.height = 480
    video.codec_context.pix_fmt = "yuv420p"

    container = Mock()
    container.streams = streams if streams is not None else [video]
    container.duration = duration
    return container, video


class TestInitializeAv:

    def test_idempotent(self):
        initialize_av()
        initialize_av()

        assert source_module._av_initialized is True


class TestMediaSourceMocked:
    """MediaSource behaviour against a mocked container."""

    def test_opens_first_video_stream(self, temp_dir):
        audio = Mock()
        audio.type = "audio"
        container, video = make_container()
        container.streams = [audio, video]

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        assert source.stream_index == 0
        assert source.width == 640
        assert source.height == 480
        assert source.pix_fmt == "yuv420p"
        video.codec_context.open.assert_called_once_with(strict=False)

    def test_duration(self, temp_dir):
        container, _ = make_container(duration=61_900_000)

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        assert source.duration_seconds == 61
        assert source.duration == pytest.approx(61.9)
        assert source.has_duration is True

    def test_unknown_duration(self, temp_dir):
        container, _ = make_container(duration=None)

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        assert source.duration_seconds == 0
        assert source.duration is None
        assert source.has_duration is False

    def test_no_video_stream_raises_and_closes(self, temp_dir):
        audio = Mock()
        audio.type = "audio"
        container, _ = make_container(streams=[audio])

        with patch("sheetkit.video.source.av.open", return_value=container):
            with pytest.raises(NoVideoStreamError, match="No video stream"):
                MediaSource(temp_dir / "song.mp3")

        container.close.assert_called_once()

    def test_missing_decoder_raises(self, temp_dir):
        container, video = make_container()
        video.codec_context = None

        with patch("sheetkit.video.source.av.open", return_value=container):
            with pytest.raises(UnsupportedCodecError):
                MediaSource(temp_dir / "movie.mp4")

        container.close.assert_called_once()

    def test_decoder_open_failure_raises(self, temp_dir):
        container, video = make_container()
        video.codec_context.open.side_effect = FFmpegError(-22, "Invalid argument")

        with patch("sheetkit.video.source.av.open", return_value=container):
            with pytest.raises(UnsupportedCodecError) as exc_info:
                MediaSource(temp_dir / "movie.mp4")

        assert exc_info.value.operation == "avcodec_open2"

    def test_seek_converts_to_stream_time_base_and_flushes(self, temp_dir):
        container, video = make_container()

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")
        source.seek(10)

        container.seek.assert_called_once_with(
            10000, backward=True, any_frame=False, stream=video
        )
        video.codec_context.flush_buffers.assert_called_once()

    def test_seek_failure_raises(self, temp_dir):
        container, _ = make_container()
        container.seek.side_effect = FFmpegError(-1, "Operation not permitted")

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        with pytest.raises(SeekError) as exc_info:
            source.seek(20)

        assert exc_info.value.operation == "avformat_seek_file"

    def test_decode_returns_first_complete_frame(self, temp_dir):
        container, video = make_container()
        partial = Mock()
        partial.decode.return_value = []
        complete = Mock()
        first, second = Mock(), Mock()
        complete.decode.return_value = [first, second]
        container.demux.return_value = iter([partial, complete])

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        assert source.decode_next_video_frame() is first
        container.demux.assert_called_once_with(video)

    def test_decode_end_of_stream_raises(self, temp_dir):
        container, _ = make_container()
        empty = Mock()
        empty.decode.return_value = []
        container.demux.return_value = iter([empty])

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        with pytest.raises(NoMoreFrames):
            source.decode_next_video_frame()

    def test_decode_skips_invalid_packets(self, temp_dir):
        container, _ = make_container()
        damaged = Mock()
        damaged.decode.side_effect = InvalidDataError(-1094995529, "Invalid data found when processing input")
        good = Mock()
        frame = Mock()
        good.decode.return_value = [frame]
        container.demux.return_value = iter([damaged, good])

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        assert source.decode_next_video_frame() is frame

    def test_decoder_failure_raises_decode_error(self, temp_dir):
        container, _ = make_container()
        broken = Mock()
        broken.pts = 4000
        broken.decode.side_effect = ExternalError(-542398533, "Generic error in an external library")
        container.demux.return_value = iter([broken])

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        with pytest.raises(DecodeError) as exc_info:
            source.decode_next_video_frame()

        assert exc_info.value.operation == "avcodec_send_packet"
        assert exc_info.value.code == -542398533
        assert isinstance(exc_info.value.__cause__, ExternalError)

    def test_demuxer_failure_raises_decode_error(self, temp_dir):
        container, _ = make_container()

        def packets():
            raise ExternalError(-542398533, "Generic error in an external library")
            yield

        container.demux.return_value = packets()

        with patch("sheetkit.video.source.av.open", return_value=container):
            source = MediaSource(temp_dir / "movie.mp4")

        with pytest.raises(DecodeError) as exc_info:
            source.decode_next_video_frame()

        assert exc_info.value.operation == "av_read_frame"

    def test_close_is_idempotent(self, temp_dir):
        container, _ = make_container()

        with patch("sheetkit.video.source.av.open", return_value=container):
            with MediaSource(temp_dir / "movie.mp4") as source:
                pass
        source.close()

        container.close.assert_called_once()


class TestMediaSourceFiles:
    """MediaSource against real files."""

    def test_not_a_video_raises_open_error(self, text_file):
        with pytest.raises(OpenError) as exc_info:
            MediaSource(text_file)

        assert exc_info.value.operation == "avformat_open_input"

    def test_missing_file_raises_open_error(self, temp_dir):
        with pytest.raises(OpenError):
            MediaSource(temp_dir / "nope.mp4")

    def test_reads_sample_video(self, sample_video):
        with MediaSource(sample_video) as source:
            assert source.dimensions.width == 640
            assert source.dimensions.height == 480
            assert 59 <= source.duration_seconds <= 60
            assert source.file_size > 0

    def test_seek_and_decode(self, sample_video):
        with MediaSource(sample_video) as source:
            for seconds in (10, 20, 5, 40):
                source.seek(seconds)
                frame = source.decode_next_video_frame()

                assert frame.width == 640
                assert frame.height == 480
