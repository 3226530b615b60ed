"""
Pytest configuration and fixtures for SheetKit tests.
"""
import pytest
import tempfile
import shutil
from fractions import Fraction
from pathlib import Path

import av
import numpy as np


def make_frame(color, width: int = 64, height: int = 48) -> av.VideoFrame:
    """Solid-color RGB frame."""
    array = np.zeros((height, width, 3), dtype=np.uint8)
    array[:, :] = color
    return av.VideoFrame.from_ndarray(array, format="rgb24")


def encode_video(
    path: Path,
    seconds: int,
    width: int = 640,
    height: int = 480,
    fps: int = 1
) -> Path:
    """Encode a synthetic MPEG-4 clip whose color changes every frame."""
    container = av.open(str(path), mode="w")
    stream = container.add_stream("mpeg4", rate=fps)
    stream.width = width
    stream.height = height
    stream.pix_fmt = "yuv420p"
    stream.codec_context.gop_size = 2

    for i in range(seconds * fps):
        frame = make_frame(((i * 4) % 256, 128, 255 - (i * 4) % 256), width, height)
        frame.pts = i
        frame.time_base = Fraction(1, fps)
        container.mux(stream.encode(frame))
    container.mux(stream.encode(None))
    container.close()
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="sheetkit_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_video(temp_dir) -> Path:
    """60 second 640x480 clip."""
    return encode_video(temp_dir / "sample.mp4", seconds=60)


@pytest.fixture
def short_video(temp_dir) -> Path:
    """3 second clip, too short for most grids."""
    return encode_video(temp_dir / "short.mp4", seconds=3, width=64, height=48)


@pytest.fixture
def text_file(temp_dir) -> Path:
    """A file that is not a media container."""
    path = temp_dir / "notes.mp4"
    path.write_text("this is not a video\n" * 20)
    return path


@pytest.fixture
def frame_factory():
    """Build solid-color decoded frames."""
    return make_frame
