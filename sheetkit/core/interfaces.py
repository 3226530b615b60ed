"""
Abstract interfaces following Interface Segregation Principle (SOLID).
Defines contracts and data types for all sheetkit components.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class MissingFramePolicy(Enum):
    """What to do with a grid cell whose seek ends without a decodable frame."""
    FAIL = "fail"
    SKIP = "skip"
    REUSE = "reuse"


@dataclass
class VideoDimensions:
    """Native frame size of a video stream."""
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height > 0 else 0

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass
class LayoutParams:
    """Cell size, grid shape and header strip of a contact sheet."""
    frame_width: int
    frame_height: int
    row_count: int
    col_count: int
    header_height: int = 120

    @property
    def cell_count(self) -> int:
        return self.row_count * self.col_count

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (
            self.frame_width * self.row_count,
            self.frame_height * self.col_count + self.header_height,
        )

    def cell_origin(self, row: int, col: int) -> Tuple[int, int]:
        """Top-left canvas position of the cell at (row, col)."""
        return row * self.frame_width, col * self.frame_height + self.header_height


@dataclass
class SheetConfig:
    """Configuration for contact sheet generation."""
    frame_width: int = 320
    frame_height: int = 0
    row_count: int = 4
    col_count: int = 10
    header_height: int = 120
    header_color: Tuple[int, int, int] = (255, 255, 240)
    text_color: Tuple[int, int, int] = (0, 0, 0)
    font_family: str = "Sans"
    font_size: int = 20
    row_pitch: int = 10
    text_offset: Tuple[int, int] = (10, 0)
    output_dir: Path = field(default_factory=lambda: Path("."))
    missing_frame_policy: MissingFramePolicy = MissingFramePolicy.FAIL


@dataclass
class GeneratedSheet:
    """Result of a successful generation run for one video."""
    source_path: Path
    output_path: Path
    layout: LayoutParams
    timestamps: List[int]
    missing_cells: List[int] = field(default_factory=list)


@dataclass
class SheetOutcome:
    """Per-file outcome of a multi-file run."""
    source_path: Path
    sheet: Optional[GeneratedSheet] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.sheet is not None


class IMediaSource(ABC):
    """Interface for a demux and decode session over one video file."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Native frame width."""
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        """Native frame height."""
        pass

    @property
    @abstractmethod
    def duration_seconds(self) -> int:
        """Container duration in whole seconds, 0 when unknown."""
        pass

    @abstractmethod
    def seek(self, seconds: int) -> None:
        """Seek to the keyframe at or before the given time and flush the decoder."""
        pass

    @abstractmethod
    def decode_next_video_frame(self):
        """Return the first complete video frame after the last seek."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release container and codec resources."""
        pass


class IFrameConverter(ABC):
    """Interface for scaling decoded frames into a fixed-size pixel buffer."""

    @abstractmethod
    def fill(self, frame) -> None:
        """Convert the frame into the backing buffer in place."""
        pass


class ICanvas(ABC):
    """Interface for the raster surface a sheet is painted on."""

    @abstractmethod
    def draw_filled_rect(
        self, color: Tuple[int, int, int], x: int, y: int, width: int, height: int
    ) -> None:
        """Paint a filled, outlined rectangle."""
        pass

    @abstractmethod
    def write_text(
        self, x: int, y: int, font_family: str, size: int, row_pitch: int, text: str
    ) -> None:
        """Draw newline-delimited text growing downward from (x, y)."""
        pass

    @abstractmethod
    def write_image(
        self, buffer, offset_x: int, offset_y: int, target_width: int, target_height: int
    ) -> None:
        """Paint a pixel buffer scaled to the target size at the offset."""
        pass

    @abstractmethod
    def export(self, output_path: Path) -> Path:
        """Encode the surface to an image file."""
        pass


class ISheetGenerator(ABC):
    """Interface for contact sheet generation."""

    @abstractmethod
    def generate(self, video_path: Path) -> GeneratedSheet:
        """Generate a contact sheet for one video."""
        pass
