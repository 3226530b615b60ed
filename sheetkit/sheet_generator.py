"""
SheetGenerator - Main facade for contact sheet generation.
Orchestrates decoding, frame conversion, grid composition and header rendering.
Follows Facade Pattern for simplified API.
"""
from pathlib import Path
from typing import Iterable, List, Optional
import logging

from .core.errors import NoMoreFrames, SheetError
from .core.interfaces import (
    ISheetGenerator,
    GeneratedSheet,
    LayoutParams,
    MissingFramePolicy,
    SheetConfig,
    SheetOutcome,
)
from .render.canvas import Canvas
from .video.converter import FrameConverter
from .video.header import build_header_text
from .video.schedule import GridSchedule, GridScheduler, LayoutCalculator
from .video.source import MediaSource

logger = logging.getLogger(__name__)


class SheetGenerator(ISheetGenerator):
    """
    Generates a contact sheet (thumbnail grid plus text header) for a video.

    Example:
        generator = SheetGenerator(SheetConfig(row_count=3, col_count=5))
        sheet = generator.generate(Path("movie.mkv"))
        print(sheet.output_path)  # movie.png
    """

    def __init__(self, config: Optional[SheetConfig] = None):
        self.config = config or SheetConfig()
        self.layout_calculator = LayoutCalculator()
        self.scheduler = GridScheduler()

    def generate(self, video_path: Path) -> GeneratedSheet:
        """
        Generate the sheet and write it as `<stem>.png` into the output directory.

        Args:
            video_path: Path to the video file

        Returns:
            GeneratedSheet describing the written image
        """
        video_path = Path(video_path)
        logger.info(f"Generating screenshot for {video_path}")

        with MediaSource(video_path) as source:
            layout = self.layout_calculator.calculate(source.width, source.height, self.config)

            with FrameConverter(
                source.width, source.height, source.pix_fmt,
                layout.frame_width, layout.frame_height
            ) as converter:
                schedule = self.scheduler.schedule(
                    source.duration_seconds, layout.row_count, layout.col_count
                )

                with Canvas(*layout.canvas_size) as canvas:
                    missing = self._fill_cells(source, converter, canvas, layout, schedule)

                    header = build_header_text(
                        video_path.name,
                        source.width,
                        source.height,
                        source.file_size,
                        source.duration,
                    )
                    self._draw_header(canvas, layout, header)

                    output_path = canvas.export(self._output_path(video_path))

        return GeneratedSheet(
            source_path=video_path,
            output_path=output_path,
            layout=layout,
            timestamps=schedule.timestamps,
            missing_cells=missing,
        )

    def _fill_cells(
        self,
        source: MediaSource,
        converter: FrameConverter,
        canvas: Canvas,
        layout: LayoutParams,
        schedule: GridSchedule
    ) -> List[int]:
        """Decode one frame per cell and paint it. Returns indices of cells without a frame."""
        policy = self.config.missing_frame_policy
        missing = []

        for cell in schedule:
            source.seek(cell.timestamp)
            try:
                frame = source.decode_next_video_frame()
            except NoMoreFrames:
                if policy is MissingFramePolicy.FAIL:
                    raise
                missing.append(cell.index)
                logger.warning(
                    f"No frame at {cell.timestamp}s for cell {cell.index}, "
                    f"policy={policy.value}"
                )
                if policy is MissingFramePolicy.SKIP or not converter.filled:
                    continue
            else:
                converter.fill(frame)

            x, y = layout.cell_origin(cell.row, cell.col)
            canvas.write_image(
                converter.buffer, x, y, layout.frame_width, layout.frame_height
            )
            logger.debug(f"Cell {cell.index} at ({x}, {y}) from {cell.timestamp}s")

        return missing

    def _draw_header(self, canvas: Canvas, layout: LayoutParams, text: str) -> None:
        canvas_width, _ = layout.canvas_size
        canvas.draw_filled_rect(
            self.config.header_color, 0, 0, canvas_width, layout.header_height
        )
        x, y = self.config.text_offset
        canvas.write_text(
            x, y,
            self.config.font_family,
            self.config.font_size,
            self.config.row_pitch,
            text,
            color=self.config.text_color,
        )

    def _output_path(self, video_path: Path) -> Path:
        return Path(self.config.output_dir) / f"{video_path.stem}.png"


def generate_sheets(
    video_paths: Iterable[Path],
    config: Optional[SheetConfig] = None
) -> List[SheetOutcome]:
    """
    Generate sheets for several videos one after another.

    A failure on one file is logged and recorded in its outcome; the
    remaining files are still processed.
    """
    generator = SheetGenerator(config)
    return [generate_sheet_safely(generator, Path(video_path)) for video_path in video_paths]


def generate_sheet_safely(generator: SheetGenerator, video_path: Path) -> SheetOutcome:
    """Run one generation, turning a failure into a logged outcome."""
    try:
        sheet = generator.generate(video_path)
    except (SheetError, OSError, ValueError) as e:
        logger.error(f"Failed to generate sheet for {video_path}: {e}")
        return SheetOutcome(source_path=video_path, error=e)
    return SheetOutcome(source_path=video_path, sheet=sheet)
