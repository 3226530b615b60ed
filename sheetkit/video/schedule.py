"""
Grid geometry and timestamp scheduling for contact sheets.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple
import logging

from ..core.errors import DurationError
from ..core.interfaces import LayoutParams, SheetConfig

logger = logging.getLogger(__name__)


class LayoutCalculator:
    """Derives cell size and sheet geometry from the source resolution."""

    @staticmethod
    def derive_frame_size(
        native_width: int,
        native_height: int,
        frame_width: int,
        frame_height: int
    ) -> Tuple[int, int]:
        """
        Resolve the cell size.

        Both zero uses the native size, one zero is derived from the other
        keeping the source aspect ratio (truncated), both given are kept as is.
        """
        if frame_width < 0 or frame_height < 0:
            raise ValueError(f"Frame size cannot be negative: {frame_width}x{frame_height}")

        if frame_width == 0 and frame_height == 0:
            return native_width, native_height

        if native_width <= 0 or native_height <= 0:
            raise ValueError(f"Cannot derive frame size from source {native_width}x{native_height}")

        if frame_width == 0:
            frame_width = int(native_width / native_height * frame_height)
        elif frame_height == 0:
            frame_height = int(native_height / native_width * frame_width)

        if frame_width == 0 or frame_height == 0:
            raise ValueError(
                f"Derived frame size {frame_width}x{frame_height} is empty "
                f"for source {native_width}x{native_height}"
            )
        return frame_width, frame_height

    def calculate(
        self,
        native_width: int,
        native_height: int,
        config: SheetConfig
    ) -> LayoutParams:
        if config.row_count < 1 or config.col_count < 1:
            raise ValueError(
                f"Grid must have at least one row and column, got "
                f"{config.row_count}x{config.col_count}"
            )

        frame_width, frame_height = self.derive_frame_size(
            native_width, native_height, config.frame_width, config.frame_height
        )
        return LayoutParams(
            frame_width=frame_width,
            frame_height=frame_height,
            row_count=config.row_count,
            col_count=config.col_count,
            header_height=config.header_height,
        )


@dataclass
class GridCell:
    """One cell of the grid and the time it is sampled at."""
    index: int
    row: int
    col: int
    timestamp: int


@dataclass
class GridSchedule:
    """Cells in sampling order with strictly increasing timestamps."""
    step_seconds: int
    cells: List[GridCell] = field(default_factory=list)

    @property
    def timestamps(self) -> List[int]:
        return [cell.timestamp for cell in self.cells]

    def __iter__(self) -> Iterator[GridCell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


class GridScheduler:
    """
    Spreads sample times evenly over the video.

    The duration is split into cell_count + 2 steps; sampling starts after the
    first step and stops two steps before the end, keeping clear of leaders
    and end credits. Cells are enumerated column by column.
    """

    def schedule(self, duration_seconds: int, row_count: int, col_count: int) -> GridSchedule:
        cell_count = row_count * col_count
        step = duration_seconds // (cell_count + 2)

        if step <= 0:
            raise DurationError(
                f"Duration of {duration_seconds}s is too short for {cell_count} cells",
                operation="schedule"
            )

        cells = []
        for col in range(col_count):
            for row in range(row_count):
                index = col * row_count + row
                cells.append(GridCell(
                    index=index,
                    row=row,
                    col=col,
                    timestamp=step * (index + 1),
                ))

        logger.debug(f"Scheduled {cell_count} cells every {step}s")
        return GridSchedule(step_seconds=step, cells=cells)
