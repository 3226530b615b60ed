"""
Raster canvas for contact sheets, built on Pillow.
Supports filled rectangles, multi-line text, scaled image blits and PNG export.
"""
from functools import lru_cache
from pathlib import Path
from typing import Tuple
import logging

from PIL import Image, ImageDraw, ImageFont

from ..core.errors import EncodeError
from ..core.interfaces import ICanvas

logger = logging.getLogger(__name__)

# Font files tried for generic family names before falling back to Pillow's default font.
FONT_ALIASES = {
    "sans": ["DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "Helvetica.ttc"],
    "serif": ["DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf"],
    "mono": ["DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf"],
}


@lru_cache(maxsize=16)
def load_font(family: str, size: int) -> ImageFont.FreeTypeFont:
    """Resolve a font family or file name to a TrueType font of the given size."""
    candidates = FONT_ALIASES.get(family.lower(), []) + [family]
    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug(f"Font '{family}' not found, using Pillow default")
    return ImageFont.load_default(size=size)


class Canvas(ICanvas):
    """
    RGBA drawing surface.

    Starts fully transparent; callers paint a background where they need one.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid canvas size {width}x{height}")
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.image)

    def __enter__(self) -> "Canvas":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    def draw_filled_rect(
        self,
        color: Tuple[int, int, int],
        x: int,
        y: int,
        width: int,
        height: int
    ) -> None:
        """Fill the rectangle and outline it with a 1px stroke of the same color."""
        self._draw.rectangle(
            [x, y, x + width - 1, y + height - 1],
            fill=tuple(color),
            outline=tuple(color),
            width=1,
        )

    def write_text(
        self,
        x: int,
        y: int,
        font_family: str,
        size: int,
        row_pitch: int,
        text: str,
        color: Tuple[int, int, int] = (0, 0, 0)
    ) -> None:
        """
        Draw text line by line, top- and left-anchored at (x, y).

        Each line's baseline sits row_pitch plus that line's own ascent below
        the previous baseline; its left edge is corrected by its own bearing.
        """
        if not text:
            return

        font = load_font(font_family, size)
        for line in text.splitlines():
            left, top, _, _ = self._draw.textbbox((0, 0), line, font=font, anchor="ls")
            y = y - top + row_pitch
            self._draw.text((x - left, y), line, fill=tuple(color), font=font, anchor="ls")

    def write_image(
        self,
        buffer,
        offset_x: int,
        offset_y: int,
        target_width: int,
        target_height: int
    ) -> None:
        """
        Paint a BGRA pixel buffer at the offset, scaled to the target size.

        The alpha byte of the buffer is ignored. The buffer is copied, never modified.
        """
        tile = Image.frombytes(
            "RGB", (buffer.width, buffer.height), buffer.data.tobytes(), "raw", "BGRX"
        )
        if tile.size != (target_width, target_height):
            tile = tile.resize((target_width, target_height), Image.Resampling.BILINEAR)
        self.image.paste(tile, (offset_x, offset_y))

    def export(self, output_path: Path) -> Path:
        output_path = Path(output_path)
        try:
            self.image.save(output_path, "PNG")
        except (OSError, ValueError) as e:
            raise EncodeError(
                f"Cannot write {output_path}: {e}",
                operation="write_png",
                code=getattr(e, "errno", None)
            ) from e
        logger.info(f"Sheet saved to {output_path}")
        return output_path

    def close(self) -> None:
        self.image.close()
