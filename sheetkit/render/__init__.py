from .canvas import Canvas, load_font

__all__ = ["Canvas", "load_font"]
