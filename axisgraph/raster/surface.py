from __future__ import annotations

import numpy as np
from PIL import Image

from axisgraph.fonts import RGBA, FontParms, TextMetrics
from axisgraph.raster.canvas import WHITE, new_canvas
from axisgraph.raster.draw_lines import draw_segment
from axisgraph.raster.draw_text import draw_text, text_metrics


class RasterSurface:
    """RGBA pixel surface that axes can be drawn onto."""

    def __init__(self, width: int, height: int, background: RGBA = WHITE) -> None:
        self._canvas = new_canvas(width, height, background)

    @property
    def width(self) -> int:
        return int(self._canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self._canvas.shape[0])

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, *, color: RGBA, width: float) -> None:
        if width <= 0:
            return
        draw_segment(self._canvas, x0, y0, x1, y1, color, width)

    def draw_text(self, text: str, x: float, y: float, *, font: FontParms) -> None:
        draw_text(self._canvas, x, y, text, font)

    def text_metrics(self, text: str, font: FontParms) -> TextMetrics:
        return text_metrics(text, font)

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)
