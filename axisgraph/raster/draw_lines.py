from __future__ import annotations

import numpy as np

from axisgraph.fonts import RGBA
from axisgraph.raster.canvas import draw_pixel, fill_rect


def draw_segment(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0) -> None:
    """Stroke a segment; axis-aligned segments become filled rectangles."""
    brush = max(1, int(round(width)))
    ix0, iy0, ix1, iy1 = (int(round(v)) for v in (x0, y0, x1, y1))
    lo = (brush - 1) // 2
    hi = brush - 1 - lo
    if iy0 == iy1:
        fill_rect(dst, min(ix0, ix1), iy0 - lo, max(ix0, ix1), iy0 + hi, color)
        return
    if ix0 == ix1:
        fill_rect(dst, ix0 - lo, min(iy0, iy1), ix0 + hi, max(iy0, iy1), color)
        return
    _draw_line_segment(dst, ix0, iy0, ix1, iy1, color=color, width=brush)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    if radius == 0:
        draw_pixel(dst, x, y, color)
        return
    fill_rect(dst, x - radius, y - radius, x + radius, y + radius, color)
