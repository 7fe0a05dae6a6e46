from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol

from axisgraph.axis import Axis, Direction, TickMark
from axisgraph.coordinates import CoordinateTransform
from axisgraph.fonts import RGBA, FontParms, TextMetrics

LOGGER = logging.getLogger(__name__)


class RenderSurface(Protocol):
    def draw_line(self, x0: float, y0: float, x1: float, y1: float, *, color: RGBA, width: float) -> None:
        ...

    def draw_text(self, text: str, x: float, y: float, *, font: FontParms) -> None:
        ...

    def text_metrics(self, text: str, font: FontParms) -> TextMetrics:
        ...


@dataclass(frozen=True)
class DrawnTick:
    mark: TickMark
    x0: float
    y0: float
    x1: float
    y1: float
    label_x: float | None = None
    label_y: float | None = None
    label_font: FontParms | None = None


@dataclass(frozen=True)
class AxisDrawing:
    ticks: tuple[DrawnTick, ...]
    spine: tuple[float, float, float, float]
    label_extent: float
    label_position: tuple[float, float] | None = None


def tick_side(axis: Axis) -> tuple[float, float]:
    """Unit vector in surface space pointing from the spine toward the ticks."""
    ccw = axis.counterclockwise
    if axis.direction is Direction.VERTICAL_INCREASING:
        return (-1.0, 0.0) if ccw else (1.0, 0.0)
    if axis.direction is Direction.VERTICAL_DECREASING:
        return (1.0, 0.0) if ccw else (-1.0, 0.0)
    if axis.direction is Direction.HORIZONTAL_DECREASING:
        return (0.0, 1.0) if ccw else (0.0, -1.0)
    return (0.0, -1.0) if ccw else (0.0, 1.0)


def tick_label_font(font: FontParms, side: tuple[float, float], horizontal_labels: bool) -> FontParms:
    dx, dy = side
    if dx < 0:
        return font.placed("right", "center") if horizontal_labels else font.placed("center", "bottom", 90.0)
    if dx > 0:
        return font.placed("left", "center") if horizontal_labels else font.placed("center", "top", 90.0)
    if dy < 0:
        return font.placed("center", "bottom")
    return font.placed("center", "top")


def axis_label_font(font: FontParms, side: tuple[float, float]) -> FontParms:
    dx, dy = side
    if dx < 0:
        return font.placed("center", "bottom", 90.0)
    if dx > 0:
        return font.placed("center", "top", 90.0)
    if dy < 0:
        return font.placed("center", "bottom")
    return font.placed("center", "top")


def draw_axis(
    surface: RenderSurface,
    transform: CoordinateTransform,
    axis: Axis,
    *,
    font: FontParms | None = None,
) -> AxisDrawing:
    """Draw tick marks, tick labels, the spine and the axis label onto `surface`."""
    base_font = axis.font or font or FontParms()
    side = tick_side(axis)
    dx, dy = side
    label_font = tick_label_font(base_font, side, axis.tick_labels_horizontal)
    vertical = axis.direction.is_vertical
    half_width = axis.width / 2.0

    if not axis.tick_specs or axis.tick_increment == 0:
        LOGGER.warning("axis has no tick specs or a zero tick increment; drawing spine only")

    drawn: list[DrawnTick] = []
    extent = 0.0
    for mark in axis.iter_ticks():
        if vertical:
            px, py = transform.forward(axis.start_x, mark.coord)
        else:
            px, py = transform.forward(mark.coord, axis.start_y)
        tick_length = mark.spec.length * axis.width
        tick_width = mark.spec.width * axis.width
        x0 = px + dx * half_width
        y0 = py + dy * half_width
        x1 = x0 + dx * tick_length
        y1 = y0 + dy * tick_length
        surface.draw_line(x0, y0, x1, y1, color=axis.color, width=tick_width)

        spacing = 0.0
        lx = x1 + dx * mark.spec.string_offset
        ly = y1 + dy * mark.spec.string_offset
        if mark.label:
            metrics = surface.text_metrics(mark.label, label_font)
            spacing = metrics.advance if vertical and axis.tick_labels_horizontal else metrics.height
            surface.draw_text(mark.label, lx, ly, font=label_font)
        extent = max(extent, abs(dx * (lx - px) + dy * (ly - py)) + spacing)
        if mark.label:
            drawn.append(DrawnTick(mark, x0, y0, x1, y1, lx, ly, label_font))
        else:
            drawn.append(DrawnTick(mark, x0, y0, x1, y1))

    sx, sy = transform.forward(axis.start_x, axis.start_y)
    ex, ey = transform.forward(axis.end_x, axis.end_y)
    surface.draw_line(sx, sy, ex, ey, color=axis.color, width=axis.width)

    label_position = None
    if axis.label:
        gap = extent + axis.label_offset
        label_position = ((sx + ex) / 2.0 + dx * gap, (sy + ey) / 2.0 + dy * gap)
        surface.draw_text(axis.label, label_position[0], label_position[1], font=axis_label_font(base_font, side))

    LOGGER.debug("drew axis with %d ticks (%d labelled)", len(drawn), sum(1 for t in drawn if t.label_font))
    return AxisDrawing(ticks=tuple(drawn), spine=(sx, sy, ex, ey), label_extent=extent, label_position=label_position)
