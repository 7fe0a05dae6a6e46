from axisgraph.axis import Axis, Direction, LogAxis, TickMark
from axisgraph.builders import (
    AxisBuilder,
    ClockTimeAxisBuilder,
    LevelTable,
    LinearAxisBuilder,
    LogAxisBuilder,
    Spacing,
)
from axisgraph.config import AxisConfig, load_axis_config, parse_axis_config
from axisgraph.coordinates import CoordinateTransform, Margins, Rect
from axisgraph.errors import AxisConfigError, AxisStateError, SingularTransformError
from axisgraph.fonts import FontParms, TextMetrics
from axisgraph.render import AxisDrawing, RenderSurface, draw_axis
from axisgraph.ticks import ClockTickSpec, TickSpec

__all__ = [
    "Axis",
    "AxisBuilder",
    "AxisConfig",
    "AxisConfigError",
    "AxisDrawing",
    "AxisStateError",
    "ClockTickSpec",
    "ClockTimeAxisBuilder",
    "CoordinateTransform",
    "Direction",
    "FontParms",
    "LevelTable",
    "LinearAxisBuilder",
    "LogAxis",
    "LogAxisBuilder",
    "Margins",
    "Rect",
    "RenderSurface",
    "SingularTransformError",
    "Spacing",
    "TextMetrics",
    "TickMark",
    "TickSpec",
    "draw_axis",
    "load_axis_config",
    "parse_axis_config",
]
