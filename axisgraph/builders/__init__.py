from axisgraph.builders.base import DEFAULT_LEVELS, AxisBuilder, LevelTable, TickPlacement
from axisgraph.builders.clock import ClockTimeAxisBuilder, Spacing
from axisgraph.builders.linear import LinearAxisBuilder
from axisgraph.builders.log import LogAxisBuilder

__all__ = [
    "AxisBuilder",
    "ClockTimeAxisBuilder",
    "DEFAULT_LEVELS",
    "LevelTable",
    "LinearAxisBuilder",
    "LogAxisBuilder",
    "Spacing",
    "TickPlacement",
]
