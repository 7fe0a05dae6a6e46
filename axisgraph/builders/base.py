from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import math
from typing import Sequence, TypeVar

from axisgraph.axis import Axis, Direction
from axisgraph.coordinates import CoordinateTransform
from axisgraph.errors import AxisConfigError
from axisgraph.fonts import RGBA, FontParms, validate_color
from axisgraph.ticks import TickSpec

LOGGER = logging.getLogger(__name__)

DEFAULT_WIDTH = 1.5
DEFAULT_LABEL_SEPARATION = 5.0
DEFAULT_TICK_SCALING_FACTOR = 1.0

B = TypeVar("B", bound="AxisBuilder")


@dataclass(frozen=True)
class LevelTable:
    """Per-level tick geometry: level 0 is the most prominent tick."""

    lengths: tuple[float, ...]
    widths: tuple[float, ...]
    label_gaps: tuple[float, ...]

    def __post_init__(self) -> None:
        n = len(self.lengths)
        if n == 0:
            raise AxisConfigError("level table must have at least one level")
        if len(self.widths) != n or len(self.label_gaps) != n:
            raise AxisConfigError("level lengths, widths and label_gaps must have the same size")
        for values in (self.lengths, self.widths, self.label_gaps):
            if any(v < 0 for v in values):
                raise AxisConfigError("level table entries must be >= 0")

    @property
    def size(self) -> int:
        return len(self.lengths)


DEFAULT_LEVELS = LevelTable(
    lengths=(10.0, 7.5, 5.0, 3.0, 1.5),
    widths=(1.2, 1.0, 0.8, 0.65, 0.5),
    label_gaps=(5.0, 4.0, 3.5, 3.0, 3.0),
)


@dataclass(frozen=True)
class TickPlacement:
    """Builder-independent tick rule: which level, and which indices."""

    level: int
    mod: int
    mod_test: int = 0
    limit: int = -1
    format: str | None = None


class AxisBuilder(ABC):
    """Collects tick rules and appearance settings, then compiles them into an Axis.

    Setters validate before storing and return the builder, so calls chain.
    """

    kind = "axis"

    def __init__(
        self,
        start_x: float,
        start_y: float,
        length: float,
        horizontal: bool,
        flip: bool = False,
        label: str | None = None,
        *,
        transform: CoordinateTransform | None = None,
    ) -> None:
        if not math.isfinite(length) or length < 0:
            raise AxisConfigError("axis length must be finite and >= 0")
        self._start_x = float(start_x)
        self._start_y = float(start_y)
        self._length = float(length)
        self._horizontal = bool(horizontal)
        self._label = label
        if self._horizontal:
            self._direction = Direction.HORIZONTAL_INCREASING
            self._counterclockwise = bool(flip)
        else:
            self._direction = Direction.VERTICAL_INCREASING
            y_up = transform is None or transform.y_lower < transform.y_upper
            self._counterclockwise = (not flip) if y_up else bool(flip)
        self._width = DEFAULT_WIDTH
        self._color: RGBA | None = None
        self._font: FontParms | None = None
        self._tick_labels_horizontal = False
        self._axis_scale = 1.0
        self._label_offset = DEFAULT_LABEL_SEPARATION
        self._tick_scaling_factor = DEFAULT_TICK_SCALING_FACTOR
        self._linear_tick_scaling = False
        self._levels = DEFAULT_LEVELS

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def counterclockwise(self) -> bool:
        return self._counterclockwise

    @property
    def start(self) -> float:
        return self._start_x if self._horizontal else self._start_y

    @property
    def width(self) -> float:
        return self._width

    @property
    def levels(self) -> LevelTable:
        return self._levels

    @property
    def number_of_levels(self) -> int:
        return self._levels.size

    def set_width(self: B, width: float) -> B:
        if width < 0:
            raise AxisConfigError("axis width must be >= 0")
        self._width = DEFAULT_WIDTH if width == 0 else float(width)
        return self

    def set_color(self: B, color: RGBA | None) -> B:
        self._color = None if color is None else validate_color(color, "axis color")
        return self

    def set_font_parms(self: B, font: FontParms | None) -> B:
        """Set label font parameters; None restores the defaults."""
        self._font = font
        return self

    def set_tick_labels_horizontal(self: B, value: bool) -> B:
        self._tick_labels_horizontal = bool(value)
        return self

    def set_axis_scale(self: B, scale: float) -> B:
        if not scale > 0 or not math.isfinite(scale):
            raise AxisConfigError("axis scale must be finite and > 0")
        self._axis_scale = float(scale)
        return self

    def set_label_offset(self: B, offset: float) -> B:
        self._label_offset = float(offset)
        return self

    def set_tick_scaling_factor(self: B, factor: float) -> B:
        if factor < 0:
            raise AxisConfigError("tick scaling factor must be >= 0")
        self._tick_scaling_factor = DEFAULT_TICK_SCALING_FACTOR if factor == 0 else float(factor)
        return self

    def set_linear_tick_scaling(self: B, value: bool) -> B:
        self._linear_tick_scaling = bool(value)
        return self

    def tick_scaling(self, axis_width: float | None = None) -> float:
        if self._linear_tick_scaling:
            return self._tick_scaling_factor
        w = self._width if axis_width is None else axis_width
        if w <= 0:
            return self._tick_scaling_factor
        r = DEFAULT_WIDTH / w
        if w > DEFAULT_WIDTH:
            r *= 1.0 - 0.75 * math.log(r)
        return r

    def configure_levels(
        self: B,
        lengths: Sequence[float] | None = None,
        widths: Sequence[float] | None = None,
        label_gaps: Sequence[float] | None = None,
    ) -> B:
        supplied = [arg is not None for arg in (lengths, widths, label_gaps)]
        if not any(supplied):
            table = DEFAULT_LEVELS
        elif not all(supplied):
            raise AxisConfigError("configure_levels needs lengths, widths and label_gaps together")
        else:
            table = LevelTable(tuple(lengths), tuple(widths), tuple(label_gaps))
        needed = self._highest_level() + 1
        if needed > table.size:
            raise AxisConfigError(f"tick rules use {needed} levels but the table has {table.size}")
        self._levels = table
        return self

    def create_axis(self) -> Axis:
        axis = self._new_axis()
        self._apply_appearance(axis)
        scaling = self.tick_scaling(self._width)
        for placement in self._placements():
            axis.add_tick(self._materialize(placement, scaling))
        LOGGER.debug(
            "created %s axis: base=%s increment=%s specs=%d",
            self.kind,
            axis.tick_base,
            axis.tick_increment,
            len(axis.tick_specs),
        )
        return axis

    def _check_level(self, level: int, *, extra: int = 0) -> None:
        require_int(level, "tick level")
        if level < 0:
            raise AxisConfigError("tick level must be >= 0")
        if level + extra >= self._levels.size:
            raise AxisConfigError(f"tick level {level + extra} exceeds the {self._levels.size} configured levels")

    def _apply_appearance(self, axis: Axis) -> None:
        axis.axis_scale = self._axis_scale
        axis.label_offset = self._label_offset
        axis.label = self._label
        axis.width = self._width
        axis.tick_labels_horizontal = self._tick_labels_horizontal
        if self._color is not None:
            axis.color = self._color
        axis.font = self._font

    def _materialize(self, placement: TickPlacement, scaling: float) -> TickSpec:
        level = placement.level
        return self._tick_spec_type()(
            length=self._levels.lengths[level] * scaling,
            width=self._levels.widths[level] * scaling,
            mod=placement.mod,
            mod_test=placement.mod_test,
            limit=placement.limit,
            format=placement.format,
            string_offset=self._levels.label_gaps[level] * scaling,
            **self._tick_spec_extras(),
        )

    def _tick_spec_type(self) -> type[TickSpec]:
        return TickSpec

    def _tick_spec_extras(self) -> dict[str, object]:
        return {}

    @abstractmethod
    def _highest_level(self) -> int:
        ...

    @abstractmethod
    def _new_axis(self) -> Axis:
        ...

    @abstractmethod
    def _placements(self) -> list[TickPlacement]:
        ...


def snap_toward_zero(start: float, unit: float) -> float:
    """Largest multiple of `unit` no farther from zero than `start`."""
    count = math.floor(abs(start) / unit + 1e-9)
    return math.copysign(count * unit, start) if count else 0.0


def require_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AxisConfigError(f"{field_name} must be an integer")
    return value
