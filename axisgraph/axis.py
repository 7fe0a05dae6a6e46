from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from typing import Iterator

import numpy as np

from axisgraph.errors import AxisConfigError, AxisStateError
from axisgraph.fonts import BLACK, RGBA, FontParms, validate_color
from axisgraph.ticks import TickSpec, order_tick_specs, select_tick_spec


# Slack, in index units, when deciding whether an index already lies on the axis.
INDEX_TOLERANCE = 1e-4
SMALLEST_AXIS_SCALE = 2.2250738585072014e-308

DEFAULT_AXIS_WIDTH = 2.0
DEFAULT_LABEL_OFFSET = 3.0


class Direction(Enum):
    VERTICAL_INCREASING = "vertical_increasing"
    VERTICAL_DECREASING = "vertical_decreasing"
    HORIZONTAL_DECREASING = "horizontal_decreasing"
    HORIZONTAL_INCREASING = "horizontal_increasing"

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.VERTICAL_INCREASING, Direction.VERTICAL_DECREASING)

    @property
    def is_increasing(self) -> bool:
        return self in (Direction.VERTICAL_INCREASING, Direction.HORIZONTAL_INCREASING)

    def increasing_variant(self) -> Direction:
        if self.is_vertical:
            return Direction.VERTICAL_INCREASING
        return Direction.HORIZONTAL_INCREASING


@dataclass(frozen=True)
class TickMark:
    index: int
    coord: float
    value: float
    spec: TickSpec
    label: str | None


class Axis:
    """A straight axis in design space with tick specs keyed by integer index.

    Tick index `i` sits at `tick_base + i * tick_increment` along the axis.
    """

    def __init__(
        self,
        start_x: float,
        start_y: float,
        direction: Direction,
        length: float,
        tick_base: float,
        tick_increment: float,
        counterclockwise: bool = False,
    ) -> None:
        if not isinstance(direction, Direction):
            raise AxisConfigError(f"unknown axis direction: {direction!r}")
        if not math.isfinite(length) or length < 0:
            raise AxisConfigError("axis length must be finite and >= 0")
        if not math.isfinite(tick_increment):
            raise AxisConfigError("tick increment must be finite")
        self._start_x = float(start_x)
        self._start_y = float(start_y)
        self._direction = direction
        self._length = float(length)
        self._tick_base = float(tick_base)
        self._counterclockwise = bool(counterclockwise)
        self._increasing = direction.is_increasing
        self._tick_increment = float(tick_increment) if self._increasing else -float(tick_increment)
        sign = 1.0 if self._increasing else -1.0
        if direction.is_vertical:
            self._start = self._start_y
            self._end_x = self._start_x
            self._end_y = self._start_y + sign * self._length
        else:
            self._start = self._start_x
            self._end_x = self._start_x + sign * self._length
            self._end_y = self._start_y
        self._end = self._start + sign * self._length
        self._limit_modulus = 0
        self._specs: list[TickSpec] = []
        self._iterating = 0

        self._width = DEFAULT_AXIS_WIDTH
        self._color: RGBA = BLACK
        self._label: str | None = None
        self._label_offset = DEFAULT_LABEL_OFFSET
        self._font: FontParms | None = None
        self._tick_labels_horizontal = False
        self._axis_scale = 1.0

    @property
    def start_x(self) -> float:
        return self._start_x

    @property
    def start_y(self) -> float:
        return self._start_y

    @property
    def end_x(self) -> float:
        return self._end_x

    @property
    def end_y(self) -> float:
        return self._end_y

    @property
    def start(self) -> float:
        return self._start

    @property
    def end(self) -> float:
        return self._end

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def length(self) -> float:
        return self._length

    @property
    def increasing(self) -> bool:
        return self._increasing

    @property
    def counterclockwise(self) -> bool:
        return self._counterclockwise

    @property
    def tick_base(self) -> float:
        return self._tick_base

    @property
    def tick_increment(self) -> float:
        return self._tick_increment

    @property
    def limit_modulus(self) -> int:
        return self._limit_modulus

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        if value < 0:
            raise AxisConfigError("axis width must be >= 0")
        self._width = float(value)

    @property
    def color(self) -> RGBA:
        return self._color

    @color.setter
    def color(self, value: RGBA) -> None:
        self._color = validate_color(value, "axis color")

    @property
    def label(self) -> str | None:
        return self._label

    @label.setter
    def label(self, value: str | None) -> None:
        self._label = value

    @property
    def label_offset(self) -> float:
        return self._label_offset

    @label_offset.setter
    def label_offset(self, value: float) -> None:
        self._label_offset = float(value)

    @property
    def font(self) -> FontParms | None:
        return self._font

    @font.setter
    def font(self, value: FontParms | None) -> None:
        self._font = value

    @property
    def tick_labels_horizontal(self) -> bool:
        return self._tick_labels_horizontal

    @tick_labels_horizontal.setter
    def tick_labels_horizontal(self, value: bool) -> None:
        self._tick_labels_horizontal = bool(value)

    @property
    def axis_scale(self) -> float:
        return self._axis_scale

    @axis_scale.setter
    def axis_scale(self, value: float) -> None:
        if not value >= SMALLEST_AXIS_SCALE:
            raise AxisConfigError("axis scale must be > 0")
        self._axis_scale = float(value)

    @property
    def tick_specs(self) -> tuple[TickSpec, ...]:
        return tuple(self._specs)

    def add_tick(self, spec: TickSpec) -> None:
        if self._iterating:
            raise AxisStateError("cannot add tick specs while the axis ticks are being iterated")
        self._specs = order_tick_specs([*self._specs, spec])

    def initial_index(self) -> int:
        """Smallest index whose coordinate lies on the axis."""
        if self._tick_increment == 0:
            return 0
        offset = (self._start - self._tick_base) / self._tick_increment
        return math.ceil(offset - INDEX_TOLERANCE)

    def axis_coord(self, index: int) -> float:
        return self._tick_base + index * self._tick_increment

    def axis_value(self, index: int) -> float:
        return self.axis_coord(index) / self._axis_scale

    def not_done(self, coord: float) -> bool:
        if self._increasing:
            return coord <= self._end
        return coord >= self._end

    def select_tick(self, index: int) -> TickSpec | None:
        return select_tick_spec(self._specs, index, self._limit_modulus)

    def tick_label(self, spec: TickSpec, index: int) -> str | None:
        return spec.label(self.axis_value(index), step=self._label_step(spec))

    def iter_ticks(self) -> Iterator[TickMark]:
        if not self._specs or self._tick_increment == 0:
            return
        self._iterating += 1
        try:
            index = self.initial_index()
            coord = self.axis_coord(index)
            while self.not_done(coord):
                spec = self.select_tick(index)
                if spec is not None:
                    yield TickMark(
                        index=index,
                        coord=coord,
                        value=self.axis_value(index),
                        spec=spec,
                        label=self.tick_label(spec, index),
                    )
                index += 1
                coord = self.axis_coord(index)
        finally:
            self._iterating -= 1

    def _label_step(self, spec: TickSpec) -> float | None:
        return abs(spec.mod * self._tick_increment) / self._axis_scale


class LogAxis(Axis):
    """Axis whose coordinates are base-10 logarithms of the labelled values.

    Within each decade, ticks sit at log10(1 + i * tick_increment) for
    i in [0, limit_modulus).
    """

    def __init__(
        self,
        log_start_x: float,
        log_start_y: float,
        direction: Direction,
        log_length: float,
        tick_increment: float,
        counterclockwise: bool = False,
    ) -> None:
        if not isinstance(direction, Direction):
            raise AxisConfigError(f"unknown axis direction: {direction!r}")
        if tick_increment < 0:
            raise AxisConfigError("log axis tick increment must be >= 0")
        if not direction.is_increasing:
            if direction.is_vertical:
                log_start_y -= log_length
            else:
                log_start_x -= log_length
            counterclockwise = not counterclockwise
            direction = direction.increasing_variant()
        start = log_start_y if direction.is_vertical else log_start_x
        super().__init__(
            log_start_x,
            log_start_y,
            direction,
            log_length,
            math.floor(start),
            tick_increment,
            counterclockwise,
        )
        self._offsets = np.zeros(0, dtype=np.float64)
        if tick_increment != 0:
            modulus = int(round(9.0 / tick_increment))
            if modulus != 1 and modulus % 9 != 0:
                raise AxisConfigError(f"log axis tick increment {tick_increment} must be 9 or 1/n")
            self._limit_modulus = modulus
            self._offsets = np.log10(1.0 + np.arange(modulus, dtype=np.float64) * tick_increment)

    def initial_index(self) -> int:
        if self._limit_modulus == 0:
            return 0
        base = 10.0**self._tick_base
        offset = (10.0**self._start - base) / (base * self._tick_increment)
        return math.ceil(offset - INDEX_TOLERANCE)

    def axis_coord(self, index: int) -> float:
        decade, position = divmod(index, self._limit_modulus)
        return self._tick_base + decade + float(self._offsets[position])

    def axis_value(self, index: int) -> float:
        return 10.0 ** self.axis_coord(index) / self._axis_scale

    def _label_step(self, spec: TickSpec) -> float | None:
        return None
