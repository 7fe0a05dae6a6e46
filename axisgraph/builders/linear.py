from __future__ import annotations

from dataclasses import dataclass

from axisgraph.axis import Axis
from axisgraph.builders.base import AxisBuilder, TickPlacement, require_int, snap_toward_zero
from axisgraph.coordinates import CoordinateTransform
from axisgraph.errors import AxisConfigError
from axisgraph.formatting import validate_template


@dataclass(frozen=True)
class DepthRule:
    """Ticks every 10**(max_exponent - depth); `middle` adds a tick halfway between."""

    level: int
    depth: int
    middle: bool = False
    format: str | None = None
    middle_format: str | None = None

    @property
    def exponent_drop(self) -> int:
        return self.depth + 1 if self.middle else self.depth


@dataclass(frozen=True)
class StepRule:
    """Ticks every `steps // divisor` increments."""

    level: int
    divisor: int
    format: str | None = None


LinearRule = DepthRule | StepRule


def lowest_exponent(rules: list[LinearRule], max_exponent: int) -> int:
    drops = [rule.exponent_drop for rule in rules if isinstance(rule, DepthRule)]
    return max_exponent - max(drops, default=0)


def expand_linear_rules(rules: list[LinearRule], *, max_exponent: int, steps: int) -> list[TickPlacement]:
    lowest = lowest_exponent(rules, max_exponent)
    placements: list[TickPlacement] = []
    for rule in rules:
        if isinstance(rule, DepthRule):
            mod = steps * 10 ** (max_exponent - rule.depth - lowest)
            placements.append(TickPlacement(rule.level, mod, format=rule.format))
            if rule.middle:
                placements.append(TickPlacement(rule.level + 1, mod, mod // 2, format=rule.middle_format))
        else:
            placements.append(TickPlacement(rule.level, steps // rule.divisor, format=rule.format))
    return placements


class LinearAxisBuilder(AxisBuilder):
    """Builds linear axes with ticks at powers of ten and their subdivisions."""

    kind = "linear"

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
        super().__init__(start_x, start_y, length, horizontal, flip, label, transform=transform)
        self._max_exponent = 0
        self._steps = 1
        self._rules: list[LinearRule] = []

    @property
    def max_exponent(self) -> int:
        return self._max_exponent

    @property
    def min_exponent(self) -> int:
        return lowest_exponent(self._rules, self._max_exponent)

    @property
    def number_of_steps(self) -> int:
        return self._steps

    @property
    def rules(self) -> tuple[LinearRule, ...]:
        return tuple(self._rules)

    def tick_increment(self) -> float:
        return 10.0**self.min_exponent / self._steps

    def tick_base(self) -> float:
        return snap_toward_zero(self.start, 10.0**self._max_exponent)

    def set_maximum_exponent(self, exponent: int) -> LinearAxisBuilder:
        self._max_exponent = require_int(exponent, "maximum exponent")
        return self

    def set_number_of_steps(self, steps: int) -> LinearAxisBuilder:
        require_int(steps, "number of steps")
        if steps < 1:
            raise AxisConfigError("number of steps must be >= 1")
        for rule in self._rules:
            if isinstance(rule, StepRule) and steps % rule.divisor != 0:
                raise AxisConfigError(f"number of steps {steps} is not divisible by existing divisor {rule.divisor}")
        self._steps = steps
        return self

    def add_tick_spec(
        self,
        level: int,
        depth: int,
        middle: bool = False,
        format: str | None = None,
        middle_format: str | None = None,
    ) -> LinearAxisBuilder:
        if require_int(depth, "tick depth") < 0:
            raise AxisConfigError("tick depth must be >= 0")
        self._check_level(level, extra=1 if middle else 0)
        validate_template(format)
        validate_template(middle_format)
        self._rules.append(DepthRule(level, depth, bool(middle), format, middle_format))
        return self

    def add_step_tick_spec(self, level: int, divisor: int, format: str | None = None) -> LinearAxisBuilder:
        if require_int(divisor, "divisor") < 1:
            raise AxisConfigError("divisor must be >= 1")
        if self._steps % divisor != 0:
            raise AxisConfigError(f"divisor {divisor} does not divide the number of steps {self._steps}")
        self._check_level(level)
        validate_template(format)
        self._rules.append(StepRule(level, divisor, format))
        return self

    def _highest_level(self) -> int:
        levels = [rule.level + 1 if isinstance(rule, DepthRule) and rule.middle else rule.level for rule in self._rules]
        return max(levels, default=-1)

    def _new_axis(self) -> Axis:
        return Axis(
            self._start_x,
            self._start_y,
            self._direction,
            self._length,
            self.tick_base(),
            self.tick_increment(),
            self._counterclockwise,
        )

    def _placements(self) -> list[TickPlacement]:
        return expand_linear_rules(self._rules, max_exponent=self._max_exponent, steps=self._steps)
