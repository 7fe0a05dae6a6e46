from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from axisgraph.axis import Axis
from axisgraph.builders.base import AxisBuilder, TickPlacement, require_int, snap_toward_zero
from axisgraph.coordinates import CoordinateTransform
from axisgraph.errors import AxisConfigError
from axisgraph.formatting import validate_template
from axisgraph.ticks import ClockTickSpec, TickSpec


class Spacing(Enum):
    SECONDS = 1
    FIVE_SECONDS = 5
    TEN_SECONDS = 10
    FIFTEEN_SECONDS = 15
    THIRTY_SECONDS = 30
    MINUTES = 60
    FIVE_MINUTES = 300
    TEN_MINUTES = 600
    FIFTEEN_MINUTES = 900
    THIRTY_MINUTES = 1800
    HOURS = 3600
    TEN_HOURS = 36000
    TWELVE_HOURS = 43200
    DAYS = 86400

    @property
    def seconds(self) -> int:
        return self.value


MIN_SPACINGS = (Spacing.SECONDS, Spacing.MINUTES, Spacing.HOURS)
# Tick bases snap to multiples of this many seconds for each maximum spacing.
BASE_UNITS = {
    Spacing.SECONDS: 10,
    Spacing.MINUTES: 60,
    Spacing.HOURS: 3600,
    Spacing.DAYS: 86400,
}


@dataclass(frozen=True)
class SpacingRule:
    level: int
    spacing: Spacing
    format: str | None = None


@dataclass(frozen=True)
class ClockStepRule:
    """Sub-second ticks: `steps // divisor` increments apart."""

    level: int
    divisor: int
    format: str | None = None


ClockRule = SpacingRule | ClockStepRule


def expand_clock_rules(rules: list[ClockRule], *, min_spacing: Spacing, steps: int) -> list[TickPlacement]:
    placements: list[TickPlacement] = []
    for rule in rules:
        if isinstance(rule, SpacingRule):
            mod = steps * rule.spacing.seconds // min_spacing.seconds
        else:
            mod = steps // rule.divisor
        placements.append(TickPlacement(rule.level, mod, format=rule.format))
    return placements


class ClockTimeAxisBuilder(AxisBuilder):
    """Builds linear axes whose labels read as clock times.

    `one_second` is the length of one second in axis units.
    """

    kind = "clock"

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
        self._one_second = 1.0
        self._min_spacing = Spacing.SECONDS
        self._max_spacing = Spacing.HOURS
        self._steps = 1
        self._rules: list[ClockRule] = []

    @property
    def one_second(self) -> float:
        return self._one_second

    @property
    def min_spacing(self) -> Spacing:
        return self._min_spacing

    @property
    def max_spacing(self) -> Spacing:
        return self._max_spacing

    @property
    def number_of_steps(self) -> int:
        return self._steps

    @property
    def rules(self) -> tuple[ClockRule, ...]:
        return tuple(self._rules)

    def tick_increment(self) -> float:
        return self._min_spacing.seconds * self._one_second / self._steps

    def tick_base(self) -> float:
        unit = BASE_UNITS[self._max_spacing]
        for rule in self._rules:
            if isinstance(rule, SpacingRule):
                unit = math.lcm(unit, rule.spacing.seconds)
        return snap_toward_zero(self.start, unit * self._one_second)

    def set_one_second(self, value: float) -> ClockTimeAxisBuilder:
        if not value > 0 or not math.isfinite(value):
            raise AxisConfigError("one_second must be finite and > 0")
        self._one_second = float(value)
        return self

    def set_spacings(self, min_spacing: Spacing, max_spacing: Spacing) -> ClockTimeAxisBuilder:
        if min_spacing not in MIN_SPACINGS:
            raise AxisConfigError(f"minimum spacing must be one of {[s.name for s in MIN_SPACINGS]}")
        if max_spacing not in BASE_UNITS:
            raise AxisConfigError(f"maximum spacing must be one of {[s.name for s in BASE_UNITS]}")
        if max_spacing.seconds < min_spacing.seconds:
            raise AxisConfigError("maximum spacing must not be smaller than the minimum spacing")
        for rule in self._rules:
            self._check_rule(rule, min_spacing, self._steps)
        self._min_spacing = min_spacing
        self._max_spacing = max_spacing
        return self

    def set_number_of_steps(self, steps: int) -> ClockTimeAxisBuilder:
        require_int(steps, "number of steps")
        if steps < 1:
            raise AxisConfigError("number of steps must be >= 1")
        for rule in self._rules:
            self._check_rule(rule, self._min_spacing, steps)
        self._steps = steps
        return self

    def add_tick_spec(self, level: int, spacing: Spacing, format: str | None = None) -> ClockTimeAxisBuilder:
        rule = SpacingRule(level, spacing, format)
        self._check_level(level)
        self._check_rule(rule, self._min_spacing, self._steps)
        validate_template(format, clock=True)
        self._rules.append(rule)
        return self

    def add_step_tick_spec(self, level: int, divisor: int, format: str | None = None) -> ClockTimeAxisBuilder:
        require_int(divisor, "divisor")
        rule = ClockStepRule(level, divisor, format)
        self._check_level(level)
        self._check_rule(rule, self._min_spacing, self._steps)
        validate_template(format, clock=True)
        self._rules.append(rule)
        return self

    @staticmethod
    def _check_rule(rule: ClockRule, min_spacing: Spacing, steps: int) -> None:
        if isinstance(rule, SpacingRule):
            if not isinstance(rule.spacing, Spacing):
                raise AxisConfigError(f"unknown spacing: {rule.spacing!r}")
            if rule.spacing.seconds % min_spacing.seconds != 0:
                raise AxisConfigError(f"spacing {rule.spacing.name} is not a multiple of {min_spacing.name}")
            return
        if min_spacing is not Spacing.SECONDS:
            raise AxisConfigError("divisor ticks need a minimum spacing of SECONDS")
        if rule.divisor < 1 or steps % rule.divisor != 0:
            raise AxisConfigError(f"divisor {rule.divisor} does not divide the number of steps {steps}")

    def _highest_level(self) -> int:
        return max((rule.level for rule in self._rules), default=-1)

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
        return expand_clock_rules(self._rules, min_spacing=self._min_spacing, steps=self._steps)

    def _tick_spec_type(self) -> type[TickSpec]:
        return ClockTickSpec

    def _tick_spec_extras(self) -> dict[str, object]:
        return {"one_second": self._one_second}
