from __future__ import annotations

from dataclasses import dataclass

from axisgraph.axis import LogAxis
from axisgraph.builders.base import AxisBuilder, TickPlacement, require_int
from axisgraph.coordinates import CoordinateTransform
from axisgraph.errors import AxisConfigError
from axisgraph.formatting import validate_template


MAX_POSITION_DIGITS = 6
DECADE_DIVISORS = (1, 2, 5, 10)


@dataclass(frozen=True)
class DecadeRule:
    """Ticks at powers of ten, optionally with a mid-decade tick at 5."""

    level: int
    middle: bool = False
    format: str | None = None
    middle_format: str | None = None


@dataclass(frozen=True)
class SubdivisionRule:
    """Ticks every 10**-depth within a decade (1..10 scaled), split by `divisor`.

    A non-zero `cutoff` hides ticks above that value in each decade.
    """

    level: int
    depth: int
    divisor: int = 1
    cutoff: int = 0
    format: str | None = None


@dataclass(frozen=True)
class PositionRule:
    """A single tick per decade at `1 + position * 10**(1 - digits)`."""

    level: int
    position: int
    digits: int
    format: str | None = None


LogRule = DecadeRule | SubdivisionRule | PositionRule


def max_depth(rules: list[LogRule]) -> int:
    depth = 0
    for rule in rules:
        if isinstance(rule, DecadeRule):
            depth = max(depth, 1 if rule.middle else 0)
        elif isinstance(rule, SubdivisionRule):
            depth = max(depth, rule.depth + 1 if rule.divisor != 1 else rule.depth)
        else:
            depth = max(depth, rule.digits)
    return depth


def log_tick_increment(depth: int) -> float:
    if depth == 0:
        return 9.0
    return 1.0 / 10 ** (depth - 1)


def expand_log_rules(rules: list[LogRule]) -> list[TickPlacement]:
    depth = max_depth(rules)
    if depth == 0:
        # One index per decade; only decade rules without a middle tick remain.
        return [TickPlacement(rule.level, 1, format=rule.format) for rule in rules]
    unit = 10 ** (depth - 1)
    decade = 9 * unit
    placements: list[TickPlacement] = []
    for rule in rules:
        if isinstance(rule, DecadeRule):
            placements.append(TickPlacement(rule.level, decade, format=rule.format))
            if rule.middle:
                placements.append(TickPlacement(rule.level + 1, decade, 4 * unit, 5 * unit, rule.middle_format))
        elif isinstance(rule, PositionRule):
            mod_test = rule.position * 10 ** (depth - rule.digits)
            placements.append(TickPlacement(rule.level, decade, mod_test, format=rule.format))
        else:
            mod = 10 ** (depth - rule.depth) // rule.divisor
            limit = (rule.cutoff - 1) * unit if rule.cutoff else -1
            placements.append(TickPlacement(rule.level, mod, 0, limit, rule.format))
    return placements


class LogAxisBuilder(AxisBuilder):
    """Builds logarithmic axes. Start and length are given as base-10 logarithms."""

    kind = "log"

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
        self._rules: list[LogRule] = []

    @property
    def rules(self) -> tuple[LogRule, ...]:
        return tuple(self._rules)

    @property
    def max_depth(self) -> int:
        return max_depth(self._rules)

    def tick_increment(self) -> float:
        return log_tick_increment(self.max_depth)

    def add_decade_tick_spec(
        self,
        level: int,
        middle: bool = False,
        format: str | None = None,
        middle_format: str | None = None,
    ) -> LogAxisBuilder:
        self._check_level(level, extra=1 if middle else 0)
        validate_template(format)
        validate_template(middle_format)
        self._rules.append(DecadeRule(level, bool(middle), format, middle_format))
        return self

    def add_tick_spec(
        self,
        level: int,
        depth: int,
        divisor: int = 1,
        cutoff: int = 0,
        format: str | None = None,
    ) -> LogAxisBuilder:
        require_int(depth, "tick depth")
        require_int(divisor, "divisor")
        require_int(cutoff, "cutoff")
        if depth < 0:
            raise AxisConfigError("tick depth must be >= 0")
        if divisor not in DECADE_DIVISORS:
            raise AxisConfigError(f"divisor must be one of {DECADE_DIVISORS}")
        if cutoff != 0 and not 2 <= cutoff <= 9:
            raise AxisConfigError("cutoff must be 0 or in [2, 9]")
        if depth == 0:
            if divisor != 1 or cutoff != 0:
                raise AxisConfigError("depth 0 ticks fall on decades and take no divisor or cutoff")
            return self.add_decade_tick_spec(level, format=format)
        self._check_level(level)
        validate_template(format)
        self._rules.append(SubdivisionRule(level, depth, divisor, cutoff, format))
        return self

    def add_one_tick(self, level: int, position: float, format: str | None = None) -> LogAxisBuilder:
        if not 1.0 <= position < 10.0:
            raise AxisConfigError("position must be in [1, 10)")
        self._check_level(level)
        validate_template(format)
        offset = position - 1.0
        digits = 1
        while abs(round(offset) - offset) > 1e-10:
            if digits >= MAX_POSITION_DIGITS:
                raise AxisConfigError(f"position {position} needs too many decimal digits")
            offset *= 10.0
            digits += 1
        self._rules.append(PositionRule(level, int(round(offset)), digits, format))
        return self

    def _highest_level(self) -> int:
        levels = [rule.level + 1 if isinstance(rule, DecadeRule) and rule.middle else rule.level for rule in self._rules]
        return max(levels, default=-1)

    def _new_axis(self) -> LogAxis:
        return LogAxis(
            self._start_x,
            self._start_y,
            self._direction,
            self._length,
            self.tick_increment(),
            self._counterclockwise,
        )

    def _placements(self) -> list[TickPlacement]:
        return expand_log_rules(self._rules)
