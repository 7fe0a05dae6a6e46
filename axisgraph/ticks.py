from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from axisgraph.errors import AxisConfigError
from axisgraph.formatting import format_clock, format_number, validate_template


@dataclass(frozen=True)
class TickSpec:
    """One kind of tick mark: its size and the indices it applies to.

    A spec matches index `i` when `i % mod == mod_test` and, for axes with a
    non-zero limit modulus, `i % limit_modulus <= limit` (a negative limit
    disables that second test). Specs that carry a format also label the tick.
    """

    length: float
    width: float
    mod: int
    mod_test: int = 0
    limit: int = -1
    format: str | None = None
    string_offset: float = 0.0

    def __post_init__(self) -> None:
        if self.length < 0 or self.width < 0:
            raise AxisConfigError("tick length and width must be >= 0")
        if self.mod < 1:
            raise AxisConfigError("tick mod must be >= 1")
        if self.mod_test < 0:
            raise AxisConfigError("tick mod_test must be >= 0")
        if self.limit < -1:
            raise AxisConfigError("tick limit must be >= -1")
        self._validate_format()

    def _validate_format(self) -> None:
        validate_template(self.format)

    def priority_key(self) -> tuple[float, ...]:
        return (
            -self.mod,
            -self.length,
            -self.width,
            -self.mod_test,
            -self.string_offset,
            0 if self.format is not None else 1,
        )

    @property
    def shows_label(self) -> bool:
        return self.format is not None

    def matches(self, index: int, limit_modulus: int = 0) -> bool:
        if index % self.mod != self.mod_test:
            return False
        if self.limit < 0 or limit_modulus == 0:
            return True
        return index % limit_modulus <= self.limit

    def label(self, value: float, *, step: float | None = None) -> str | None:
        if self.format is None:
            return None
        return format_number(self.format, value, step=step).strip()


@dataclass(frozen=True)
class ClockTickSpec(TickSpec):
    """Tick spec whose label is a clock reading of the axis value."""

    one_second: float = 1.0

    def __post_init__(self) -> None:
        if self.one_second <= 0:
            raise AxisConfigError("one_second must be > 0")
        super().__post_init__()

    def _validate_format(self) -> None:
        validate_template(self.format, clock=True)

    def label(self, value: float, *, step: float | None = None) -> str | None:
        if self.format is None:
            return None
        return format_clock(self.format, value, self.one_second).strip()


def order_tick_specs(specs: Iterable[TickSpec]) -> list[TickSpec]:
    """Sort by priority, keeping the first of any specs with equal keys."""
    seen: dict[tuple[float, ...], TickSpec] = {}
    for spec in specs:
        seen.setdefault(spec.priority_key(), spec)
    return [seen[key] for key in sorted(seen)]


def select_tick_spec(specs: Iterable[TickSpec], index: int, limit_modulus: int = 0) -> TickSpec | None:
    for spec in specs:
        if spec.matches(index, limit_modulus):
            return spec
    return None
