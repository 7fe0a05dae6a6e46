from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import math

from axisgraph.errors import AxisConfigError


AUTO_FORMAT = "auto"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ClockFields:
    """Totals (not remainders) for a clock reading, plus the matching UTC time."""

    seconds: int
    minutes: int
    hours: int
    days: int
    time: datetime

    def as_mapping(self) -> dict[str, object]:
        return {
            "seconds": self.seconds,
            "minutes": self.minutes,
            "hours": self.hours,
            "days": self.days,
            "time": self.time,
        }


def format_number(template: str, value: float, *, step: float | None = None) -> str:
    if template == AUTO_FORMAT:
        return format_tick(value, step=step)
    if "{" in template:
        return template.format(value)
    if "%" in template:
        return template % value
    return template


def clock_fields(value: float, one_second: float) -> ClockFields:
    if one_second <= 0:
        raise AxisConfigError("one_second must be > 0")
    seconds = int(round(value / one_second))
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    return ClockFields(
        seconds=seconds,
        minutes=minutes,
        hours=hours,
        days=days,
        time=EPOCH + timedelta(seconds=seconds),
    )


def format_clock(template: str, value: float, one_second: float) -> str:
    fields = clock_fields(value, one_second)
    if "{" in template:
        return template.format(
            fields.time, fields.hours, fields.minutes, fields.seconds, fields.days, **fields.as_mapping()
        )
    if "%" in template:
        return template % fields.as_mapping()
    return template


def validate_template(template: str | None, *, clock: bool = False) -> str | None:
    if template is None:
        return None
    if not isinstance(template, str):
        raise AxisConfigError("label format must be a string")
    try:
        if clock:
            format_clock(template, 3661.0, 1.0)
        else:
            format_number(template, 1.5, step=0.5)
    except (TypeError, ValueError, KeyError, IndexError) as exc:
        raise AxisConfigError(f"invalid label format {template!r}: {exc}") from exc
    return template


def format_tick(value: float, *, step: float | None = None) -> str:
    """Plain label for `value` with just enough decimals to tell ticks `step` apart.

    Axes pass `step` as the labelled spec's spacing, `|mod * increment|` in
    label units.
    """
    if not math.isfinite(value):
        return str(value)
    if step is not None and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude and (magnitude >= 1e6 or magnitude < 1e-6):
        return f"{value:.4e}"
    text = f"{value:.{step_decimals(step)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def step_decimals(step: float | None) -> int:
    """Fewest decimals that write `step` exactly, capped at 12; 6 without a step."""
    if step is None or not math.isfinite(step) or step <= 0:
        return 6
    for decimals in range(12):
        scaled = step * 10**decimals
        if abs(scaled - round(scaled)) < 1e-6:
            return decimals
    return 12
