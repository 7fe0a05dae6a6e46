from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import tomllib
from typing import Any, Mapping

from axisgraph.builders import AxisBuilder, ClockTimeAxisBuilder, LinearAxisBuilder, LogAxisBuilder, Spacing
from axisgraph.coordinates import CoordinateTransform
from axisgraph.errors import AxisConfigError
from axisgraph.fonts import RGBA, FontParms

LOGGER = logging.getLogger(__name__)

AXIS_KINDS = ("linear", "log", "clock")

_COMMON_KEYS = {
    "kind",
    "start",
    "length",
    "horizontal",
    "flip",
    "label",
    "width",
    "color",
    "axis_scale",
    "label_offset",
    "tick_labels_horizontal",
    "linear_tick_scaling",
    "tick_scaling_factor",
    "levels",
    "font",
    "ticks",
}
_KIND_KEYS = {
    "linear": {"max_exponent", "steps"},
    "log": set(),
    "clock": {"one_second", "min_spacing", "max_spacing", "steps"},
}
_TICK_KEYS = {
    "linear": {"level", "depth", "middle", "format", "middle_format", "divisor"},
    "log": {"level", "decade", "middle", "format", "middle_format", "depth", "divisor", "cutoff", "position"},
    "clock": {"level", "spacing", "divisor", "format"},
}
_FONT_KEYS = {"family", "size_px", "color"}


@dataclass(frozen=True)
class AxisConfig:
    kind: str
    start: tuple[float, float]
    length: float
    horizontal: bool
    flip: bool = False
    label: str | None = None
    settings: dict[str, Any] = field(default_factory=dict)
    ticks: tuple[dict[str, Any], ...] = ()

    def create_builder(self, transform: CoordinateTransform | None = None) -> AxisBuilder:
        builder_type = {"linear": LinearAxisBuilder, "log": LogAxisBuilder, "clock": ClockTimeAxisBuilder}[self.kind]
        builder = builder_type(
            self.start[0],
            self.start[1],
            self.length,
            self.horizontal,
            self.flip,
            self.label,
            transform=transform,
        )
        self._apply_settings(builder)
        for rule in self.ticks:
            _add_rule(builder, self.kind, rule)
        return builder

    def _apply_settings(self, builder: AxisBuilder) -> None:
        s = self.settings
        if "width" in s:
            builder.set_width(s["width"])
        if "color" in s:
            builder.set_color(s["color"])
        if "font" in s:
            builder.set_font_parms(s["font"])
        if "axis_scale" in s:
            builder.set_axis_scale(s["axis_scale"])
        if "label_offset" in s:
            builder.set_label_offset(s["label_offset"])
        if "tick_labels_horizontal" in s:
            builder.set_tick_labels_horizontal(s["tick_labels_horizontal"])
        if "linear_tick_scaling" in s:
            builder.set_linear_tick_scaling(s["linear_tick_scaling"])
        if "tick_scaling_factor" in s:
            builder.set_tick_scaling_factor(s["tick_scaling_factor"])
        if "levels" in s:
            levels = s["levels"]
            builder.configure_levels(levels.get("lengths"), levels.get("widths"), levels.get("label_gaps"))
        if isinstance(builder, LinearAxisBuilder):
            if "max_exponent" in s:
                builder.set_maximum_exponent(s["max_exponent"])
            if "steps" in s:
                builder.set_number_of_steps(s["steps"])
        elif isinstance(builder, ClockTimeAxisBuilder):
            if "one_second" in s:
                builder.set_one_second(s["one_second"])
            if "min_spacing" in s or "max_spacing" in s:
                builder.set_spacings(
                    s.get("min_spacing", builder.min_spacing),
                    s.get("max_spacing", builder.max_spacing),
                )
            if "steps" in s:
                builder.set_number_of_steps(s["steps"])


def load_axis_config(path: str | Path) -> AxisConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"axis config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise AxisConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    config = parse_axis_config(raw)
    LOGGER.debug("loaded %s axis config from %s", config.kind, config_path)
    return config


def parse_axis_config(raw: Mapping[str, Any]) -> AxisConfig:
    axis = raw.get("axis")
    if not isinstance(axis, dict):
        raise AxisConfigError("axis config requires an [axis] table")
    kind = axis.get("kind")
    if kind not in AXIS_KINDS:
        raise AxisConfigError(f"axis.kind must be one of {AXIS_KINDS}")
    unknown = set(axis) - _COMMON_KEYS - _KIND_KEYS[kind]
    if unknown:
        raise AxisConfigError(f"unknown axis keys for kind `{kind}`: {sorted(unknown)}")

    start = axis.get("start", [0.0, 0.0])
    if not isinstance(start, list) or len(start) != 2:
        raise AxisConfigError("axis.start must be a list of two numbers")
    try:
        length = axis["length"]
        horizontal = axis["horizontal"]
    except KeyError as exc:
        raise AxisConfigError(f"axis config missing required field: {exc.args[0]}") from exc

    settings: dict[str, Any] = {}
    for key in ("width", "axis_scale", "label_offset", "tick_scaling_factor", "one_second"):
        if key in axis:
            settings[key] = _coerce_number(axis[key], f"axis.{key}")
    for key in ("max_exponent", "steps"):
        if key in axis:
            settings[key] = _coerce_int(axis[key], f"axis.{key}")
    for key in ("tick_labels_horizontal", "linear_tick_scaling"):
        if key in axis:
            settings[key] = _coerce_bool(axis[key], f"axis.{key}")
    for key in ("min_spacing", "max_spacing"):
        if key in axis:
            settings[key] = _coerce_spacing(axis[key], f"axis.{key}")
    if "color" in axis:
        settings["color"] = _coerce_color(axis["color"], "axis.color")
    if "font" in axis:
        settings["font"] = _coerce_font(axis["font"])
    if "levels" in axis:
        levels = axis["levels"]
        if not isinstance(levels, dict) or set(levels) - {"lengths", "widths", "label_gaps"}:
            raise AxisConfigError("axis.levels must be a table of lengths, widths and label_gaps")
        coerced: dict[str, list[float]] = {}
        for key, values in levels.items():
            if not isinstance(values, list):
                raise AxisConfigError(f"axis.levels.{key} must be a list of numbers")
            coerced[key] = [_coerce_number(v, f"axis.levels.{key}") for v in values]
        settings["levels"] = coerced

    ticks = axis.get("ticks", [])
    if not isinstance(ticks, list):
        raise AxisConfigError("axis.ticks must be an array of tables")
    rules: list[dict[str, Any]] = []
    for i, rule in enumerate(ticks):
        if not isinstance(rule, dict):
            raise AxisConfigError(f"axis.ticks[{i}] must be a table")
        extra = set(rule) - _TICK_KEYS[kind]
        if extra:
            raise AxisConfigError(f"axis.ticks[{i}] has unknown keys: {sorted(extra)}")
        if "level" not in rule:
            raise AxisConfigError(f"axis.ticks[{i}] requires `level`")
        rules.append(_coerce_tick_rule(rule, f"axis.ticks[{i}]"))

    return AxisConfig(
        kind=kind,
        start=(_coerce_number(start[0], "axis.start"), _coerce_number(start[1], "axis.start")),
        length=_coerce_number(length, "axis.length"),
        horizontal=_coerce_bool(horizontal, "axis.horizontal"),
        flip=_coerce_bool(axis.get("flip", False), "axis.flip"),
        label=_coerce_optional_str(axis.get("label"), "axis.label"),
        settings=settings,
        ticks=tuple(rules),
    )


def _coerce_tick_rule(rule: Mapping[str, Any], prefix: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in rule.items():
        name = f"{prefix}.{key}"
        if key in ("level", "depth", "divisor", "cutoff"):
            out[key] = _coerce_int(value, name)
        elif key in ("middle", "decade"):
            out[key] = _coerce_bool(value, name)
        elif key == "position":
            out[key] = _coerce_number(value, name)
        elif key == "spacing":
            out[key] = _coerce_spacing(value, name)
        else:
            out[key] = _coerce_optional_str(value, name)
    return out


def _add_rule(builder: AxisBuilder, kind: str, rule: Mapping[str, Any]) -> None:
    level = rule["level"]
    fmt = rule.get("format")
    if isinstance(builder, LinearAxisBuilder):
        if "divisor" in rule:
            builder.add_step_tick_spec(level, rule["divisor"], fmt)
        else:
            builder.add_tick_spec(level, rule.get("depth", 0), rule.get("middle", False), fmt, rule.get("middle_format"))
    elif isinstance(builder, LogAxisBuilder):
        if "position" in rule:
            builder.add_one_tick(level, rule["position"], fmt)
        elif "depth" in rule and not rule.get("decade", False):
            builder.add_tick_spec(level, rule["depth"], rule.get("divisor", 1), rule.get("cutoff", 0), fmt)
        else:
            builder.add_decade_tick_spec(level, rule.get("middle", False), fmt, rule.get("middle_format"))
    elif isinstance(builder, ClockTimeAxisBuilder):
        if "spacing" in rule:
            builder.add_tick_spec(level, rule["spacing"], fmt)
        elif "divisor" in rule:
            builder.add_step_tick_spec(level, rule["divisor"], fmt)
        else:
            raise AxisConfigError("clock tick rules need `spacing` or `divisor`")
    else:
        raise AxisConfigError(f"unsupported axis kind: {kind}")


def _coerce_number(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AxisConfigError(f"{field_name} must be a number")
    return float(value)


def _coerce_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AxisConfigError(f"{field_name} must be an integer")
    return value


def _coerce_bool(value: object, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise AxisConfigError(f"{field_name} must be a boolean")
    return value


def _coerce_optional_str(value: object, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise AxisConfigError(f"{field_name} must be a string if provided")
    return value


def _coerce_color(value: object, field_name: str) -> RGBA:
    if not isinstance(value, list) or len(value) != 4:
        raise AxisConfigError(f"{field_name} must be a list of 4 integers")
    return tuple(_coerce_int(v, field_name) for v in value)  # type: ignore[return-value]


def _coerce_spacing(value: object, field_name: str) -> Spacing:
    if not isinstance(value, str) or value.upper() not in Spacing.__members__:
        raise AxisConfigError(f"{field_name} must name a spacing such as `HOURS`")
    return Spacing[value.upper()]


def _coerce_font(value: object) -> FontParms:
    if not isinstance(value, dict) or set(value) - _FONT_KEYS:
        raise AxisConfigError(f"axis.font must be a table with keys {sorted(_FONT_KEYS)}")
    kwargs: dict[str, Any] = {}
    if "family" in value:
        kwargs["family"] = _coerce_optional_str(value["family"], "axis.font.family")
    if "size_px" in value:
        kwargs["size_px"] = _coerce_number(value["size_px"], "axis.font.size_px")
    if "color" in value:
        kwargs["color"] = _coerce_color(value["color"], "axis.font.color")
    return FontParms(**kwargs)
