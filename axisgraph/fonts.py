from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from axisgraph.errors import AxisConfigError


RGBA = tuple[int, int, int, int]
Justification = Literal["left", "center", "right"]
Baseline = Literal["top", "center", "base", "bottom"]

BLACK: RGBA = (0, 0, 0, 255)
DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0

_JUSTIFICATIONS = ("left", "center", "right")
_BASELINES = ("top", "center", "base", "bottom")


@dataclass(frozen=True)
class FontParms:
    """Font and placement settings used for tick labels and axis labels.

    `angle` is in degrees, counterclockwise in surface space.
    """

    family: str = DEFAULT_FONT_FAMILY
    size_px: float = DEFAULT_FONT_SIZE_PX
    color: RGBA = BLACK
    justification: Justification = "left"
    baseline: Baseline = "base"
    angle: float = 0.0

    def __post_init__(self) -> None:
        if not self.family.strip():
            raise AxisConfigError("font family must be a non-empty string")
        if self.size_px <= 0:
            raise AxisConfigError("font size_px must be > 0")
        if self.justification not in _JUSTIFICATIONS:
            raise AxisConfigError(f"unknown justification: {self.justification}")
        if self.baseline not in _BASELINES:
            raise AxisConfigError(f"unknown baseline: {self.baseline}")
        validate_color(self.color, "font color")

    def placed(self, justification: Justification, baseline: Baseline, angle: float = 0.0) -> FontParms:
        return replace(self, justification=justification, baseline=baseline, angle=angle)


@dataclass(frozen=True)
class TextMetrics:
    ascent: float
    descent: float
    advance: float

    @property
    def height(self) -> float:
        return self.ascent + self.descent


def validate_color(color: RGBA, field_name: str = "color") -> RGBA:
    if len(color) != 4:
        raise AxisConfigError(f"{field_name} must have 4 channels (r, g, b, a)")
    for channel in color:
        if not isinstance(channel, int) or channel < 0 or channel > 255:
            raise AxisConfigError(f"{field_name} channels must be integers in [0, 255]")
    return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))
