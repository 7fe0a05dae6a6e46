from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable

import numpy as np

from axisgraph.errors import AxisConfigError, SingularTransformError


@dataclass(frozen=True)
class Margins:
    """Surface-space insets: x_lower is the left edge, y_lower the bottom edge."""

    x_lower: float = 0.0
    x_upper: float = 0.0
    y_lower: float = 0.0
    y_upper: float = 0.0

    def __post_init__(self) -> None:
        for name in ("x_lower", "x_upper", "y_lower", "y_upper"):
            if getattr(self, name) < 0:
                raise AxisConfigError(f"margin {name} must be >= 0")


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x_max and self.y <= y <= self.y_max


@dataclass(frozen=True)
class DesignRanges:
    x_lower: float
    x_upper: float
    y_lower: float
    y_upper: float


class CoordinateTransform:
    """Maps design-space points onto a width x height rendering surface.

    Surface coordinates grow right and down. With the usual bounds
    (x_lower < x_upper, y_lower < y_upper) design y grows upward, so the y
    scale is negative.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        margins: Margins | None = None,
        ranges: DesignRanges | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise AxisConfigError("width and height must be > 0")
        self._width = width
        self._height = height
        self._margins = Margins()
        self._ranges = DesignRanges(0.0, float(width), 0.0, float(height))
        self._theta = 0.0
        self._anchor = (0.0, 0.0)
        self._matrix: np.ndarray | None = None
        self._inverse: np.ndarray | None = None
        if margins is not None:
            self._apply_margins(margins)
        if ranges is not None:
            self._ranges = ranges

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def margins(self) -> Margins:
        return self._margins

    @property
    def ranges(self) -> DesignRanges:
        return self._ranges

    @property
    def x_lower(self) -> float:
        return self._ranges.x_lower

    @property
    def x_upper(self) -> float:
        return self._ranges.x_upper

    @property
    def y_lower(self) -> float:
        return self._ranges.y_lower

    @property
    def y_upper(self) -> float:
        return self._ranges.y_upper

    @property
    def rotation(self) -> float:
        return self._theta

    def set_margins(self, *values: float) -> None:
        """Set margins as (x, y), applied to both sides of each axis, or as
        (x_lower, x_upper, y_lower, y_upper)."""
        if len(values) == 2:
            x, y = values
            margins = Margins(x_lower=x, x_upper=x, y_lower=y, y_upper=y)
        elif len(values) == 4:
            margins = Margins(*values)
        else:
            raise AxisConfigError("set_margins takes either 2 or 4 values")
        self._apply_margins(margins)

    def set_ranges(self, x_lower: float, x_upper: float, y_lower: float, y_upper: float) -> None:
        for value in (x_lower, x_upper, y_lower, y_upper):
            if not math.isfinite(value):
                raise AxisConfigError("design ranges must be finite")
        self._ranges = DesignRanges(float(x_lower), float(x_upper), float(y_lower), float(y_upper))
        self._invalidate()

    def set_ranges_about(
        self,
        x_anchor: float,
        y_anchor: float,
        x_fraction: float,
        y_fraction: float,
        x_scale: float,
        y_scale: float,
    ) -> None:
        """Place (x_anchor, y_anchor) at a fractional position of the inner area."""
        self._ranges = ranges_about(
            self._width,
            self._height,
            self._margins,
            x_anchor,
            y_anchor,
            x_fraction,
            y_fraction,
            x_scale,
            y_scale,
        )
        self._invalidate()

    def set_rotation(self, theta: float, x_anchor: float, y_anchor: float) -> None:
        self._theta = float(theta)
        self._anchor = (float(x_anchor), float(y_anchor))
        self._invalidate()

    def overlay(self, x_lower: float, x_upper: float, y_lower: float, y_upper: float) -> CoordinateTransform:
        """Return a transform on the same surface and margins with its own design ranges."""
        other = CoordinateTransform(self._width, self._height, margins=self._margins)
        other.set_ranges(x_lower, x_upper, y_lower, y_upper)
        return other

    @property
    def x_scale_signed(self) -> float:
        return self._scales()[0]

    @property
    def y_scale_signed(self) -> float:
        return self._scales()[1]

    @property
    def x_scale(self) -> float:
        return abs(self.x_scale_signed)

    @property
    def y_scale(self) -> float:
        return abs(self.y_scale_signed)

    def polarity_x(self) -> int:
        return -1 if self.x_scale_signed < 0 else 1

    def polarity_y(self) -> int:
        return -1 if self.y_scale_signed < 0 else 1

    @property
    def x_axis_points_right(self) -> bool:
        return self.x_scale_signed > 0

    @property
    def y_axis_points_down(self) -> bool:
        return self.y_scale_signed > 0

    @property
    def parity(self) -> int:
        product = (self.x_upper - self.x_lower) * (self.y_upper - self.y_lower)
        if product > 0:
            return 1
        if product < 0:
            return -1
        return 0

    def matrix(self) -> np.ndarray:
        return self._forward_matrix().copy()

    @property
    def has_inverse(self) -> bool:
        self._forward_matrix()
        return self._inverse is not None

    def forward(self, x: float, y: float) -> tuple[float, float]:
        m = self._forward_matrix()
        u = m[0, 0] * x + m[0, 1] * y + m[0, 2]
        v = m[1, 0] * x + m[1, 1] * y + m[1, 2]
        return (float(u), float(v))

    def forward_many(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        m = self._forward_matrix()
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        return (m[0, 0] * xs + m[0, 1] * ys + m[0, 2], m[1, 0] * xs + m[1, 1] * ys + m[1, 2])

    def inverse(self, u: float, v: float) -> tuple[float, float]:
        self._forward_matrix()
        inv = self._inverse
        if inv is None:
            raise SingularTransformError("coordinate transform is not invertible")
        x = inv[0, 0] * u + inv[0, 1] * v + inv[0, 2]
        y = inv[1, 0] * u + inv[1, 1] * v + inv[1, 2]
        return (float(x), float(y))

    def surface_angle(self, design_angle: float, counterclockwise: bool = True) -> float:
        """Convert a design-space angle (radians) to the matching surface angle."""
        sx, sy = self._scales()
        # Surface y grows downward, so a visually counterclockwise angle uses -sy.
        angle = math.atan2(-sy * math.sin(design_angle), sx * math.cos(design_angle))
        if self._theta != 0.0:
            angle -= self._theta
        return angle if counterclockwise else -angle

    def bounding_box(self, design: bool = False) -> Rect:
        if not design:
            return Rect(0.0, 0.0, float(self._width), float(self._height))
        corners = [(0.0, 0.0), (float(self._width), 0.0), (0.0, float(self._height)), (float(self._width), float(self._height))]
        points = np.asarray([self.inverse(u, v) for u, v in corners], dtype=np.float64)
        lo = points.min(axis=0)
        hi = points.max(axis=0)
        return Rect(float(lo[0]), float(lo[1]), float(hi[0] - lo[0]), float(hi[1] - lo[1]))

    def maybe_visible(self, points: Iterable[tuple[float, float]], design: bool = True) -> bool:
        """True when any control point falls inside the visible bounding box."""
        box = self.bounding_box(design=design)
        pts = np.asarray(list(points), dtype=np.float64).reshape(-1, 2)
        if pts.size == 0:
            return False
        inside = (pts[:, 0] >= box.x) & (pts[:, 0] <= box.x_max) & (pts[:, 1] >= box.y) & (pts[:, 1] <= box.y_max)
        return bool(np.any(inside))

    def _apply_margins(self, margins: Margins) -> None:
        if margins.x_lower + margins.x_upper >= self._width or margins.y_lower + margins.y_upper >= self._height:
            raise AxisConfigError("margins must leave a positive drawing area")
        self._margins = margins
        self._invalidate()

    def _invalidate(self) -> None:
        self._matrix = None
        self._inverse = None

    def _scales(self) -> tuple[float, float]:
        inner_w = self._width - self._margins.x_lower - self._margins.x_upper
        inner_h = self._height - self._margins.y_lower - self._margins.y_upper
        dx = self.x_upper - self.x_lower
        dy = self.y_upper - self.y_lower
        # A collapsed design range yields a singular map.
        sx = inner_w / dx if dx != 0 else 0.0
        sy = -inner_h / dy if dy != 0 else 0.0
        return (sx, sy)

    def _forward_matrix(self) -> np.ndarray:
        if self._matrix is not None:
            return self._matrix
        sx, sy = self._scales()
        tx = self._margins.x_lower - sx * self.x_lower
        ty = self._height - self._margins.y_lower - sy * self.y_lower
        m = np.array([[sx, 0.0, tx], [0.0, sy, ty], [0.0, 0.0, 1.0]], dtype=np.float64)
        if self._theta != 0.0:
            ax = sx * self._anchor[0] + tx
            ay = sy * self._anchor[1] + ty
            c = math.cos(self._theta)
            s = math.sin(self._theta)
            rot = np.array(
                [[c, -s, ax - c * ax + s * ay], [s, c, ay - s * ax - c * ay], [0.0, 0.0, 1.0]],
                dtype=np.float64,
            )
            m = rot @ m
        self._matrix = m
        det = m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
        self._inverse = np.linalg.inv(m) if det != 0.0 and math.isfinite(det) else None
        return m


def ranges_about(
    width: float,
    height: float,
    margins: Margins,
    x_anchor: float,
    y_anchor: float,
    x_fraction: float,
    y_fraction: float,
    x_scale: float,
    y_scale: float,
) -> DesignRanges:
    if x_scale <= 0 or y_scale <= 0:
        raise AxisConfigError("scale factors must be > 0")
    inner_w = width - (margins.x_lower + margins.x_upper)
    inner_h = height - (margins.y_lower + margins.y_upper)
    xus = x_fraction * inner_w
    yus = y_fraction * inner_h
    return DesignRanges(
        x_lower=x_anchor - xus / x_scale,
        x_upper=x_anchor + (inner_w - xus) / x_scale,
        y_lower=y_anchor - yus / y_scale,
        y_upper=y_anchor + (inner_h - yus) / y_scale,
    )
