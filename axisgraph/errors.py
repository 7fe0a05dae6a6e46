from __future__ import annotations


class AxisConfigError(ValueError):
    """Raised when an axis, tick rule or transform parameter is rejected."""


class SingularTransformError(ArithmeticError):
    pass


class AxisStateError(RuntimeError):
    pass
