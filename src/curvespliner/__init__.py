"""Interactive monotone-in-x curves through draggable control points."""

from .core import (
    Axis,
    Bound,
    ClosestPoint,
    ControlPoint,
    CubicSpline,
    CurveSamples,
    MonotoneCubicSpline,
    OrderedPointSet,
    SplineMode,
    build_spline,
    curve_value,
    sample_curve,
)
from .errors import (
    CurveSplinerError,
    InsufficientKnotsError,
    NonIncreasingKnotsError,
    SplineInputError,
)

__version__ = "0.3.0"

__all__ = [
    "Axis",
    "Bound",
    "ClosestPoint",
    "ControlPoint",
    "CubicSpline",
    "CurveSamples",
    "CurveSplinerError",
    "InsufficientKnotsError",
    "MonotoneCubicSpline",
    "NonIncreasingKnotsError",
    "OrderedPointSet",
    "SplineInputError",
    "SplineMode",
    "build_spline",
    "curve_value",
    "sample_curve",
]
