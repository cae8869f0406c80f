"""Numeric core: control point collection, spline fitting and sampling."""

from .curve_resolver import CurveSamples, curve_value, sample_curve
from .point_collection import Axis, Bound, ClosestPoint, ControlPoint, OrderedPointSet
from .spline import CubicSpline, MonotoneCubicSpline, Spline, SplineMode, build_spline

__all__ = [
    "Axis",
    "Bound",
    "ClosestPoint",
    "ControlPoint",
    "CubicSpline",
    "CurveSamples",
    "MonotoneCubicSpline",
    "OrderedPointSet",
    "Spline",
    "SplineMode",
    "build_spline",
    "curve_value",
    "sample_curve",
]
