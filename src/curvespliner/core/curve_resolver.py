"""Curve sampling over the normalized output domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from ..errors import InsufficientKnotsError
from .spline import Spline, SplineMode, build_spline


@dataclass(frozen=True)
class CurveSamples:
    """Co-indexed normalized samples of a curve.

    ``x[k] == k / width`` and ``y[k]`` is the curve value in that column,
    divided by the canvas height.
    """
    x: np.ndarray
    y: np.ndarray

    def __post_init__(self) -> None:
        self.x.setflags(write=False)
        self.y.setflags(write=False)

    def __len__(self) -> int:
        return int(self.x.size)


def _check_canvas(width: int, height: float) -> None:
    if int(width) != width or width <= 0:
        raise ValueError(f"width must be a positive integer, got {width!r}")
    if height <= 0:
        raise ValueError(f"height must be positive, got {height!r}")


def _evaluate_with_clamping(
    spline: Spline,
    inputs: np.ndarray,
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float,
) -> np.ndarray:
    """Evaluate spline, holding the end values outside the knot range."""
    vals = spline.evaluate(inputs).copy()
    vals[inputs < start_x] = start_y
    vals[inputs > end_x] = end_y
    return vals


def sample_curve(
    x_series: Sequence[float],
    y_series: Sequence[float],
    width: int,
    height: float,
    mode: Union[SplineMode, str] = SplineMode.NATURAL,
    start_slope: Optional[float] = None,
    end_slope: Optional[float] = None,
    spline: Optional[Spline] = None,
) -> CurveSamples:
    """Sample the curve through the pixel-space knots at every integer column.

    Returns ``width`` samples. An empty series gives all-zero buffers and a
    single knot gives a constant curve. A prebuilt *spline* over the same
    series may be passed to skip refitting.
    """

    _check_canvas(width, height)
    width = int(width)
    xs = np.arange(width, dtype=np.float64) / width
    columns = np.arange(width, dtype=np.float64)

    if len(x_series) == 0:
        return CurveSamples(x=xs, y=np.zeros(width, dtype=np.float64))
    if len(x_series) == 1:
        return CurveSamples(x=xs, y=np.full(width, y_series[0] / height, dtype=np.float64))

    if spline is None:
        spline = build_spline(x_series, y_series, mode, start_slope, end_slope)
    ys = _evaluate_with_clamping(
        spline,
        columns,
        x_series[0], y_series[0],
        x_series[-1], y_series[-1],
    )
    return CurveSamples(x=xs, y=ys / height)


def curve_value(
    x_series: Sequence[float],
    y_series: Sequence[float],
    x: float,
    width: float,
    height: float,
    mode: Union[SplineMode, str] = SplineMode.NATURAL,
    start_slope: Optional[float] = None,
    end_slope: Optional[float] = None,
    spline: Optional[Spline] = None,
) -> float:
    """Return the normalized curve value at normalized *x*.

    At or before the first knot the first knot's value is returned, at or
    after the last knot the last knot's value, and in between the
    interpolator is evaluated in pixel space.
    """

    if width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive, got {width!r}x{height!r}")
    if len(x_series) == 0:
        raise InsufficientKnotsError("Cannot evaluate a curve without points.")

    if x <= x_series[0] / width:
        return float(y_series[0] / height)
    if x >= x_series[-1] / width:
        return float(y_series[-1] / height)

    if spline is None:
        spline = build_spline(x_series, y_series, mode, start_slope, end_slope)
    return float(spline.evaluate(x * width) / height)
