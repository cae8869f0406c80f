"""Piecewise-cubic interpolation through ordered knots.

Two families are provided:

* :class:`CubicSpline` - the C2 natural spline, or the clamped spline when
  both end slopes are given. Coefficients come from a tridiagonal solve.
* :class:`MonotoneCubicSpline` - the C1 Fritsch-Carlson Hermite spline, which
  keeps monotone runs of knots monotone.

Both are immutable snapshots of the series they were built from and must be
rebuilt after the knots change.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

import numpy as np

from ..errors import InsufficientKnotsError, NonIncreasingKnotsError, SplineInputError

_LOGGER = logging.getLogger(__name__)


class SplineMode(str, enum.Enum):
    NATURAL = "natural"
    CLAMPED = "clamped"
    MONOTONIC = "monotonic"


def _prepare_knots(x, y) -> Tuple[np.ndarray, np.ndarray]:
    """Copy the series into float arrays and enforce the knot contract."""

    xs = np.array(x, dtype=np.float64).ravel()
    ys = np.array(y, dtype=np.float64).ravel()

    if xs.shape != ys.shape:
        raise SplineInputError(
            f"x and y must have the same length, got {xs.size} and {ys.size}."
        )
    if xs.size < 2:
        raise InsufficientKnotsError(f"At least 2 points are required, got {xs.size}.")
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        raise SplineInputError("Knot coordinates must be finite.")

    steps = np.diff(xs)
    if np.any(steps <= 0):
        bad = int(np.argmax(steps <= 0))
        raise NonIncreasingKnotsError(
            f"x must be strictly increasing: x[{bad}]={xs[bad]!r}, "
            f"x[{bad + 1}]={xs[bad + 1]!r}."
        )
    return xs, ys


class _PiecewiseCubic(ABC):
    """Shared knot storage and segment lookup for the concrete splines."""

    def __init__(self, x, y) -> None:
        self.x, self.y = _prepare_knots(x, y)
        self.n = self.x.size

    @property
    @abstractmethod
    def mode(self) -> SplineMode:
        ...

    @property
    def knots(self) -> Tuple[np.ndarray, np.ndarray]:
        return self.x.copy(), self.y.copy()

    def _segment_indices(self, x_eval: np.ndarray) -> np.ndarray:
        # Rightmost i with x[i] <= x_eval, clamped so queries outside the
        # knot range use the first or last segment.
        indices = np.searchsorted(self.x, x_eval, side="right") - 1
        return np.clip(indices, 0, self.n - 2)

    @abstractmethod
    def _evaluate(self, x_eval: np.ndarray) -> np.ndarray:
        ...

    def evaluate(self, x_eval: Union[float, np.ndarray]):
        """Evaluate the spline at *x_eval* (scalar in, float out; array in, array out)."""

        x_eval = np.asarray(x_eval, dtype=np.float64)
        scalar = x_eval.ndim == 0
        result = self._evaluate(np.atleast_1d(x_eval))
        if scalar:
            return float(result[0])
        return result

    def __call__(self, x_eval: Union[float, np.ndarray]):
        return self.evaluate(x_eval)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mode={self.mode.value!r}, knots={self.n})"


class CubicSpline(_PiecewiseCubic):
    """Natural or clamped cubic spline.

    Segment ``i`` is ``a[i] + b[i]*t + c[i]*t**2 + d[i]*t**3`` with
    ``t = x - x[i]``.

    Args:
        x (array-like): Strictly increasing knot positions.
        y (array-like): Knot values.
        start_slope, end_slope (float, optional): First derivatives at the
            two ends. Supplying both gives the clamped spline, supplying
            neither the natural spline (zero curvature at the ends).
    """

    def __init__(self, x, y, start_slope: Optional[float] = None, end_slope: Optional[float] = None) -> None:
        super().__init__(x, y)
        if (start_slope is None) != (end_slope is None):
            raise SplineInputError("A clamped spline needs both start_slope and end_slope.")
        self.clamped = start_slope is not None
        self.start_slope = start_slope
        self.end_slope = end_slope
        self.a, self.b, self.c, self.d = self._solve()
        _LOGGER.debug("Fitted %r", self)

    @classmethod
    def from_coefficients(cls, x, a, b, c, d) -> "CubicSpline":
        """Build a spline directly from per-segment coefficients.

        ``x`` holds the ``n`` knots and each coefficient array the ``n - 1``
        segments. The knot values are recomputed from the polynomials.
        """

        x = np.array(x, dtype=np.float64)
        a, b, c, d = (np.array(v, dtype=np.float64) for v in (a, b, c, d))
        if not (a.size == b.size == c.size == d.size == x.size - 1):
            raise SplineInputError("Coefficient arrays must have one entry per segment.")

        spline = cls.__new__(cls)
        h_last = x[-1] - x[-2]
        y_last = a[-1] + h_last * (b[-1] + h_last * (c[-1] + h_last * d[-1]))
        spline.x, spline.y = _prepare_knots(x, np.append(a, y_last))
        spline.n = spline.x.size
        spline.clamped = False
        spline.start_slope = None
        spline.end_slope = None
        spline.a, spline.b, spline.c, spline.d = a, b, c, d
        return spline

    @property
    def mode(self) -> SplineMode:
        return SplineMode.CLAMPED if self.clamped else SplineMode.NATURAL

    @property
    def coefficients(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        return self.a.copy(), self.b.copy(), self.c.copy(), self.d.copy()

    def _solve(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        x = self.x
        a = self.y
        n = self.n - 1  # number of segments
        h = np.diff(x)

        # Right-hand side of the curvature system.
        rhs = np.zeros(n + 1)
        if self.clamped:
            rhs[0] = 3 * (a[1] - a[0]) / h[0] - 3 * self.start_slope
            rhs[n] = 3 * self.end_slope - 3 * (a[n] - a[n - 1]) / h[n - 1]
        rhs[1:n] = 3 / h[1:] * (a[2:] - a[1:-1]) - 3 / h[:-1] * (a[1:-1] - a[:-2])

        # Forward elimination of the tridiagonal system.
        l = np.zeros(n + 1)
        u = np.zeros(n + 1)
        z = np.zeros(n + 1)
        c = np.zeros(n + 1)

        if self.clamped:
            l[0] = 2 * h[0]
            u[0] = 0.5
            z[0] = rhs[0] / l[0]
        else:
            l[0] = 1.0

        for i in range(1, n):
            l[i] = 2 * (x[i + 1] - x[i - 1]) - h[i - 1] * u[i - 1]
            u[i] = h[i] / l[i]
            z[i] = (rhs[i] - h[i - 1] * z[i - 1]) / l[i]

        if self.clamped:
            l[n] = h[n - 1] * (2 - u[n - 1])
            z[n] = (rhs[n] - h[n - 1] * z[n - 1]) / l[n]
            c[n] = z[n]

        # Back substitution.
        for i in range(n - 1, -1, -1):
            c[i] = z[i] - u[i] * c[i + 1]

        b = (a[1:] - a[:-1]) / h - h * (c[1:] + 2 * c[:-1]) / 3
        d = (c[1:] - c[:-1]) / (3 * h)
        return a[:-1].copy(), b, c[:-1].copy(), d

    def derivative(self) -> "CubicSpline":
        """Return the first-derivative curve as another piecewise cubic."""

        return CubicSpline.from_coefficients(
            self.x,
            self.b,
            2 * self.c,
            3 * self.d,
            np.zeros_like(self.d),
        )

    def _evaluate(self, x_eval: np.ndarray) -> np.ndarray:
        idx = self._segment_indices(x_eval)
        t = x_eval - self.x[idx]
        return self.a[idx] + t * (self.b[idx] + t * (self.c[idx] + t * self.d[idx]))


class MonotoneCubicSpline(_PiecewiseCubic):
    """
    Monotone cubic Hermite interpolation (Fritsch-Carlson).
    Preserves monotonicity wherever the knots are monotone and is C1 continuous.
    """

    def __init__(self, x, y) -> None:
        """
        Args:
            x (array-like): X coordinates of control points. Must be strictly increasing.
            y (array-like): Y coordinates of control points.
        """
        super().__init__(x, y)
        self.m = self._tangents()
        _LOGGER.debug("Fitted %r", self)

    @property
    def mode(self) -> SplineMode:
        return SplineMode.MONOTONIC

    @property
    def tangents(self) -> np.ndarray:
        return self.m.copy()

    def _tangents(self) -> np.ndarray:
        # 1. Secant slopes
        delta = np.diff(self.y) / np.diff(self.x)

        # 2. Initial tangents: one-sided at the ends, averaged inside
        m = np.empty(self.n, dtype=np.float64)
        m[0] = delta[0]
        m[-1] = delta[-1]
        if self.n > 2:
            m[1:-1] = (delta[:-1] + delta[1:]) / 2

        # 3. Flat segments stay flat
        flat = delta == 0
        m[:-1][flat] = 0.0
        m[1:][flat] = 0.0

        # 4. Restrict (alpha, beta) to the circle of radius 3
        alpha = np.zeros_like(delta)
        beta = np.zeros_like(delta)
        sloped = ~flat
        alpha[sloped] = m[:-1][sloped] / delta[sloped]
        beta[sloped] = m[1:][sloped] / delta[sloped]
        dist = alpha ** 2 + beta ** 2

        for i in np.flatnonzero(dist > 9):
            tau = 3 / np.sqrt(dist[i])
            m[i] = tau * alpha[i] * delta[i]
            m[i + 1] = tau * beta[i] * delta[i]

        return m

    def _evaluate(self, x_eval: np.ndarray) -> np.ndarray:
        idx = self._segment_indices(x_eval)

        xi = self.x[idx]
        h = self.x[idx + 1] - xi
        t = (x_eval - xi) / h
        t2 = t * t
        t3 = t2 * t

        # Cubic Hermite basis
        h00 = 2 * t3 - 3 * t2 + 1
        h10 = t3 - 2 * t2 + t
        h01 = -2 * t3 + 3 * t2
        h11 = t3 - t2

        return (
            h00 * self.y[idx]
            + h10 * h * self.m[idx]
            + h01 * self.y[idx + 1]
            + h11 * h * self.m[idx + 1]
        )


Spline = Union[CubicSpline, MonotoneCubicSpline]


def build_spline(
    x,
    y,
    mode: Union[SplineMode, str] = SplineMode.NATURAL,
    start_slope: Optional[float] = None,
    end_slope: Optional[float] = None,
) -> Spline:
    """Fit the interpolator selected by *mode* through ``(x, y)``.

    Clamped splines default a missing end slope to ``0.0``; the other modes
    ignore the slopes.
    """

    mode = SplineMode(mode)
    if mode is SplineMode.MONOTONIC:
        return MonotoneCubicSpline(x, y)
    if mode is SplineMode.CLAMPED:
        return CubicSpline(
            x,
            y,
            start_slope=0.0 if start_slope is None else start_slope,
            end_slope=0.0 if end_slope is None else end_slope,
        )
    return CubicSpline(x, y)
