"""Curve editor state shared by the interaction layer and the widget."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

import numpy as np

from ....config import (
    DEFAULT_CANVAS_SIZE,
    DEFAULT_CLAMPED_SLOPES,
    DEFAULT_MIN_BOUND,
    DEFAULT_SPLINE_MODE,
)
from ....core.curve_resolver import CurveSamples, curve_value, sample_curve
from ....core.point_collection import Axis, Bound, ClosestPoint, ControlPoint, OrderedPointSet
from ....core.spline import Spline, SplineMode, build_spline
from ....errors import EditorConfigurationError, SplineInputError
from ....errors.handler import ErrorHandler, ErrorSeverity
from ....events.bus import EventBus
from ....events.curve_events import (
    DragReleasedEvent,
    PointAddedEvent,
    PointRemovedEvent,
    PointsMovedEvent,
)

_LOGGER = logging.getLogger(__name__)


class CurveEditor:
    """Own the control points of one curve and keep its samples current.

    Points are stored in pixel space, with the upper bound set to the canvas
    size. :meth:`add` and :meth:`get_value` speak normalized coordinates;
    :meth:`move_point` and :meth:`closest_point` take pixels because they
    are fed straight from pointer positions.

    After each mutation the interpolator is rebuilt from fresh series and the
    interpolated buffers are resampled, then the matching event is published
    with ``editor=self``.
    """

    def __init__(
        self,
        width: int = DEFAULT_CANVAS_SIZE[0],
        height: int = DEFAULT_CANVAS_SIZE[1],
        mode: Union[SplineMode, str] = DEFAULT_SPLINE_MODE,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
        end_slopes: Tuple[float, float] = DEFAULT_CLAMPED_SLOPES,
    ) -> None:
        if int(width) != width or width <= 0 or height <= 0:
            raise EditorConfigurationError(f"Invalid canvas size {width!r}x{height!r}")

        self._width = int(width)
        self._height = float(height)
        self._mode = SplineMode(mode)
        self._end_slopes = (float(end_slopes[0]), float(end_slopes[1]))
        self._events = event_bus or EventBus()
        self._errors = error_handler or ErrorHandler(_LOGGER, self._events)

        self._points = OrderedPointSet()
        self._points.set_boundary(Bound.MIN, Axis.X, DEFAULT_MIN_BOUND[0])
        self._points.set_boundary(Bound.MIN, Axis.Y, DEFAULT_MIN_BOUND[1])
        self._points.set_boundary(Bound.MAX, Axis.X, self._width)
        self._points.set_boundary(Bound.MAX, Axis.Y, self._height)

        self._spline: Optional[Spline] = None
        self._samples: CurveSamples = sample_curve([], [], self._width, self._height)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def mode(self) -> SplineMode:
        return self._mode

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def spline(self) -> Optional[Spline]:
        """The interpolator fitted on the last refresh, if any."""
        return self._spline

    @property
    def x_series_interpolated(self) -> np.ndarray:
        return self._samples.x

    @property
    def y_series_interpolated(self) -> np.ndarray:
        return self._samples.y

    # ------------------------------------------------------------------
    # Point access
    # ------------------------------------------------------------------
    def count(self) -> int:
        return self._points.count()

    def x_series(self) -> List[float]:
        return self._points.x_series()

    def y_series(self) -> List[float]:
        return self._points.y_series()

    def point_at(self, index: int) -> Optional[ControlPoint]:
        return self._points.point_at(index)

    def normalized_point(self, index: int) -> Optional[Tuple[float, float]]:
        point = self._points.point_at(index)
        if point is None:
            return None
        return (point.x / self._width, point.y / self._height)

    def closest_point(self, x: float, y: float) -> Optional[ClosestPoint]:
        return self._points.closest_to(x, y)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(
        self,
        x: float,
        y: float,
        x_locked: bool = False,
        y_locked: bool = False,
        protected: bool = False,
    ) -> Optional[int]:
        """Add a point given in normalized ``[0, 1]`` coordinates."""

        point = ControlPoint(
            x=x * self._width,
            y=y * self._height,
            x_locked=x_locked,
            y_locked=y_locked,
            protected=protected,
        )
        return self.add_pixel_point(point)

    def add_pixel_point(self, point: ControlPoint) -> Optional[int]:
        index = self._points.add(point)
        if index is None:
            return None
        self.refresh()
        self._events.publish(PointAddedEvent(editor=self, index=index))
        return index

    def move_point(self, index: int, x: float, y: float) -> int:
        """Drag the point at *index* to pixel position ``(x, y)``; return its new index."""

        before = self._points.point_at(index)
        if before is None:
            return index
        new_index = self._points.update(index, x, y)
        if self._points.point_at(new_index).to_tuple() == before.to_tuple():
            # Rejected or fully locked; the curve is unchanged.
            return new_index
        self.refresh()
        self._events.publish(PointsMovedEvent(editor=self, index=new_index))
        return new_index

    def remove(self, index: int) -> Optional[ControlPoint]:
        removed = self._points.remove(index)
        if removed is None:
            return None
        self.refresh()
        self._events.publish(PointRemovedEvent(editor=self, index=index, point=removed))
        return removed

    def release(self, index: Optional[int] = None) -> None:
        """Announce the end of a drag."""
        self._events.publish(DragReleasedEvent(editor=self, index=index))

    def set_spline_type(self, mode: Union[SplineMode, str]) -> None:
        self._mode = SplineMode(mode)
        self.refresh()

    def set_end_slopes(self, start: float, end: float) -> None:
        """Set the normalized end slopes used in clamped mode."""
        self._end_slopes = (float(start), float(end))
        self.refresh()

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def _pixel_slopes(self) -> Tuple[float, float]:
        scale = self._height / self._width
        return (self._end_slopes[0] * scale, self._end_slopes[1] * scale)

    def refresh(self) -> None:
        """Refit the interpolator and resample the buffers from the current points."""

        xs = self._points.x_series()
        ys = self._points.y_series()
        if len(xs) < 2:
            self._spline = None
        else:
            start_slope, end_slope = self._pixel_slopes()
            try:
                self._spline = build_spline(xs, ys, self._mode, start_slope, end_slope)
            except SplineInputError as exc:
                # Keep the last good samples; get_value reports the error itself.
                self._spline = None
                self._errors.handle(
                    exc,
                    ErrorSeverity.WARNING,
                    context={"x_series": xs},
                    editor=self,
                )
                return
        self._samples = sample_curve(xs, ys, self._width, self._height, spline=self._spline)
        _LOGGER.debug("Resampled %s curve through %d points", self._mode.value, len(xs))

    def get_value(self, x: float) -> float:
        """Return the normalized curve value at normalized *x*."""

        start_slope, end_slope = self._pixel_slopes()
        return curve_value(
            self._points.x_series(),
            self._points.y_series(),
            x,
            self._width,
            self._height,
            self._mode,
            start_slope,
            end_slope,
            spline=self._spline,
        )
