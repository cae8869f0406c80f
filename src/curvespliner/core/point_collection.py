"""Ordered, boundary-constrained collection of curve control points."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Tuple, Union

_LOGGER = logging.getLogger(__name__)


class Bound(str, enum.Enum):
    MIN = "min"
    MAX = "max"


class Axis(str, enum.Enum):
    X = "x"
    Y = "y"


@dataclass(eq=False)
class ControlPoint:
    """A single draggable knot of the curve.

    Points compare by identity: the collection relocates a moved point after
    re-sorting by looking for the very same object.
    """
    x: float
    y: float
    x_locked: bool = False
    y_locked: bool = False
    protected: bool = False

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ClosestPoint:
    """Result of a proximity query."""
    index: int
    distance: float


class OrderedPointSet:
    """Control points kept sorted ascending by ``x``.

    The lower bound is inclusive for both :meth:`add` and :meth:`update`.
    The upper bound is inclusive for :meth:`add` but exclusive for
    :meth:`update`, so a point can be inserted on the far edge but not
    dragged onto it.

    Indices are positions in the sorted sequence. Every mutation re-sorts,
    so an index returned by :meth:`add` or :meth:`update` is only valid
    until the next mutation; callers must keep the freshly returned index.
    """

    def __init__(self) -> None:
        self._points: List[ControlPoint] = []
        self._min = {Axis.X: 0.0, Axis.Y: 0.0}
        self._max = {Axis.X: math.inf, Axis.Y: math.inf}

    # ------------------------------------------------------------------
    # Boundaries
    # ------------------------------------------------------------------
    def set_boundary(self, bound: Union[Bound, str], axis: Union[Axis, str], value: float) -> None:
        """Set one scalar bound. ``min < max`` is the caller's responsibility."""

        bound = Bound(bound)
        axis = Axis(axis)
        target = self._min if bound is Bound.MIN else self._max
        target[axis] = float(value)

    @property
    def minimum(self) -> Tuple[float, float]:
        return (self._min[Axis.X], self._min[Axis.Y])

    @property
    def maximum(self) -> Tuple[float, float]:
        return (self._max[Axis.X], self._max[Axis.Y])

    def _within_closed(self, x: float, y: float) -> bool:
        return (
            self._min[Axis.X] <= x <= self._max[Axis.X]
            and self._min[Axis.Y] <= y <= self._max[Axis.Y]
        )

    def _within_half_open(self, x: float, y: float) -> bool:
        return (
            self._min[Axis.X] <= x < self._max[Axis.X]
            and self._min[Axis.Y] <= y < self._max[Axis.Y]
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add(self, point: ControlPoint) -> Optional[int]:
        """Insert a copy of *point* and return its post-sort index, or ``None`` if out of bounds."""

        if not self._within_closed(point.x, point.y):
            _LOGGER.debug("Rejected point (%s, %s): outside bounds", point.x, point.y)
            return None
        stored = replace(point)
        self._points.append(stored)
        self._sort()
        index = self._index_of(stored)
        _LOGGER.debug("Added point (%s, %s) at index %d", point.x, point.y, index)
        return index

    def remove(self, index: int) -> Optional[ControlPoint]:
        """Remove and return the point at *index*.

        Returns ``None`` without touching the set when *index* is out of range
        or the point is protected.
        """

        if not self._in_range(index) or self._points[index].protected:
            return None
        removed = self._points.pop(index)
        _LOGGER.debug("Removed point (%s, %s) from index %d", removed.x, removed.y, index)
        return removed

    def update(self, index: int, x: float, y: float) -> int:
        """Move the point at *index* towards ``(x, y)`` and return its new index.

        Locked axes keep their value. When the target lies outside
        ``[min, max)`` the point stays where it is and *index* is returned
        unchanged, as it is for an out-of-range *index*.
        """

        if not self._in_range(index):
            return index
        if not self._within_half_open(x, y):
            return index

        point = self._points[index]
        if not point.x_locked:
            point.x = x
        if not point.y_locked:
            point.y = y
        self._sort()
        return self._index_of(point)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def closest_to(self, x: float, y: float) -> Optional[ClosestPoint]:
        """Return the nearest point to ``(x, y)``; ties resolve to the lowest index."""

        if not self._points:
            return None

        closest_index = 0
        closest_distance = math.inf
        for i, p in enumerate(self._points):
            d = math.hypot(x - p.x, y - p.y)
            if d < closest_distance:
                closest_distance = d
                closest_index = i
        return ClosestPoint(index=closest_index, distance=closest_distance)

    def point_at(self, index: int) -> Optional[ControlPoint]:
        """Return a copy of the point at *index*, or ``None`` when out of range."""

        if not self._in_range(index):
            return None
        return replace(self._points[index])

    def count(self) -> int:
        return len(self._points)

    def x_series(self) -> List[float]:
        return [p.x for p in self._points]

    def y_series(self) -> List[float]:
        return [p.y for p in self._points]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ControlPoint]:
        return (replace(p) for p in self._points)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._points)

    def _sort(self) -> None:
        # list.sort is stable: equal x keep their insertion order.
        self._points.sort(key=lambda p: p.x)

    def _index_of(self, point: ControlPoint) -> int:
        for i, p in enumerate(self._points):
            if p is point:
                return i
        raise LookupError("point is not part of this collection")
