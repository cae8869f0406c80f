"""Interactive curve graph widget backed by :class:`CurveEditor`."""

from __future__ import annotations

import logging
from typing import Optional, Union

from PySide6.QtCore import QPointF, Qt, Signal
from PySide6.QtGui import QColor, QFont, QKeyEvent, QMouseEvent, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QWidget

from ....config import (
    CONTROL_POINT_RADIUS_GRABBED,
    CONTROL_POINT_RADIUS_IDLE,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_GRID_STEP,
    DEFAULT_SPLINE_MODE,
)
from ....core.spline import SplineMode
from ....events.curve_events import (
    DragReleasedEvent,
    PointAddedEvent,
    PointRemovedEvent,
    PointsMovedEvent,
)
from ..controllers.curve_editor import CurveEditor
from ..controllers.curve_interaction import CurveInteraction, InteractionState

_LOGGER = logging.getLogger(__name__)

_POINT_COLORS = {
    InteractionState.IDLE: QColor(255, 0, 0, 128),
    InteractionState.HOVERING: QColor(0, 0, 255, 128),
    InteractionState.DRAGGING: QColor(0, 200, 0, 128),
}
_CURVE_COLORS = {
    False: QColor(0, 128, 255),
    True: QColor(255, 128, 0),
}
_BORDER_COLORS = {
    False: QColor("#e3e3e3"),
    True: QColor("#d3d3ff"),
}


class CurveGraph(QWidget):
    """Paint a curve and its control points and route input to the editor.

    Double-click adds a point, or removes the hovered one; pressing and
    dragging moves the hovered point; releasing ``d`` deletes it.
    """

    curveMoved = Signal(object)
    curveReleased = Signal(object)
    pointAdded = Signal(int)
    pointRemoved = Signal(int)

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        width: int = DEFAULT_CANVAS_SIZE[0],
        height: int = DEFAULT_CANVAS_SIZE[1],
        mode: Union[SplineMode, str] = DEFAULT_SPLINE_MODE,
    ) -> None:
        super().__init__(parent)
        self.setFixedSize(width, height)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

        self.editor = CurveEditor(width, height, mode)
        self.interaction = CurveInteraction(self.editor)
        self._grid_step = DEFAULT_GRID_STEP
        self._focused = False

        bus = self.editor.events
        self._subscriptions = [
            bus.subscribe(PointsMovedEvent, lambda e: self.curveMoved.emit(e.editor)),
            bus.subscribe(DragReleasedEvent, lambda e: self.curveReleased.emit(e.editor)),
            bus.subscribe(PointAddedEvent, lambda e: self.pointAdded.emit(e.index)),
            bus.subscribe(PointRemovedEvent, lambda e: self.pointRemoved.emit(e.index)),
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def grid_step(self) -> float:
        return self._grid_step

    def set_grid_step(self, step: float) -> None:
        """Set the grid spacing in unit coordinates; values outside (0, 1) hide the grid."""
        self._grid_step = step if 0 < step < 1 else 0.0
        self.update()

    def set_spline_type(self, mode: Union[SplineMode, str]) -> None:
        self.editor.set_spline_type(mode)
        self.update()

    def add_point(self, x: float, y: float, **flags) -> Optional[int]:
        index = self.editor.add(x, y, **flags)
        self.update()
        return index

    def remove_point(self, index: int) -> None:
        self.editor.remove(index)
        self.update()

    def get_value(self, x: float) -> float:
        return self.editor.get_value(x)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        w, h = self.width(), self.height()

        painter.fillRect(self.rect(), QColor("white"))
        self._draw_grid(painter, w, h)
        self._draw_curve(painter, w, h)
        self._draw_points(painter, h)
        self._draw_coordinates(painter)

        painter.setPen(QPen(_BORDER_COLORS[self._focused], 1))
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(0, 0, w - 1, h - 1)
        painter.end()

    def _draw_grid(self, painter: QPainter, w: int, h: int) -> None:
        step = self._grid_step
        if step == 0:
            return
        painter.setPen(QPen(QColor(0, 0, 0, 25), 0.5))
        frac = step
        while frac <= 1 - step + 1e-9:
            painter.drawLine(QPointF(0, frac * h + 0.5), QPointF(w, frac * h + 0.5))
            painter.drawLine(QPointF(frac * w + 0.5, 0), QPointF(frac * w + 0.5, h))
            frac += step

    def _draw_curve(self, painter: QPainter, w: int, h: int) -> None:
        if self.editor.count() == 0:
            return

        xs = self.editor.x_series_interpolated
        ys = self.editor.y_series_interpolated

        path = QPainterPath()
        for i in range(len(xs)):
            # Keep the stroke inside the canvas
            y_val = min(max(ys[i] * h, 0.5), h - 0.5)
            pt = QPointF(xs[i] * w, h - y_val)
            if i == 0:
                path.moveTo(pt)
            else:
                path.lineTo(pt)

        dragging = self.interaction.state is InteractionState.DRAGGING
        painter.setPen(QPen(_CURVE_COLORS[dragging], 2 if dragging else 1))
        painter.setBrush(Qt.NoBrush)
        painter.drawPath(path)

    def _draw_points(self, painter: QPainter, h: int) -> None:
        state = self.interaction.state
        active = self.interaction.index
        painter.setPen(Qt.NoPen)

        for i, (x, y) in enumerate(zip(self.editor.x_series(), self.editor.y_series())):
            if i == active:
                painter.setBrush(_POINT_COLORS[state])
            else:
                painter.setBrush(_POINT_COLORS[InteractionState.IDLE])
            radius = CONTROL_POINT_RADIUS_IDLE
            if i == active and state is InteractionState.DRAGGING:
                radius = CONTROL_POINT_RADIUS_GRABBED
            painter.drawEllipse(QPointF(x, h - y), radius, radius)

    def _draw_coordinates(self, painter: QPainter) -> None:
        if self.interaction.state is not InteractionState.DRAGGING:
            return
        point = self.editor.normalized_point(self.interaction.index)
        if point is None:
            return
        painter.setPen(QColor(0, 0, 0, 77))
        painter.setFont(QFont("Courier", 10))
        painter.drawText(10, 20, f"x: {round(point[0], 3)}")
        painter.drawText(10, 35, f"y: {round(point[1], 3)}")

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _curve_position(self, event: QMouseEvent) -> tuple[float, float]:
        pos = event.position()
        return pos.x(), self.height() - pos.y()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        before = (self.interaction.state, self.interaction.index)
        self.interaction.pointer_moved(*self._curve_position(event))
        if before != (self.interaction.state, self.interaction.index) or \
                self.interaction.state is not InteractionState.IDLE:
            self.update()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        self.interaction.pointer_moved(*self._curve_position(event))
        self.interaction.pointer_pressed()
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        self.interaction.pointer_released()
        self.update()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        self.setFocus()
        self.interaction.pointer_moved(*self._curve_position(event))
        self.interaction.double_clicked()
        self.update()

    def enterEvent(self, event) -> None:
        self.setFocus()
        self._focused = True
        self.update()

    def leaveEvent(self, event) -> None:
        self.clearFocus()
        self._focused = False
        self.interaction.pointer_left()
        self.update()

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        self.interaction.key_released(event.text())
        self.update()
