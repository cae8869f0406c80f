"""Pointer and keyboard state machine for the curve editor.

The machine has three states - idle, hovering a point and dragging a point -
and only touches the editor through its add/move/remove/release calls. It
has no dependency on Qt so any front end can feed it discrete input events.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional, Tuple

from ....config import CONTROL_POINT_RADIUS_IDLE, DELETE_POINT_KEY
from .curve_editor import CurveEditor

_LOGGER = logging.getLogger(__name__)


class InteractionState(enum.Enum):
    IDLE = "idle"
    HOVERING = "hovering"
    DRAGGING = "dragging"


class CurveInteraction:
    """Translate pointer input into curve editor mutations.

    Positions are pixel coordinates in curve space, with ``y`` growing
    upwards. ``index`` is the index of the hovered or dragged point and is
    refreshed from the editor after each move, since dragging past a
    neighbour re-sorts the points.
    """

    def __init__(
        self,
        editor: CurveEditor,
        hover_radius: float = CONTROL_POINT_RADIUS_IDLE,
        delete_key: str = DELETE_POINT_KEY,
    ) -> None:
        self._editor = editor
        self._hover_radius = float(hover_radius)
        self._delete_key = delete_key
        self._state = InteractionState.IDLE
        self._index: Optional[int] = None
        self._pointer: Optional[Tuple[float, float]] = None

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def index(self) -> Optional[int]:
        return self._index

    @property
    def pointer(self) -> Optional[Tuple[float, float]]:
        return self._pointer

    def _transition(self, state: InteractionState, index: Optional[int] = None) -> None:
        if state is InteractionState.IDLE:
            index = None
        if (state, index) != (self._state, self._index):
            _LOGGER.debug("Interaction %s(%s) -> %s(%s)", self._state.value, self._index, state.value, index)
        self._state = state
        self._index = index

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------
    def pointer_moved(self, x: float, y: float) -> None:
        self._pointer = (x, y)

        if self._state is InteractionState.DRAGGING:
            new_index = self._editor.move_point(self._index, x, y)
            self._transition(InteractionState.DRAGGING, new_index)
            return

        closest = self._editor.closest_point(x, y)
        if closest is not None and closest.distance <= self._hover_radius:
            self._transition(InteractionState.HOVERING, closest.index)
        else:
            self._transition(InteractionState.IDLE)

    def pointer_pressed(self) -> None:
        if self._state is InteractionState.HOVERING:
            self._transition(InteractionState.DRAGGING, self._index)

    def pointer_released(self) -> None:
        if self._state is not InteractionState.DRAGGING:
            return
        index = self._index
        self._transition(InteractionState.HOVERING, index)
        self._editor.release(index)

    def double_clicked(self) -> None:
        """Remove the point under the pointer, or add one where the pointer is."""

        if self._state is not InteractionState.IDLE:
            self._remove_active()
            return
        if self._pointer is None:
            return

        x, y = self._pointer
        index = self._editor.add(x / self._editor.width, y / self._editor.height)
        if index is not None:
            self._transition(InteractionState.HOVERING, index)

    def pointer_left(self) -> None:
        self._pointer = None
        self._transition(InteractionState.IDLE)

    def key_released(self, key: str) -> None:
        if self._pointer is None:
            return
        if key == self._delete_key and self._state is not InteractionState.IDLE:
            self._remove_active()

    def _remove_active(self) -> None:
        # Protected points stay, but the pointer lets go of them all the same.
        self._editor.remove(self._index)
        self._transition(InteractionState.IDLE)
