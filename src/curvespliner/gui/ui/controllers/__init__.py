"""Controller helpers for the curve editor."""

from .curve_editor import CurveEditor
from .curve_interaction import CurveInteraction, InteractionState

__all__ = [
    "CurveEditor",
    "CurveInteraction",
    "InteractionState",
]
