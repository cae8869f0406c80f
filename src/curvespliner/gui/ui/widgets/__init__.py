"""Qt widgets for the curve editor."""

from .curve_graph import CurveGraph

__all__ = ["CurveGraph"]
