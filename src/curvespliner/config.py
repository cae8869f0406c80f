"""Default configuration values for curvespliner."""

from __future__ import annotations

from typing import Final

# Interpolation model used when an editor is created without an explicit
# mode.  Accepted values are the ``SplineMode`` names: "natural", "clamped"
# and "monotonic".
DEFAULT_SPLINE_MODE: Final[str] = "natural"

# End slopes used by the clamped spline when the caller does not provide
# them, expressed in normalized units (dy/dx on the unit square).
DEFAULT_CLAMPED_SLOPES: Final[tuple[float, float]] = (0.0, 0.0)

# Lower bound of the point set on both axes.  The upper bound follows the
# canvas size so pixel-space points never leave the drawing area.
DEFAULT_MIN_BOUND: Final[tuple[float, float]] = (0.0, 0.0)

# ---------------------------------------------------------------------------
# UI interaction constants
# ---------------------------------------------------------------------------

DEFAULT_CANVAS_SIZE: Final[tuple[int, int]] = (300, 300)

# A pointer closer than this many pixels to a control point hovers it.
CONTROL_POINT_RADIUS_IDLE: Final[float] = 6.0
CONTROL_POINT_RADIUS_GRABBED: Final[float] = 12.0

# Spacing of the background grid as a fraction of the canvas.  Values outside
# ``(0, 1)`` disable the grid.
DEFAULT_GRID_STEP: Final[float] = 0.33

# Key that deletes the hovered point when released.
DELETE_POINT_KEY: Final[str] = "d"
