"""Custom exception hierarchy for curvespliner."""

from __future__ import annotations


class CurveSplinerError(Exception):
    """Base class for all custom errors raised by curvespliner."""


# --- 2-layer hierarchy ---

class DomainError(CurveSplinerError):
    """Base class for errors in the curve model itself."""


class ApplicationError(CurveSplinerError):
    """Base class for errors raised while orchestrating the editor."""


# --- Domain errors ---

class SplineInputError(DomainError, ValueError):
    """Raised when the knot series cannot be fitted by an interpolator."""


class InsufficientKnotsError(SplineInputError):
    """Raised when fewer than two knots are supplied."""


class NonIncreasingKnotsError(SplineInputError):
    """Raised when knot x values are not strictly increasing."""


# --- Application errors ---

class EditorConfigurationError(ApplicationError):
    """Raised when the editor is created with an unusable canvas size."""


__all__ = [
    "ApplicationError",
    "CurveSplinerError",
    "DomainError",
    "EditorConfigurationError",
    "InsufficientKnotsError",
    "NonIncreasingKnotsError",
    "SplineInputError",
]
