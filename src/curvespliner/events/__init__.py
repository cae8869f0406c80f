from .bus import EventBus, Subscription
from .curve_events import (
    CurveEvent,
    DragReleasedEvent,
    PointAddedEvent,
    PointRemovedEvent,
    PointsMovedEvent,
)

__all__ = [
    "CurveEvent",
    "DragReleasedEvent",
    "EventBus",
    "PointAddedEvent",
    "PointRemovedEvent",
    "PointsMovedEvent",
    "Subscription",
]
