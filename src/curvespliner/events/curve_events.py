from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4


@dataclass(frozen=True)
class CurveEvent:
    """Base notification published by the curve editor.

    ``editor`` is the live editor instance, not a snapshot. Handlers read
    from it but must not mutate it while the event is being delivered.
    """
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    editor: Any = None
    index: Optional[int] = None


@dataclass(frozen=True)
class PointsMovedEvent(CurveEvent):
    """A point changed position during a drag."""


@dataclass(frozen=True)
class DragReleasedEvent(CurveEvent):
    """The pointer released a dragged point."""


@dataclass(frozen=True)
class PointAddedEvent(CurveEvent):
    """A point was inserted into the editor's point set."""


@dataclass(frozen=True)
class PointRemovedEvent(CurveEvent):
    point: Any = None
