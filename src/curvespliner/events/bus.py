import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Type

from .curve_events import CurveEvent


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Type = CurveEvent
    handler: Callable = field(default=lambda e: None)
    active: bool = True

    def cancel(self):
        self.active = False


class EventBus:
    """Synchronous publish/subscribe keyed by event class.

    Handlers run on the publishing call stack in subscription order. The
    editor is single-threaded, so there is no locking here; a host that
    publishes from several threads must serialize its calls.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[CurveEvent], List[Subscription]] = defaultdict(list)

    def subscribe(self, event_type: Type[CurveEvent], handler: Callable) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        self._handlers[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription):
        subscription.active = False
        subs = self._handlers.get(subscription.event_type, [])
        try:
            subs.remove(subscription)
        except ValueError:
            pass

    def publish(self, event: CurveEvent):
        event_type = type(event)

        for sub in list(self._handlers[event_type]):
            if not sub.active:
                continue
            try:
                sub.handler(event)
            except Exception as e:
                self._logger.error(f"Handler failed for {event_type.__name__}: {e}")

    def subscriber_count(self, event_type: Type[CurveEvent]) -> int:
        return sum(1 for sub in self._handlers.get(event_type, []) if sub.active)
