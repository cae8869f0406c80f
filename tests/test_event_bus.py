"""Tests for the synchronous event bus and the error handler."""

import logging
from unittest.mock import Mock

import pytest

from curvespliner.errors import NonIncreasingKnotsError
from curvespliner.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from curvespliner.events import EventBus, PointAddedEvent, PointRemovedEvent


def test_publish_reaches_matching_subscribers_only():
    bus = EventBus()
    added, removed = [], []
    bus.subscribe(PointAddedEvent, added.append)
    bus.subscribe(PointRemovedEvent, removed.append)

    event = PointAddedEvent(index=3)
    bus.publish(event)

    assert added == [event]
    assert removed == []


def test_handlers_run_in_subscription_order():
    bus = EventBus()
    calls = []
    bus.subscribe(PointAddedEvent, lambda e: calls.append("first"))
    bus.subscribe(PointAddedEvent, lambda e: calls.append("second"))

    bus.publish(PointAddedEvent())

    assert calls == ["first", "second"]


def test_unsubscribe_and_cancel():
    bus = EventBus()
    handler = Mock()
    sub = bus.subscribe(PointAddedEvent, handler)
    other = bus.subscribe(PointAddedEvent, handler)

    bus.unsubscribe(sub)
    other.cancel()
    bus.publish(PointAddedEvent())

    handler.assert_not_called()
    assert bus.subscriber_count(PointAddedEvent) == 0
    # Unsubscribing twice is harmless
    bus.unsubscribe(sub)


def test_failing_handler_is_logged(caplog):
    bus = EventBus()
    after = Mock()

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(PointAddedEvent, broken)
    bus.subscribe(PointAddedEvent, after)

    with caplog.at_level(logging.ERROR):
        bus.publish(PointAddedEvent())

    after.assert_called_once()
    assert "boom" in caplog.text


def test_events_are_immutable():
    event = PointAddedEvent(index=1)

    with pytest.raises(AttributeError):
        event.index = 2


def test_error_handler_logs_publishes_and_notifies(caplog):
    bus = EventBus()
    published = []
    bus.subscribe(ErrorOccurredEvent, published.append)
    handler = ErrorHandler(logging.getLogger("curvespliner.test"), bus)
    ui_callback = Mock()
    handler.register_ui_callback(ui_callback)
    error = NonIncreasingKnotsError("x must be strictly increasing")

    with caplog.at_level(logging.WARNING):
        handler.handle(error, ErrorSeverity.WARNING, context={"x_series": [1, 1]})

    assert "NonIncreasingKnotsError" in caplog.text
    assert published[0].error is error
    assert published[0].context == {"x_series": [1, 1]}
    ui_callback.assert_not_called()

    handler.handle(error)

    ui_callback.assert_called_once_with(str(error), ErrorSeverity.ERROR)
