"""Tests for the event dispatcher."""

from tracelens.core.shared.events import (
    Event,
    EventDispatcher,
    EventType,
    StreamUpdateEvent,
    as_handler,
)


class TestEventDispatcher:
    """Tests for EventDispatcher."""

    def test_dispatch_to_callable(self):
        received = []
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.STREAM_COMPLETED, received.append)

        event = Event(EventType.STREAM_COMPLETED, {"running_count": 3})
        dispatcher.dispatch(event)
        assert received == [event]

    def test_dispatch_to_handler(self, recorder):
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.STREAM_UPDATE, recorder)
        dispatcher.dispatch(StreamUpdateEvent(EventType.STREAM_UPDATE, running_count=4))
        assert recorder.events[0].running_count == 4

    def test_only_matching_type(self, recorder):
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.ERROR, recorder)
        dispatcher.dispatch(Event(EventType.STREAM_COMPLETED))
        assert recorder.events == []

    def test_multiple_handlers_in_order(self):
        calls = []
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.ERROR, lambda e: calls.append("first"))
        dispatcher.subscribe(EventType.ERROR, lambda e: calls.append("second"))
        dispatcher.dispatch(Event(EventType.ERROR))
        assert calls == ["first", "second"]

    def test_dispatcher_is_a_handler(self, recorder):
        """A dispatcher can be handed to the coordinator as its consumer."""
        dispatcher = EventDispatcher()
        dispatcher.subscribe(EventType.ERROR, recorder)
        dispatcher.handle(Event(EventType.ERROR, {"error": "x"}))
        assert len(recorder.events) == 1


class TestAsHandler:
    def test_handler_passed_through(self, recorder):
        assert as_handler(recorder) is recorder

    def test_callable_wrapped(self):
        received = []
        handler = as_handler(received.append)
        handler.handle(Event(EventType.STREAM_STARTED))
        assert received[0].event_type is EventType.STREAM_STARTED
