"""Tests for the application event bus."""
import gc
import logging

from daywheel.events import AppEvent, event_bus


class Listener:
    def __init__(self):
        self.calls = []

    def handle(self, data):
        self.calls.append(data)


class TestEventBus:
    def test_emit_reaches_subscriber(self):
        received = []
        sub = event_bus.subscribe(AppEvent.DATE_CHANGED, lambda data: received.append(data))
        event_bus.emit(AppEvent.DATE_CHANGED, "2026-03-02")
        assert received == ["2026-03-02"]
        assert sub.active

    def test_other_events_not_delivered(self):
        received = []
        event_bus.subscribe(AppEvent.DATE_CHANGED, lambda data: received.append(data))
        event_bus.emit(AppEvent.LAYOUT_REBUILT, None)
        assert received == []

    def test_unsubscribe(self):
        received = []
        sub = event_bus.subscribe(AppEvent.LAYOUT_REBUILT, lambda data: received.append(data))
        sub.unsubscribe()
        event_bus.emit(AppEvent.LAYOUT_REBUILT, 1)
        assert received == []
        assert not sub.active

    def test_failing_handler_is_logged_and_skipped(self, caplog):
        received = []

        def broken(_data):
            raise RuntimeError("boom")

        event_bus.subscribe(AppEvent.SLEEP_TAPPED, broken, strong=True)
        event_bus.subscribe(AppEvent.SLEEP_TAPPED, lambda data: received.append(data))
        with caplog.at_level(logging.ERROR, logger="daywheel.events"):
            event_bus.emit(AppEvent.SLEEP_TAPPED, "sleep")
        assert received == ["sleep"]
        assert "boom" in caplog.text

    def test_bound_method_held_weakly(self):
        listener = Listener()
        event_bus.subscribe(AppEvent.SELECTION_CHANGED, listener.handle)
        event_bus.emit(AppEvent.SELECTION_CHANGED, 1)
        assert listener.calls == [1]
        del listener
        gc.collect()
        event_bus.emit(AppEvent.SELECTION_CHANGED, 2)
        assert not event_bus._listeners.get(AppEvent.SELECTION_CHANGED)

    def test_unsubscribe_by_callback(self):
        listener = Listener()
        event_bus.subscribe(AppEvent.LAYOUT_REBUILT, listener.handle)
        event_bus.unsubscribe(AppEvent.LAYOUT_REBUILT, listener.handle)
        event_bus.emit(AppEvent.LAYOUT_REBUILT, 1)
        assert listener.calls == []
