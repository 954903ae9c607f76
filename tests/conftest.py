"""Shared fixtures for Daywheel tests."""
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable

import pytest

from daywheel.events import event_bus
from daywheel.models.entities import Event, Task

DAY = date(2026, 3, 2)


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Isolate tests from each other's subscriptions."""
    event_bus.clear()
    yield
    event_bus.clear()


@pytest.fixture
def zone():
    return timezone.utc


@pytest.fixture
def day() -> date:
    return DAY


@pytest.fixture
def at(zone) -> Callable[..., datetime]:
    """``at(9, 30)`` -> 09:30 on DAY in the test zone; ``days=`` shifts the date."""
    def _at(hour: int, minute: int = 0, second: int = 0, days: int = 0) -> datetime:
        return datetime.combine(DAY + timedelta(days=days), time(hour, minute, second), tzinfo=zone)
    return _at


@pytest.fixture
def make_event(at):
    def _make(event_id: str, start: tuple, end: tuple, **kwargs) -> Event:
        return Event(event_id, kwargs.pop("title", event_id.title()), at(*start), at(*end), **kwargs)
    return _make


@pytest.fixture
def make_task(at):
    def _make(task_id: str, when: tuple, **kwargs) -> Task:
        return Task(task_id, kwargs.pop("title", task_id.title()), at(*when), **kwargs)
    return _make
