"""Domain entities and per-frame layout values.

Re-exported so callers can ``from daywheel.models import Event, TimelineLayout``.
"""
from daywheel.models.entities import DailySnapshot, Event, SleepData, Task
from daywheel.models.layout import (
    EventLayout,
    HitResult,
    LayeredInterval,
    PopupItem,
    SelectionState,
    TaskLayout,
    TimeInterval,
    TimelineLayout,
)
