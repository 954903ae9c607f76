"""Builds the ``TimelineLayout`` for one local day.

The layout is a pure function of the day's events and tasks, "now" and
the timezone. It is recomputed from scratch on every change.
"""
import logging
from dataclasses import replace
from datetime import date, datetime, tzinfo
from typing import Iterable

from daywheel.config import BACK_TO_BACK_TOLERANCE_MINUTES
from daywheel.models.entities import DailySnapshot, Event, Task
from daywheel.models.layout import EventLayout, TaskLayout, TimeInterval, TimelineLayout
from daywheel.services.overlap import assign_layers, back_to_back_markers
from daywheel.services.time_angle import (
    angle_for_instant_precise,
    angle_for_minutes,
    minutes_since_midnight,
)

logger = logging.getLogger(__name__)


def filter_snapshot_by_date(snapshot: DailySnapshot, target_date: date, zone: tzinfo) -> DailySnapshot:
    """Keep only what belongs on the dial for ``target_date``.

    Events starting that local day are kept, as are all-day events; tasks
    must fall on that local day. Sleep is kept only when attributed to it.
    """
    events = [
        event for event in snapshot.events
        if event.start.astimezone(zone).date() == target_date or event.all_day
    ]
    tasks = [
        task for task in snapshot.tasks
        if task.date_time.astimezone(zone).date() == target_date
    ]
    logger.debug(
        f"Filtering for {target_date}: {len(snapshot.events)} events -> {len(events)}, "
        f"{len(snapshot.tasks)} tasks -> {len(tasks)}"
    )
    filtered = snapshot.with_items(events, tasks)
    if filtered.sleep is not None and filtered.sleep.date != target_date:
        filtered = replace(filtered, sleep=None)
    return filtered


def _event_layout(event: Event, now_minutes: int, zone: tzinfo) -> EventLayout:
    start_minutes = minutes_since_midnight(event.start, zone)
    end_minutes = minutes_since_midnight(event.end, zone)
    if end_minutes < start_minutes:
        logger.warning(
            f"Event {event.id!r} ends before it starts on the dial "
            f"({end_minutes} < {start_minutes}); treating it as punctual"
        )
        end_minutes = start_minutes
    return EventLayout(
        event=event,
        start_minutes=start_minutes,
        end_minutes=end_minutes,
        start_angle=angle_for_instant_precise(event.start, zone),
        end_angle=angle_for_instant_precise(event.end, zone),
        is_past=end_minutes <= now_minutes,
    )


def _task_layout(task: Task, now_minutes: int, zone: tzinfo) -> TaskLayout:
    minutes = minutes_since_midnight(task.date_time, zone)
    return TaskLayout(
        task=task,
        angle=angle_for_minutes(minutes),
        is_past=minutes <= now_minutes,
    )


def build_timeline_layout(
    events: Iterable[Event],
    tasks: Iterable[Task],
    now: datetime,
    zone: tzinfo,
    back_to_back_tolerance_minutes: int = BACK_TO_BACK_TOLERANCE_MINUTES,
) -> TimelineLayout:
    events = list(events)
    now_minutes = minutes_since_midnight(now, zone)

    base_events = sorted(
        (_event_layout(event, now_minutes, zone) for event in events if not event.all_day),
        key=lambda layout: layout.start_minutes,
    )

    intervals = [
        TimeInterval(
            id=layout.event.id,
            start_minutes=layout.start_minutes,
            end_minutes=layout.end_minutes,
        )
        for layout in base_events
    ]
    layers = {layered.interval.id: layered.layer_index for layered in assign_layers(intervals)}
    layered_events = tuple(
        replace(layout, layer_index=layers.get(layout.event.id, 0))
        for layout in base_events
    )

    task_layouts = tuple(_task_layout(task, now_minutes, zone) for task in tasks)
    markers = tuple(
        angle_for_minutes(minute)
        for minute in back_to_back_markers(intervals, back_to_back_tolerance_minutes)
    )

    return TimelineLayout(
        events=layered_events,
        tasks=task_layouts,
        back_to_back_markers=markers,
        all_day_count=sum(1 for event in events if event.all_day),
    )


def build_layout_for_snapshot(
    snapshot: DailySnapshot,
    target_date: date,
    now: datetime,
    zone: tzinfo,
    back_to_back_tolerance_minutes: int = BACK_TO_BACK_TOLERANCE_MINUTES,
) -> TimelineLayout:
    """Filter a snapshot to ``target_date`` and lay it out."""
    day = filter_snapshot_by_date(snapshot, target_date, zone)
    return build_timeline_layout(day.events, day.tasks, now, zone, back_to_back_tolerance_minutes)
