"""Flet entry point: shows today's dial with a demo snapshot.

Arrow keys: left/right page through items, up/down change the day.
"""
import asyncio
import logging
from datetime import date, datetime, time, timedelta, tzinfo

import flet as ft

from daywheel.config import COLORS, ROTARY_STEP_THRESHOLD
from daywheel.core import bootstrap
from daywheel.events import AppEvent, event_bus
from daywheel.models.entities import DailySnapshot, Event, Task
from daywheel.services.sleep import sleep_session
from daywheel.ui.timeline_dial import TimelineDial

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_SECONDS = 30


def demo_snapshot(day: date, zone: tzinfo) -> DailySnapshot:
    def at(hour: int, minute: int = 0, offset_days: int = 0) -> datetime:
        return datetime.combine(day + timedelta(days=offset_days), time(hour, minute), tzinfo=zone)

    events = [
        Event("standup", "Standup", at(9, 30), at(9, 45), color=0xFF4CAF50),
        Event("design", "Design review", at(10), at(11, 30), color=0xFF2196F3),
        Event("pairing", "Pairing", at(10, 30), at(12), color=0xFFFF9800),
        Event("lunch", "Lunch", at(12), at(13)),
        Event("reminder", "Call the bank", at(15), at(15)),
        Event("offsite", "Team offsite", at(0), at(0, offset_days=1), all_day=True),
    ]
    tasks = [
        Task("t-1", "Submit expenses", at(14)),
        Task("t-2", "Water plants", at(19, 30)),
    ]
    sleep = sleep_session(at(23, 15, offset_days=-1), at(7, 5), day=day)
    return DailySnapshot(
        date_local=day,
        timezone_id=str(zone),
        events=events,
        tasks=tasks,
        last_sync_at=datetime.now(zone),
        sleep=sleep,
    )


def main(page: ft.Page) -> None:
    svc = bootstrap(datetime.now().astimezone().tzinfo)
    engine = svc.engine
    today = engine.selected_date
    logger.info(f"Showing {today} in {svc.zone}")
    engine.refresh(demo_snapshot(today, svc.zone))

    page.title = "Daywheel"
    page.bgcolor = COLORS["bg"]
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.vertical_alignment = ft.MainAxisAlignment.CENTER

    dial = TimelineDial(engine)
    status = ft.Text("", color=COLORS["text_muted"])

    def on_sleep_tapped(sleep) -> None:
        quality = f", quality {sleep.quality_score}" if sleep.quality_score is not None else ""
        status.value = f"Slept {sleep.duration_minutes // 60}h {sleep.duration_minutes % 60}m{quality}"
        page.update()

    sleep_sub = event_bus.subscribe(AppEvent.SLEEP_TAPPED, on_sleep_tapped)

    def on_key(e: ft.KeyboardEvent) -> None:
        if e.key == "Arrow Right":
            engine.rotate(ROTARY_STEP_THRESHOLD)
        elif e.key == "Arrow Left":
            engine.rotate(-ROTARY_STEP_THRESHOLD)
        elif e.key == "Arrow Up":
            engine.shift_date(1)
        elif e.key == "Arrow Down":
            engine.shift_date(-1)
        elif e.key == "Escape":
            engine.clear_selection()

    async def tick() -> None:
        while True:
            await asyncio.sleep(REFRESH_INTERVAL_SECONDS)
            engine.refresh()

    def on_close(_e) -> None:
        sleep_sub.unsubscribe()

    page.on_keyboard_event = on_key
    page.on_close = on_close
    page.add(dial, status)
    page.run_task(tick)


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
