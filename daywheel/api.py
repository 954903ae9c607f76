"""Programmatic facade over the timeline engine.

Holds the one piece of long-lived state (the selection) and recomputes
everything else from the snapshot, the displayed date and "now". Front-ends
feed it pointer-ups and rotary deltas and paint what it returns.

Usage:
    from daywheel.core import bootstrap

    svc = bootstrap("Europe/Berlin")
    engine = svc.engine
    engine.refresh(snapshot, now=datetime.now(svc.zone))
    hit = engine.tap(radius=0.9, angle=270.0)
    engine.rotate(8.0)
"""
import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, List, Optional

from daywheel.config import BACK_TO_BACK_TOLERANCE_MINUTES, HitKind
from daywheel.events import AppEvent, event_bus
from daywheel.models.entities import DailySnapshot, SleepData
from daywheel.models.layout import HitResult, PopupItem, SelectionState, TimelineLayout
from daywheel.services import selection as nav
from daywheel.services.gradient import RGB, gradient_color
from daywheel.services.hit_test import DialGeometry, hit_test
from daywheel.services.sun_times import DEFAULT_SUN_TIMES, SunTimes, SunTimesProvider
from daywheel.services.time_angle import angle_for_instant_with_seconds
from daywheel.services.timeline_layout import build_timeline_layout, filter_snapshot_by_date

logger = logging.getLogger(__name__)


class TimelineEngine:
    """Layout, hit testing, selection and gradient for one dial."""

    def __init__(
        self,
        zone: tzinfo,
        sun_times: Optional[SunTimesProvider] = None,
        geometry: Optional[DialGeometry] = None,
        clock: Optional[Callable[[], datetime]] = None,
        back_to_back_tolerance_minutes: int = BACK_TO_BACK_TOLERANCE_MINUTES,
    ) -> None:
        self._zone = zone
        self._sun_provider = sun_times
        self._geometry = geometry or DialGeometry()
        self._clock = clock or (lambda: datetime.now(zone))
        self._tolerance = back_to_back_tolerance_minutes

        self._snapshot: Optional[DailySnapshot] = None
        self._now = self._clock()
        self._selected_date: date = self._now.astimezone(zone).date()
        self._day: Optional[DailySnapshot] = None
        self._layout = TimelineLayout()
        self._selection = nav.IDLE
        self._sun = DEFAULT_SUN_TIMES

    @property
    def zone(self) -> tzinfo:
        return self._zone

    @property
    def layout(self) -> TimelineLayout:
        return self._layout

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def selected_item(self) -> Optional[PopupItem]:
        return self._selection.selected

    @property
    def selected_date(self) -> date:
        return self._selected_date

    @property
    def now(self) -> datetime:
        """Instant of the last refresh; drives past dimming and the now pointer."""
        return self._now

    @property
    def is_today(self) -> bool:
        return self._selected_date == self._now.astimezone(self._zone).date()

    @property
    def sleep(self) -> Optional[SleepData]:
        """Sleep session of the displayed day, if any."""
        return self._day.sleep if self._day is not None else None

    @property
    def sun_times(self) -> SunTimes:
        return self._sun

    @property
    def geometry(self) -> DialGeometry:
        return self._geometry

    def set_geometry(self, geometry: DialGeometry) -> None:
        self._geometry = geometry

    def refresh(self, snapshot: Optional[DailySnapshot] = None, now: Optional[datetime] = None) -> TimelineLayout:
        """Rebuild the layout and re-resolve the selection against it."""
        if snapshot is not None:
            self._snapshot = snapshot
        self._now = now if now is not None else self._clock()

        if self._snapshot is None:
            self._day = None
            layout = TimelineLayout()
        else:
            self._day = filter_snapshot_by_date(self._snapshot, self._selected_date, self._zone)
            layout = build_timeline_layout(
                self._day.events, self._day.tasks, self._now, self._zone, self._tolerance,
            )
        self._sun = self._resolve_sun_times()
        self._layout = layout
        previous = self._selection.selected
        self._selection = nav.resolve_selection(self._selection, layout)
        # Subscribers of either event must already see the re-resolved selection
        event_bus.emit(AppEvent.LAYOUT_REBUILT, layout)
        if self._selection.selected != previous:
            event_bus.emit(AppEvent.SELECTION_CHANGED, self._selection)
        return layout

    def _resolve_sun_times(self) -> SunTimes:
        if self._sun_provider is not None:
            return self._sun_provider.for_date(self._selected_date)
        day = self._day
        if day is not None and day.sunrise_minutes is not None and day.sunset_minutes is not None:
            return SunTimes(day.sunrise_minutes, day.sunset_minutes)
        return DEFAULT_SUN_TIMES

    def set_date(self, target: date) -> TimelineLayout:
        """Show another day; a selection that does not exist there is dropped."""
        if target != self._selected_date:
            self._selected_date = target
            event_bus.emit(AppEvent.DATE_CHANGED, target)
        return self.refresh(now=self._now)

    def shift_date(self, days: int) -> TimelineLayout:
        return self.set_date(self._selected_date + timedelta(days=days))

    def _set_selection(self, new_state: SelectionState) -> None:
        changed = new_state.selected != self._selection.selected
        self._selection = new_state
        if changed:
            event_bus.emit(AppEvent.SELECTION_CHANGED, new_state)

    def tap(self, radius: float, angle: float) -> Optional[HitResult]:
        """Handle one pointer-up given in (radius, angle) dial coordinates."""
        hit = hit_test(self._layout, radius, angle, self._geometry, sleep=self.sleep, zone=self._zone)
        if hit is not None and hit.kind is HitKind.SLEEP:
            self._set_selection(nav.IDLE)
            event_bus.emit(AppEvent.SLEEP_TAPPED, hit.sleep)
            return hit
        item = hit.to_popup_item() if hit is not None else None
        self._set_selection(nav.on_tap(self._selection, self._layout, item))
        return hit

    def tap_at(self, x: float, y: float) -> Optional[HitResult]:
        radius, angle = self._geometry.touch_to_polar(x, y)
        return self.tap(radius, angle)

    def rotate(self, delta: float) -> SelectionState:
        self._set_selection(nav.on_rotary(self._selection, self._layout, delta))
        return self._selection

    def clear_selection(self) -> None:
        self._set_selection(nav.IDLE)

    def popup_ring(self) -> List[PopupItem]:
        return nav.build_popup_ring(self._layout)

    def gradient_color(self, angle: float) -> RGB:
        return gradient_color(angle, self._sun.sunrise_minutes, self._sun.sunset_minutes)

    def now_angle(self, now: Optional[datetime] = None) -> float:
        return angle_for_instant_with_seconds(now or self._now, self._zone)
