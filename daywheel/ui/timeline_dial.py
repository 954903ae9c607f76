"""Interactive 24-hour dial drawn with flet.canvas.

Paints whatever ``TimelineEngine`` returns: gradient hour ticks, the sleep
arc, layered event arcs, task ticks, back-to-back markers and the now
indicator. Taps and scroll deltas are forwarded to the engine; no hit
regions are computed here.
"""
import logging
import math
from typing import List

import flet as ft
import flet.canvas as cv

from daywheel.api import TimelineEngine
from daywheel.config import (
    COLORS,
    DIAL_SIZE,
    EVENT_LINE_RATIO,
    FONT_SIZE_LG,
    FONT_SIZE_SM,
    HOUR_TICK_LENGTH_RATIO,
    HOUR_TICK_STEP_MINUTES,
    MINUTES_PER_DAY,
    NOW_POINTER_LENGTH_RATIO,
    PAST_DIM_FACTOR,
    PopupKind,
    TICK_WIDTH_RATIO,
)
from daywheel.events import AppEvent, Subscription, event_bus
from daywheel.formatters import TimeFormatter
from daywheel.helpers import argb_to_hex
from daywheel.models.layout import EventLayout
from daywheel.services.hit_test import DialGeometry, sleep_arc_angles
from daywheel.services.time_angle import (
    angle_for_instant_precise,
    angle_for_minutes,
    minutes_since_midnight,
    polar_offset,
    sweep_for_arc,
)

logger = logging.getLogger(__name__)


def _stroke(color: str, width: float) -> ft.Paint:
    return ft.Paint(
        color=color,
        stroke_width=width,
        style=ft.PaintingStyle.STROKE,
        stroke_cap=ft.StrokeCap.ROUND,
    )


class TimelineDial(ft.Container):
    """Circular day timeline. Tap to select, scroll to page through items."""

    def __init__(self, engine: TimelineEngine, size: int = DIAL_SIZE) -> None:
        self._engine = engine
        self._size = size
        self._geometry = DialGeometry.from_size(size, size)
        engine.set_geometry(self._geometry)
        self._subscriptions: List[Subscription] = []

        self._canvas = cv.Canvas(shapes=[], width=size, height=size)
        self._title = ft.Text("", size=FONT_SIZE_LG, color=COLORS["text"], text_align=ft.TextAlign.CENTER)
        self._subtitle = ft.Text("", size=FONT_SIZE_SM, color=COLORS["text_muted"], text_align=ft.TextAlign.CENTER)
        label = ft.Container(
            content=ft.Column(
                [self._title, self._subtitle],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=2,
                tight=True,
            ),
            width=size * 0.5,
            left=size * 0.25,
            top=size * 0.42,
        )

        gesture = ft.GestureDetector(
            content=ft.Stack([self._canvas, label], width=size, height=size),
            on_tap_up=self._on_tap,
            on_scroll=self._on_scroll,
        )
        super().__init__(content=gesture, width=size, height=size, bgcolor=COLORS["bg"], border_radius=size // 2)

    def did_mount(self) -> None:
        self._subscriptions.append(event_bus.subscribe(AppEvent.LAYOUT_REBUILT, self._on_engine_change))
        self._subscriptions.append(event_bus.subscribe(AppEvent.SELECTION_CHANGED, self._on_engine_change))
        self.redraw()

    def will_unmount(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions.clear()

    def _on_engine_change(self, _data) -> None:
        self.redraw()

    def _on_tap(self, e: ft.TapEvent) -> None:
        hit = self._engine.tap_at(e.local_x, e.local_y)
        logger.debug(f"Dial tap at ({e.local_x:.0f}, {e.local_y:.0f}) -> {hit.kind if hit else None}")
        self.redraw()

    def _on_scroll(self, e: ft.ScrollEvent) -> None:
        self._engine.rotate(e.scroll_delta_y or 0.0)

    def redraw(self) -> None:
        g = self._geometry
        shapes: List[cv.Shape] = []
        shapes.extend(self._hour_ticks(g))
        shapes.extend(self._sleep_arc(g))
        for event in self._engine.layout.events:
            shapes.extend(self._event_shapes(g, event))
        shapes.extend(self._task_ticks(g))
        shapes.extend(self._markers(g))
        shapes.extend(self._now_indicator(g))
        self._canvas.shapes = shapes
        self._update_label()
        if self.page is not None:
            self.update()

    def _arc(self, g: DialGeometry, radius: float, start: float, sweep: float, paint: ft.Paint) -> cv.Arc:
        return cv.Arc(
            x=g.center_x - radius,
            y=g.center_y - radius,
            width=radius * 2,
            height=radius * 2,
            start_angle=math.radians(start),
            sweep_angle=math.radians(sweep),
            paint=paint,
        )

    def _radial_line(self, g: DialGeometry, inner: float, outer: float, angle: float, paint: ft.Paint) -> cv.Line:
        x1, y1 = polar_offset(g.center_x, g.center_y, inner, angle)
        x2, y2 = polar_offset(g.center_x, g.center_y, outer, angle)
        return cv.Line(x1, y1, x2, y2, paint=paint)

    def _hour_ticks(self, g: DialGeometry) -> List[cv.Shape]:
        half = g.outer_radius * HOUR_TICK_LENGTH_RATIO
        ticks = []
        for minute in range(0, MINUTES_PER_DAY, HOUR_TICK_STEP_MINUTES):
            angle = angle_for_minutes(minute)
            color = self._engine.gradient_color(angle).to_hex()
            ticks.append(self._radial_line(g, g.arc_radius - half, g.arc_radius + half, angle, _stroke(color, 1)))
        return ticks

    def _sleep_arc(self, g: DialGeometry) -> List[cv.Shape]:
        sleep = self._engine.sleep
        if sleep is None:
            return []
        start, end = sleep_arc_angles(sleep, self._engine.zone)
        sweep = sweep_for_arc(start, end)
        return [
            self._arc(g, g.sleep_arc_radius, start, sweep, _stroke(COLORS["sleep_fill"], g.sleep_stroke)),
            self._arc(g, g.sleep_arc_radius, start, sweep, _stroke(COLORS["sleep_stroke"], g.sleep_stroke * 0.35)),
        ]

    def _event_shapes(self, g: DialGeometry, event: EventLayout) -> List[cv.Shape]:
        alpha = PAST_DIM_FACTOR if event.is_past else 1.0
        color = argb_to_hex(event.event.color, alpha)
        line_width = g.arc_stroke * EVENT_LINE_RATIO
        if event.is_punctual:
            inner = g.arc_radius - g.arc_stroke / 2
            outer = g.arc_radius + g.arc_stroke / 2
            return [self._radial_line(g, inner, outer, event.mid_angle, _stroke(color, g.arc_stroke * TICK_WIDTH_RATIO))]
        sweep = sweep_for_arc(event.start_angle, event.end_angle)
        line_radius = g.outer_radius - line_width / 2 - event.layer_index * line_width
        return [
            self._arc(g, g.event_arc_radius, event.start_angle, sweep, _stroke(COLORS["event_bg"], g.event_stroke)),
            self._arc(g, line_radius, event.start_angle, sweep, _stroke(color, line_width)),
        ]

    def _task_ticks(self, g: DialGeometry) -> List[cv.Shape]:
        inner = g.arc_radius - g.arc_stroke / 2
        outer = g.arc_radius + g.arc_stroke / 2
        width = g.arc_stroke * TICK_WIDTH_RATIO
        return [
            self._radial_line(g, inner, outer, task.angle, _stroke(COLORS["task_past" if task.is_past else "task"], width))
            for task in self._engine.layout.tasks
        ]

    def _markers(self, g: DialGeometry) -> List[cv.Shape]:
        radius = g.arc_radius - g.arc_stroke
        paint = ft.Paint(color=COLORS["marker"], style=ft.PaintingStyle.FILL)
        shapes = []
        for angle in self._engine.layout.back_to_back_markers:
            x, y = polar_offset(g.center_x, g.center_y, radius, angle)
            shapes.append(cv.Circle(x, y, g.arc_stroke * 0.15, paint=paint))
        return shapes

    def _now_indicator(self, g: DialGeometry) -> List[cv.Shape]:
        now = self._engine.now
        color = COLORS["now_today" if self._engine.is_today else "now_other_day"]
        ring_angle = angle_for_instant_precise(now, self._engine.zone)
        hand_length = g.outer_radius * NOW_POINTER_LENGTH_RATIO
        hand_x, hand_y = polar_offset(g.center_x, g.center_y, hand_length, self._engine.now_angle(now))
        return [
            self._radial_line(g, g.arc_radius - g.arc_stroke, g.outer_radius, ring_angle, _stroke(color, 2)),
            cv.Line(g.center_x, g.center_y, hand_x, hand_y, paint=_stroke(COLORS["text_muted"], 1.5)),
        ]

    def _update_label(self) -> None:
        item = self._engine.selected_item
        if item is None:
            self._title.value = self._engine.selected_date.strftime("%a %d %b")
            all_day = self._engine.layout.all_day_count
            self._subtitle.value = f"{all_day} all-day" if all_day else ""
            return
        self._title.value = item.title
        if item.kind is PopupKind.EVENT:
            self._subtitle.value = TimeFormatter.event_range(item.event, self._engine.zone)
        else:
            self._subtitle.value = TimeFormatter.minutes_to_clock(
                minutes_since_midnight(item.task.task.date_time, self._engine.zone)
            )
