"""Inverse mapping from a touch point on the dial to the item it hit.

Radii come from ``DialGeometry`` so the touch bands match what the
front-end paints. The outer radius defaults to 1.0, which lets callers
work in normalized coordinates.
"""
import logging
import math
from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterable, Optional, Tuple

from daywheel.config import (
    ARC_STROKE_RATIO,
    EVENT_ARC_INSET_RATIO,
    EVENT_STROKE_RATIO,
    HitKind,
    INWARD_PUNCTUAL_EXPANSION,
    INWARD_TOUCH_EXPANSION,
    OUTWARD_TOUCH_EXPANSION,
    PUNCTUAL_ANGLE_TOLERANCE,
    RADIUS_TOLERANCE_RATIO,
    SLEEP_STROKE_RATIO,
    TASK_ANGLE_TOLERANCE,
    TASK_RING_INSET,
)
from daywheel.models.entities import SleepData
from daywheel.models.layout import EventLayout, HitResult, TaskLayout, TimelineLayout
from daywheel.services.time_angle import (
    angle_distance,
    angle_for_instant,
    angle_from_touch,
    is_angle_within_arc,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadialBand:
    inner: float
    outer: float

    def contains(self, radius: float) -> bool:
        return self.inner <= radius <= self.outer


@dataclass(frozen=True)
class DialGeometry:
    """Radii of every ring on the dial, derived from the outer radius."""
    outer_radius: float = 1.0
    center_x: float = 0.0
    center_y: float = 0.0

    @classmethod
    def from_size(cls, width: float, height: float) -> "DialGeometry":
        return cls(outer_radius=min(width, height) / 2, center_x=width / 2, center_y=height / 2)

    @property
    def arc_stroke(self) -> float:
        return self.outer_radius * ARC_STROKE_RATIO

    @property
    def arc_radius(self) -> float:
        return self.outer_radius - self.arc_stroke / 2

    @property
    def event_stroke(self) -> float:
        return self.arc_stroke * EVENT_STROKE_RATIO

    @property
    def event_arc_radius(self) -> float:
        return self.outer_radius - self.event_stroke * EVENT_ARC_INSET_RATIO

    @property
    def event_band(self) -> RadialBand:
        """Touch band of interval events, deeper inward than outward."""
        return RadialBand(
            inner=self.event_arc_radius - self.event_stroke / 2 - self.arc_stroke * INWARD_TOUCH_EXPANSION,
            outer=self.event_arc_radius + self.event_stroke / 2 + self.arc_stroke * OUTWARD_TOUCH_EXPANSION,
        )

    @property
    def punctual_band(self) -> RadialBand:
        """Touch band of zero-duration events, expanded toward the centre only."""
        tolerance = self.arc_stroke * RADIUS_TOLERANCE_RATIO
        return RadialBand(
            inner=self.arc_radius - self.arc_stroke / 2 - tolerance - self.arc_stroke * INWARD_PUNCTUAL_EXPANSION,
            outer=self.arc_radius + self.arc_stroke / 2 + tolerance,
        )

    def _inset(self) -> "DialGeometry":
        return DialGeometry(self.outer_radius * TASK_RING_INSET, self.center_x, self.center_y)

    @property
    def task_band(self) -> RadialBand:
        inset = self._inset()
        tolerance = inset.arc_stroke * RADIUS_TOLERANCE_RATIO
        return RadialBand(
            inner=inset.arc_radius - inset.arc_stroke / 2 - tolerance,
            outer=inset.arc_radius + inset.arc_stroke / 2 + tolerance,
        )

    @property
    def sleep_stroke(self) -> float:
        return self._inset().arc_stroke * SLEEP_STROKE_RATIO

    @property
    def sleep_arc_radius(self) -> float:
        return self._inset().outer_radius - self.sleep_stroke / 2

    @property
    def sleep_band(self) -> RadialBand:
        return RadialBand(
            inner=self.sleep_arc_radius - self.sleep_stroke / 2,
            outer=self.sleep_arc_radius + self.sleep_stroke / 2,
        )

    def touch_to_polar(self, x: float, y: float) -> Tuple[float, float]:
        """Convert a canvas point into the (radius, angle) used by hit testing."""
        dx = x - self.center_x
        dy = y - self.center_y
        return math.hypot(dx, dy), angle_from_touch(dx, dy)


def find_event_hit(
    events: Iterable[EventLayout],
    radius: float,
    angle: float,
    geometry: DialGeometry,
) -> Optional[EventLayout]:
    """First event in layout order whose touch region contains the point.

    Overlapping arcs resolve to the earliest-starting event, not the one
    painted on top.
    """
    event_band = geometry.event_band
    punctual_band = geometry.punctual_band
    for event in events:
        if event.is_punctual:
            if (
                punctual_band.contains(radius)
                and angle_distance(event.mid_angle, angle) <= PUNCTUAL_ANGLE_TOLERANCE
            ):
                return event
        elif event_band.contains(radius) and is_angle_within_arc(angle, event.start_angle, event.end_angle):
            return event
    return None


def find_task_hit(
    tasks: Iterable[TaskLayout],
    radius: float,
    angle: float,
    geometry: DialGeometry,
) -> Optional[TaskLayout]:
    band = geometry.task_band
    if not band.contains(radius):
        return None
    return next(
        (task for task in tasks if angle_distance(task.angle, angle) <= TASK_ANGLE_TOLERANCE),
        None,
    )


def sleep_arc_angles(sleep: SleepData, zone: tzinfo) -> Tuple[float, float]:
    """Start/end angle of the sleep arc, at minute precision like its drawing."""
    return angle_for_instant(sleep.start_time, zone), angle_for_instant(sleep.end_time, zone)


def find_sleep_hit(
    sleep: Optional[SleepData],
    zone: tzinfo,
    radius: float,
    angle: float,
    geometry: DialGeometry,
) -> bool:
    if sleep is None or not geometry.sleep_band.contains(radius):
        return False
    start, end = sleep_arc_angles(sleep, zone)
    return is_angle_within_arc(angle, start, end)


def hit_test(
    layout: TimelineLayout,
    radius: float,
    angle: float,
    geometry: DialGeometry,
    sleep: Optional[SleepData] = None,
    zone: Optional[tzinfo] = None,
) -> Optional[HitResult]:
    """Resolve a touch in priority order: event, then task, then sleep.

    ``sleep`` must already be filtered to the displayed day; it needs
    ``zone`` to place its arc.
    """
    event = find_event_hit(layout.events, radius, angle, geometry)
    if event is not None:
        logger.debug(f"Hit event {event.event.id!r} at r={radius:.2f} a={angle:.1f}")
        return HitResult(kind=HitKind.EVENT, event=event)

    task = find_task_hit(layout.tasks, radius, angle, geometry)
    if task is not None:
        logger.debug(f"Hit task {task.task.id!r} at r={radius:.2f} a={angle:.1f}")
        return HitResult(kind=HitKind.TASK, task=task)

    if sleep is not None and zone is None:
        logger.debug("Sleep given without a zone, skipping the sleep arc")
        return None
    if sleep is not None and find_sleep_hit(sleep, zone, radius, angle, geometry):
        logger.debug(f"Hit sleep arc at r={radius:.2f} a={angle:.1f}")
        return HitResult(kind=HitKind.SLEEP, sleep=sleep)

    return None
