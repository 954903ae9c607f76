"""Angle/time mapping for the 24-hour dial.

Canvas angles are degrees in [0, 360), measured clockwise from 3 o'clock
with y pointing down: 0 = 6 PM, 90 = midnight, 180 = 6 AM, 270 = noon.
All angle arithmetic in the package goes through these helpers.
"""
import math
from datetime import datetime, tzinfo
from typing import Tuple

from daywheel.config import (
    FULL_CIRCLE,
    MIDNIGHT_ANGLE,
    MIN_VISIBLE_SWEEP,
    MINUTES_PER_DAY,
    NOW_POINTER_OFFSET,
    SECONDS_PER_DAY,
)


def normalize_angle(angle: float) -> float:
    """Reduce any angle into [0, 360)."""
    normalized = math.fmod(angle, FULL_CIRCLE)
    if normalized < 0:
        normalized += FULL_CIRCLE
    # fmod of a tiny negative can round up to exactly 360
    if normalized >= FULL_CIRCLE:
        normalized -= FULL_CIRCLE
    return normalized


def minutes_since_midnight(instant: datetime, zone: tzinfo) -> int:
    local = instant.astimezone(zone)
    return local.hour * 60 + local.minute


def fraction_of_day(instant: datetime, zone: tzinfo) -> float:
    """Fraction of the local day elapsed, including seconds and microseconds."""
    local = instant.astimezone(zone)
    seconds = local.hour * 3600 + local.minute * 60 + local.second
    return (seconds + local.microsecond / 1_000_000) / SECONDS_PER_DAY


def angle_for_minutes(minutes: int) -> float:
    return normalize_angle(minutes / MINUTES_PER_DAY * FULL_CIRCLE + MIDNIGHT_ANGLE)


def angle_for_instant(instant: datetime, zone: tzinfo) -> float:
    """Minute-precision angle, used for tasks and the sleep arc."""
    return angle_for_minutes(minutes_since_midnight(instant, zone))


def angle_for_instant_precise(instant: datetime, zone: tzinfo) -> float:
    """Sub-minute angle so event arcs end at the real end time."""
    return normalize_angle(fraction_of_day(instant, zone) * FULL_CIRCLE + MIDNIGHT_ANGLE)


def angle_for_instant_with_seconds(instant: datetime, zone: tzinfo) -> float:
    """Angle of the live "now" pointer, which sweeps every second."""
    return normalize_angle(fraction_of_day(instant, zone) * FULL_CIRCLE + NOW_POINTER_OFFSET)


def minutes_for_angle(angle: float) -> int:
    """Inverse of ``angle_for_minutes``, rounded to the nearest minute."""
    offset = normalize_angle(angle - MIDNIGHT_ANGLE)
    return round(offset / FULL_CIRCLE * MINUTES_PER_DAY) % MINUTES_PER_DAY


def to_math_angle(canvas_angle: float) -> float:
    """Same direction measured counter-clockwise with y pointing up."""
    return normalize_angle(-canvas_angle)


def angle_from_touch(dx: float, dy: float) -> float:
    """Canvas angle of a point relative to the dial centre (y down)."""
    return normalize_angle(math.degrees(math.atan2(dy, dx)))


def polar_offset(cx: float, cy: float, radius: float, angle: float) -> Tuple[float, float]:
    radians = math.radians(angle)
    return cx + radius * math.cos(radians), cy + radius * math.sin(radians)


def is_angle_within_arc(angle: float, start: float, end: float) -> bool:
    a = normalize_angle(angle)
    s = normalize_angle(start)
    e = normalize_angle(end)
    if s <= e:
        return s <= a <= e
    return a >= s or a <= e


def angle_distance(a: float, b: float) -> float:
    """Shortest circular distance between two angles, in [0, 180]."""
    diff = abs(normalize_angle(a) - normalize_angle(b))
    return FULL_CIRCLE - diff if diff > 180.0 else diff


def forward_sweep(start: float, end: float) -> float:
    """Clockwise distance from start to end, in [0, 360)."""
    return normalize_angle(normalize_angle(end) - normalize_angle(start))


def sweep_for_arc(start: float, end: float) -> float:
    """Clockwise sweep to draw; zero sweeps are floored so they stay visible."""
    sweep = forward_sweep(start, end)
    return MIN_VISIBLE_SWEEP if sweep <= 0 else sweep


def arc_midpoint(start: float, end: float) -> float:
    return normalize_angle(start + forward_sweep(start, end) / 2)


def clamp_minutes(minutes: int) -> int:
    return max(0, min(MINUTES_PER_DAY, minutes))


def round_to_minutes(value: int, step: int) -> int:
    if step <= 1:
        return value
    rounded = int(math.floor(value / step + 0.5)) * step
    return clamp_minutes(rounded)


def minutes_diff(start_minutes: int, end_minutes: int) -> int:
    return end_minutes - start_minutes
