"""Day/night color of the dial's hour ticks as a function of angle.

Five zones: night, sunrise, day, and a sunset tone that is an even mix of
orange and purple. Within ``TRANSITION_HALF_WIDTH`` degrees of sunrise or
sunset the color blends linearly from the transition tone (at the exact
sunrise/sunset angle) toward day or night.
"""
from typing import NamedTuple, Tuple

from daywheel.config import (
    DAY_COLOR,
    DEFAULT_SUNRISE_MINUTES,
    DEFAULT_SUNSET_MINUTES,
    MINUTES_PER_DAY,
    NIGHT_COLOR,
    SUNRISE_COLOR,
    SUNSET_BLEND,
    SUNSET_ORANGE_COLOR,
    SUNSET_PURPLE_COLOR,
    TRANSITION_HALF_WIDTH,
)
from daywheel.services.time_angle import (
    angle_distance,
    angle_for_minutes,
    forward_sweep,
    is_angle_within_arc,
    normalize_angle,
)


class RGB(NamedTuple):
    """Color with 0-255 float channels."""
    r: float
    g: float
    b: float

    @classmethod
    def of(cls, channels: Tuple[int, int, int]) -> "RGB":
        return cls(float(channels[0]), float(channels[1]), float(channels[2]))

    def to_hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*(max(0, min(255, round(c))) for c in self))


NIGHT = RGB.of(NIGHT_COLOR)
SUNRISE = RGB.of(SUNRISE_COLOR)
DAY = RGB.of(DAY_COLOR)
SUNSET_ORANGE = RGB.of(SUNSET_ORANGE_COLOR)
SUNSET_PURPLE = RGB.of(SUNSET_PURPLE_COLOR)


def _clamp01(t: float) -> float:
    return max(0.0, min(1.0, t))


def lerp_color(a: RGB, b: RGB, t: float) -> RGB:
    t = _clamp01(t)
    return RGB(a.r + (b.r - a.r) * t, a.g + (b.g - a.g) * t, a.b + (b.b - a.b) * t)


SUNSET = lerp_color(SUNSET_ORANGE, SUNSET_PURPLE, SUNSET_BLEND)


def _is_after(angle: float, pivot: float) -> bool:
    """True when ``angle`` lies in the half-circle clockwise of ``pivot``."""
    return 0.0 < forward_sweep(pivot, angle) < 180.0


def gradient_color(
    canvas_angle: float,
    sunrise_minutes: int = DEFAULT_SUNRISE_MINUTES,
    sunset_minutes: int = DEFAULT_SUNSET_MINUTES,
    transition_width: float = TRANSITION_HALF_WIDTH,
) -> RGB:
    angle = normalize_angle(canvas_angle)
    sunrise = angle_for_minutes(sunrise_minutes % MINUTES_PER_DAY)
    sunset = angle_for_minutes(sunset_minutes % MINUTES_PER_DAY)

    if transition_width <= 0:
        return DAY if is_angle_within_arc(angle, sunrise, sunset) else NIGHT

    to_sunrise = angle_distance(angle, sunrise)
    if to_sunrise <= transition_width:
        toward = DAY if _is_after(angle, sunrise) else NIGHT
        return lerp_color(SUNRISE, toward, to_sunrise / transition_width)

    to_sunset = angle_distance(angle, sunset)
    if to_sunset <= transition_width:
        toward = NIGHT if _is_after(angle, sunset) else DAY
        return lerp_color(SUNSET, toward, to_sunset / transition_width)

    # Time runs clockwise, so the clockwise arc sunrise -> sunset is daytime
    return DAY if is_angle_within_arc(angle, sunrise, sunset) else NIGHT
