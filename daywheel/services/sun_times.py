"""Sunrise/sunset minutes for a date, computed offline with astral.

Used to feed the dial gradient. When no location is known the
coordinates are approximated from the timezone; when the sun does not
rise or set (polar day/night) the 06:00 / 18:00 defaults are used.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Tuple

from astral import Observer
from astral.sun import sun

from daywheel.config import (
    APPROXIMATE_ZONE_COORDINATES,
    DEFAULT_SUNRISE_MINUTES,
    DEFAULT_SUNSET_MINUTES,
    FALLBACK_LATITUDE,
)
from daywheel.services.time_angle import minutes_since_midnight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SunTimes:
    sunrise_minutes: int
    sunset_minutes: int


DEFAULT_SUN_TIMES = SunTimes(DEFAULT_SUNRISE_MINUTES, DEFAULT_SUNSET_MINUTES)


def _zone_key(zone: tzinfo) -> Optional[str]:
    return getattr(zone, "key", None)


def approximate_coordinates_for_zone(zone: tzinfo, at: Optional[datetime] = None) -> Tuple[float, float]:
    """(latitude, longitude) for a timezone when no location is available.

    Known zones map to a representative city; anything else gets a
    temperate latitude and a longitude derived from the UTC offset.
    """
    known = APPROXIMATE_ZONE_COORDINATES.get(_zone_key(zone))
    if known is not None:
        return known
    at = at or datetime.now(timezone.utc)
    offset = at.astimezone(zone).utcoffset()
    offset_hours = offset.total_seconds() / 3600 if offset is not None else 0.0
    longitude = max(-180.0, min(180.0, offset_hours * 15.0))
    return FALLBACK_LATITUDE, longitude


def compute_sun_times(
    day: date,
    latitude: float,
    longitude: float,
    zone: tzinfo,
) -> SunTimes:
    """Local sunrise/sunset for ``day`` as minutes since midnight."""
    try:
        times = sun(Observer(latitude=latitude, longitude=longitude), date=day, tzinfo=zone)
    except ValueError as e:
        logger.warning(f"No sunrise/sunset at ({latitude}, {longitude}) on {day}: {e}")
        return DEFAULT_SUN_TIMES
    return SunTimes(
        sunrise_minutes=minutes_since_midnight(times["sunrise"], zone),
        sunset_minutes=minutes_since_midnight(times["sunset"], zone),
    )


class SunTimesProvider:
    """Remembers the last known location and computes sun times per date."""

    def __init__(self, zone: tzinfo) -> None:
        self._zone = zone
        self._latitude: Optional[float] = None
        self._longitude: Optional[float] = None

    @property
    def has_location(self) -> bool:
        return self._latitude is not None and self._longitude is not None

    def set_location(self, latitude: float, longitude: float) -> None:
        self._latitude = latitude
        self._longitude = longitude

    def use_defaults(self) -> None:
        """Fall back to coordinates approximated from the timezone."""
        self._latitude, self._longitude = approximate_coordinates_for_zone(self._zone)

    def for_date(self, day: date) -> SunTimes:
        if not self.has_location:
            lat, lon = approximate_coordinates_for_zone(self._zone)
        else:
            lat, lon = self._latitude, self._longitude
        return compute_sun_times(day, lat, lon, self._zone)
