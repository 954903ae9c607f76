"""Headless bootstrap for the timeline engine.

Builds the engine without any Flet dependency, suitable for scripts,
other renderers and tests.

Usage:
    from daywheel.core import bootstrap

    svc = bootstrap("America/New_York", latitude=40.7, longitude=-74.0)
    svc.engine.refresh(snapshot)
"""
import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo

from daywheel.api import TimelineEngine
from daywheel.events import EventBus, event_bus
from daywheel.services.hit_test import DialGeometry
from daywheel.services.sun_times import SunTimesProvider

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything a front-end needs to drive one dial."""
    zone: tzinfo
    engine: TimelineEngine
    sun_times: SunTimesProvider
    events: EventBus


def bootstrap(
    zone: Union[str, tzinfo],
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    geometry: Optional[DialGeometry] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ServiceContainer:
    """Create the engine for a timezone.

    Args:
        zone: IANA name or tzinfo used for every minute/angle conversion.
        latitude: Observer latitude for sunrise/sunset. When either
            coordinate is missing they are approximated from the zone.
        longitude: Observer longitude.
        geometry: Dial geometry; normalized (outer radius 1.0) if None.
        clock: Source of "now"; wall clock in ``zone`` if None.
    """
    if isinstance(zone, str):
        zone = ZoneInfo(zone)

    sun_times = SunTimesProvider(zone)
    if latitude is not None and longitude is not None:
        sun_times.set_location(latitude, longitude)
    else:
        logger.debug(f"No location given, approximating sun times from {zone}")
        sun_times.use_defaults()

    engine = TimelineEngine(zone, sun_times=sun_times, geometry=geometry, clock=clock)
    return ServiceContainer(zone=zone, engine=engine, sun_times=sun_times, events=event_bus)
