"""Text formatting for the dial's popup and labels.

Converts minutes since midnight and event spans to strings like "9:05 AM",
"9:00 AM – 10:30 AM" or "in 1h 5m".
"""
from datetime import tzinfo

from daywheel.config import MINUTES_PER_DAY
from daywheel.models.layout import EventLayout
from daywheel.services.time_angle import minutes_since_midnight


class TimeFormatter:
    """Unified time formatting utilities for the dial."""

    @staticmethod
    def minutes_to_clock(minutes: int) -> str:
        """Convert minutes since midnight to '9:05 AM'."""
        minutes %= MINUTES_PER_DAY
        h, m = divmod(minutes, 60)
        suffix = "AM" if h < 12 else "PM"
        return f"{h % 12 or 12}:{m:02d} {suffix}"

    @staticmethod
    def minutes_to_duration(minutes: int) -> str:
        """Convert minutes to '45m', '2h' or '1h 30m'."""
        if minutes < 60:
            return f"{minutes}m"
        h, m = divmod(minutes, 60)
        return f"{h}h" if m == 0 else f"{h}h {m}m"

    @staticmethod
    def countdown(minutes_until: int) -> str:
        """'now', 'in 5m' or '20m ago' relative to the current minute."""
        if minutes_until == 0:
            return "now"
        text = TimeFormatter.minutes_to_duration(abs(minutes_until))
        return f"in {text}" if minutes_until > 0 else f"{text} ago"

    @staticmethod
    def event_range(layout: EventLayout, zone: tzinfo) -> str:
        if layout.is_punctual:
            return TimeFormatter.minutes_to_clock(layout.start_minutes)
        start = TimeFormatter.minutes_to_clock(minutes_since_midnight(layout.event.start, zone))
        end = TimeFormatter.minutes_to_clock(minutes_since_midnight(layout.event.end, zone))
        return f"{start} – {end}"
