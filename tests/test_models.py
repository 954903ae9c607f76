"""Tests for entity serialization and helper formatting."""
import pytest

from daywheel.config import TaskSource
from daywheel.formatters import TimeFormatter
from daywheel.helpers import argb_to_hex, extract_meeting_link
from daywheel.models.entities import DailySnapshot, Event, SleepData, Task
from daywheel.services.timeline_layout import build_timeline_layout


# ===========================================================================
# Entities
# ===========================================================================

class TestEntities:
    def test_snapshot_round_trip(self, day, at):
        snapshot = DailySnapshot(
            date_local=day,
            timezone_id="UTC",
            events=[Event("e", "Review", at(9), at(10), color=0xFF2196F3, location="Room 4")],
            tasks=[Task("t", "Expenses", at(14), source=TaskSource.GOOGLE_TASKS_IF_FUTURE, editable=False)],
            last_sync_at=at(8),
            sleep=SleepData(day, at(23, days=-1), at(7), 480, quality_score=71),
            sunrise_minutes=400,
            sunset_minutes=1050,
        )
        assert DailySnapshot.from_dict(snapshot.to_dict()) == snapshot

    def test_unknown_task_source_defaults_to_local(self, at):
        data = Task("t", "T", at(9)).to_dict()
        data["source"] = "carrier-pigeon"
        assert Task.from_dict(data).source is TaskSource.LOCAL

    def test_sleep_duration_derived_when_missing(self, day, at):
        data = SleepData(day, at(23, days=-1), at(6, 30), 0).to_dict()
        del data["duration_minutes"]
        assert SleepData.from_dict(data).duration_minutes == 450

    def test_missing_required_field(self, at):
        data = Event("e", "E", at(9), at(10)).to_dict()
        del data["start"]
        with pytest.raises(KeyError):
            Event.from_dict(data)

    def test_meeting_link_derived_when_missing(self, at):
        data = Event("e", "Sync", at(9), at(10), description="Join https://meet.example.com/abc").to_dict()
        assert Event.from_dict(data).meeting_link == "https://meet.example.com/abc"

    def test_explicit_meeting_link_kept(self, at):
        data = Event(
            "e", "Sync", at(9), at(10),
            location="https://a.example/x", meeting_link="https://zoom.example/j/1",
        ).to_dict()
        assert Event.from_dict(data).meeting_link == "https://zoom.example/j/1"

    def test_with_items_replaces_lists(self, day, at):
        snapshot = DailySnapshot(day, "UTC", events=[Event("e", "E", at(9), at(10))])
        emptied = snapshot.with_items([], [])
        assert emptied.events == [] and len(snapshot.events) == 1
        assert emptied.date_local == day


# ===========================================================================
# Helpers
# ===========================================================================

class TestMeetingLink:
    def test_from_description(self):
        link = extract_meeting_link("Room 4", "Join at https://meet.example.com/abc-def now")
        assert link == "https://meet.example.com/abc-def"

    def test_location_wins(self):
        assert extract_meeting_link("https://a.example/x", "https://b.example/y") == "https://a.example/x"

    def test_stops_at_parenthesis(self):
        assert extract_meeting_link(None, "(https://zoom.example/j/1)") == "https://zoom.example/j/1"

    @pytest.mark.parametrize("location, description", [(None, None), ("", "  "), ("Room 4", "no link")])
    def test_none(self, location, description):
        assert extract_meeting_link(location, description) is None


class TestArgbToHex:
    def test_keeps_alpha(self):
        assert argb_to_hex(0xFF112233) == "#ff112233"

    def test_alpha_override(self):
        assert argb_to_hex(0xFF112233, 0.4) == "#66112233"

    def test_default_color(self):
        assert argb_to_hex(None) == "#ffa4a4a5"


# ===========================================================================
# TimeFormatter
# ===========================================================================

class TestTimeFormatter:
    @pytest.mark.parametrize("minutes, expected", [
        (0, "12:00 AM"),
        (545, "9:05 AM"),
        (720, "12:00 PM"),
        (765, "12:45 PM"),
        (1439, "11:59 PM"),
        (1440, "12:00 AM"),
    ])
    def test_minutes_to_clock(self, minutes, expected):
        assert TimeFormatter.minutes_to_clock(minutes) == expected

    @pytest.mark.parametrize("minutes, expected", [(45, "45m"), (120, "2h"), (90, "1h 30m"), (0, "0m")])
    def test_minutes_to_duration(self, minutes, expected):
        assert TimeFormatter.minutes_to_duration(minutes) == expected

    @pytest.mark.parametrize("minutes, expected", [(0, "now"), (5, "in 5m"), (-65, "1h 5m ago")])
    def test_countdown(self, minutes, expected):
        assert TimeFormatter.countdown(minutes) == expected

    def test_event_range(self, at, zone, make_event):
        layout = build_timeline_layout(
            [make_event("e", (9,), (10, 30)), make_event("p", (15,), (15,))], [], at(8), zone,
        )
        assert TimeFormatter.event_range(layout.events[0], zone) == "9:00 AM – 10:30 AM"
        assert TimeFormatter.event_range(layout.events[1], zone) == "3:00 PM"
