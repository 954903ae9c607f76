from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional, List, Dict, Any

from daywheel.config import TaskSource
from daywheel.helpers import extract_meeting_link


def _parse_instant(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Event:
    """Calendar event for a single day."""
    id: str
    title: str
    start: datetime
    end: datetime
    all_day: bool = False
    color: Optional[int] = None
    location: Optional[str] = None
    description: Optional[str] = None
    meeting_link: Optional[str] = None
    calendar_id: Optional[str] = None
    calendar_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "all_day": self.all_day,
            "color": self.color,
            "location": self.location,
            "description": self.description,
            "meeting_link": self.meeting_link,
            "calendar_id": self.calendar_id,
            "calendar_name": self.calendar_name,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Event":
        return cls(
            id=d["id"],
            title=d["title"],
            start=_parse_instant(d["start"]),
            end=_parse_instant(d["end"]),
            all_day=bool(d.get("all_day", False)),
            color=d.get("color"),
            location=d.get("location"),
            description=d.get("description"),
            meeting_link=d.get("meeting_link") or extract_meeting_link(d.get("location"), d.get("description")),
            calendar_id=d.get("calendar_id"),
            calendar_name=d.get("calendar_name"),
        )


@dataclass(frozen=True)
class Task:
    """Point-in-time task shown as a tick on the ring."""
    id: str
    title: str
    date_time: datetime
    completed: bool = False
    source: TaskSource = TaskSource.LOCAL
    editable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date_time": self.date_time.isoformat(),
            "completed": self.completed,
            "source": self.source.value,
            "editable": self.editable,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        source_str = d.get("source", TaskSource.LOCAL.value)
        try:
            source = TaskSource(source_str)
        except ValueError:
            source = TaskSource.LOCAL
        return cls(
            id=d["id"],
            title=d["title"],
            date_time=_parse_instant(d["date_time"]),
            completed=bool(d.get("completed", False)),
            source=source,
            editable=bool(d.get("editable", True)),
        )


@dataclass(frozen=True)
class SleepData:
    """Sleep session attributed to the local day it ended on."""
    date: date
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    quality_score: Optional[int] = None  # 0-100, None if unknown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_minutes": self.duration_minutes,
            "quality_score": self.quality_score,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SleepData":
        start = _parse_instant(d["start_time"])
        end = _parse_instant(d["end_time"])
        duration = d.get("duration_minutes")
        if duration is None:
            duration = int((end - start).total_seconds() // 60)
        return cls(
            date=date.fromisoformat(d["date"]),
            start_time=start,
            end_time=end,
            duration_minutes=duration,
            quality_score=d.get("quality_score"),
        )


@dataclass(frozen=True)
class DailySnapshot:
    """Everything the dial needs for one local day."""
    date_local: date
    timezone_id: str
    events: List[Event] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    last_sync_at: Optional[datetime] = None
    sleep: Optional[SleepData] = None
    sunrise_minutes: Optional[int] = None
    sunset_minutes: Optional[int] = None

    def with_items(self, events: List[Event], tasks: List[Task]) -> "DailySnapshot":
        """Copy of this snapshot with the event and task lists replaced."""
        return replace(self, events=list(events), tasks=list(tasks))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date_local": self.date_local.isoformat(),
            "timezone_id": self.timezone_id,
            "events": [e.to_dict() for e in self.events],
            "tasks": [t.to_dict() for t in self.tasks],
            "last_sync_at": self.last_sync_at.isoformat() if self.last_sync_at else None,
            "sleep": self.sleep.to_dict() if self.sleep else None,
            "sunrise_minutes": self.sunrise_minutes,
            "sunset_minutes": self.sunset_minutes,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DailySnapshot":
        synced = d.get("last_sync_at")
        sleep = d.get("sleep")
        return cls(
            date_local=date.fromisoformat(d["date_local"]),
            timezone_id=d["timezone_id"],
            events=[Event.from_dict(e) for e in d.get("events", [])],
            tasks=[Task.from_dict(t) for t in d.get("tasks", [])],
            last_sync_at=_parse_instant(synced) if synced else None,
            sleep=SleepData.from_dict(sleep) if sleep else None,
            sunrise_minutes=d.get("sunrise_minutes"),
            sunset_minutes=d.get("sunset_minutes"),
        )
