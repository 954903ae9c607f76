"""Value types produced by one render pass of the timeline engine.

Everything here is immutable and rebuilt from scratch whenever the day,
the snapshot or "now" changes. Only ``SelectionState`` outlives a frame.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Hashable

from daywheel.config import HitKind, PopupKind
from daywheel.models.entities import Event, SleepData, Task
from daywheel.services.time_angle import arc_midpoint


@dataclass(frozen=True)
class TimeInterval:
    """Span of an event in whole minutes since local midnight."""
    id: str
    start_minutes: int
    end_minutes: int

    def __post_init__(self) -> None:
        if self.end_minutes < self.start_minutes:
            raise ValueError(
                f"Interval {self.id!r} ends before it starts "
                f"({self.end_minutes} < {self.start_minutes})"
            )

    @property
    def is_punctual(self) -> bool:
        return self.start_minutes == self.end_minutes


@dataclass(frozen=True)
class LayeredInterval:
    interval: TimeInterval
    layer_index: int

    def __post_init__(self) -> None:
        if self.layer_index < 0:
            raise ValueError(f"Layer index must be >= 0, got {self.layer_index}")


@dataclass(frozen=True)
class EventLayout:
    """An event placed on the ring.

    Minutes are quantized and drive layering; angles keep sub-minute
    precision and drive drawing and hit testing.
    """
    event: Event
    start_minutes: int
    end_minutes: int
    start_angle: float
    end_angle: float
    layer_index: int = 0
    is_past: bool = False

    @property
    def is_punctual(self) -> bool:
        return self.start_minutes == self.end_minutes

    @property
    def mid_angle(self) -> float:
        return arc_midpoint(self.start_angle, self.end_angle)

    @property
    def identity(self) -> Tuple[str, object, object]:
        return (self.event.id, self.event.start, self.event.end)


@dataclass(frozen=True)
class TaskLayout:
    task: Task
    angle: float
    is_past: bool = False


@dataclass(frozen=True)
class TimelineLayout:
    events: Tuple[EventLayout, ...] = ()
    tasks: Tuple[TaskLayout, ...] = ()
    back_to_back_markers: Tuple[float, ...] = ()
    all_day_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.events and not self.tasks


@dataclass(frozen=True)
class PopupItem:
    """Tagged union of the two selectable item kinds.

    Exactly one of ``event`` / ``task`` is set, matching ``kind``. Build
    instances with ``of_event`` / ``of_task``.
    """
    kind: PopupKind
    event: Optional[EventLayout] = None
    task: Optional[TaskLayout] = None

    def __post_init__(self) -> None:
        if self.kind is PopupKind.EVENT and (self.event is None or self.task is not None):
            raise ValueError("EVENT popup item must carry only an event layout")
        if self.kind is PopupKind.TASK and (self.task is None or self.event is not None):
            raise ValueError("TASK popup item must carry only a task layout")

    @classmethod
    def of_event(cls, layout: EventLayout) -> "PopupItem":
        return cls(kind=PopupKind.EVENT, event=layout)

    @classmethod
    def of_task(cls, layout: TaskLayout) -> "PopupItem":
        return cls(kind=PopupKind.TASK, task=layout)

    @property
    def angle(self) -> float:
        if self.kind is PopupKind.EVENT:
            return self.event.mid_angle
        return self.task.angle

    @property
    def identity(self) -> Tuple[PopupKind, Hashable]:
        """Key used to find this item again in a freshly built layout."""
        if self.kind is PopupKind.EVENT:
            return (self.kind, self.event.identity)
        return (self.kind, self.task.task.id)

    @property
    def title(self) -> str:
        if self.kind is PopupKind.EVENT:
            return self.event.event.title
        return self.task.task.title


@dataclass(frozen=True)
class HitResult:
    """What a tap on the ring touched."""
    kind: HitKind
    event: Optional[EventLayout] = None
    task: Optional[TaskLayout] = None
    sleep: Optional[SleepData] = None

    def to_popup_item(self) -> Optional[PopupItem]:
        """Selectable item for this hit, or None for sleep."""
        if self.kind is HitKind.EVENT:
            return PopupItem.of_event(self.event)
        if self.kind is HitKind.TASK:
            return PopupItem.of_task(self.task)
        return None


@dataclass(frozen=True)
class SelectionState:
    selected: Optional[PopupItem] = None
    accumulated_rotary_delta: float = 0.0

    @property
    def is_idle(self) -> bool:
        return self.selected is None
