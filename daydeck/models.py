"""
Core records for the DayDeck scheduling engine.

Objects:
- Task (with subtasks, optional recurrence, carry-over origin)
- Recurrence (repeat rule anchored at a task's scheduled date)
- TimeBlock (owned interval on the timeline)
- CalendarEvent (external, read-only)
- Conflict (derived overlap between a TimeBlock and a CalendarEvent)
- DayPlan (read-only view of one date)
- Template, TemplateBlock (reusable day layout of wall-clock blocks)

Attributes are snake_case. to_dict()/from_dict() speak the camelCase JSON
contract shared with storage and the UI (scheduledDate, carriedOverFrom,
startTime, ...). from_dict() is lenient; use daydeck.contracts.schema to
validate untrusted payloads.
"""

import copy
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta
from enum import StrEnum

from daydeck.dates import parse_instant


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class RecurrenceFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TimeBlockType(StrEnum):
    TASK = "task"
    EVENT = "event"
    BREAK = "break"
    FOCUS = "focus"


def camel(name: str) -> str:
    """scheduled_date -> scheduledDate"""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _flat_to_dict(record) -> dict:
    return {camel(f.name): getattr(record, f.name) for f in fields(record)}


def _flat_kwargs(cls, data: dict) -> dict:
    """Pick dataclass fields out of a camelCase (or snake_case) mapping."""
    kwargs = {}
    for f in fields(cls):
        key = camel(f.name)
        if key in data:
            kwargs[f.name] = data[key]
        elif f.name in data:
            kwargs[f.name] = data[f.name]
    return kwargs


@dataclass
class Recurrence:
    frequency: str
    interval: int = 1
    days_of_week: list[int] | None = None  # 0=Sun .. 6=Sat, weekly only
    end_date: str | None = None  # inclusive, YYYY-MM-DD

    def to_dict(self) -> dict:
        d = _flat_to_dict(self)
        if self.days_of_week is not None:
            d["daysOfWeek"] = list(self.days_of_week)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Recurrence":
        return cls(**_flat_kwargs(cls, data))


@dataclass
class Subtask:
    id: str
    title: str
    completed: bool = False
    parent_task_id: str | None = None

    def to_dict(self) -> dict:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Subtask":
        return cls(**_flat_kwargs(cls, data))


@dataclass
class Task:
    id: str
    title: str
    description: str = ""
    status: str = TaskStatus.TODO.value
    priority: str = Priority.MEDIUM.value
    scheduled_date: str = ""  # YYYY-MM-DD
    scheduled_time: str | None = None  # HH:mm
    estimated_minutes: int | None = None
    subtasks: list[Subtask] = field(default_factory=list)
    recurrence: Recurrence | None = None
    notifications: list[dict] = field(default_factory=list)  # opaque here
    sort_order: int = 0

    created_at: str = ""
    updated_at: str = ""
    completed_at: str | None = None

    # First scheduledDate before any carry-over. Earliest origin wins.
    carried_over_from: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status in (TaskStatus.TODO, TaskStatus.IN_PROGRESS)

    def copy(self) -> "Task":
        """Independent deep copy; shares no lists or nested records."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        d = _flat_to_dict(self)
        d["subtasks"] = [s.to_dict() for s in self.subtasks]
        d["recurrence"] = self.recurrence.to_dict() if self.recurrence else None
        d["notifications"] = copy.deepcopy(self.notifications)
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        kwargs = _flat_kwargs(cls, data)
        kwargs["subtasks"] = [
            Subtask.from_dict(s) if isinstance(s, dict) else s
            for s in kwargs.get("subtasks") or []
        ]
        recurrence = kwargs.get("recurrence")
        if isinstance(recurrence, dict):
            kwargs["recurrence"] = Recurrence.from_dict(recurrence)
        kwargs["notifications"] = copy.deepcopy(kwargs.get("notifications") or [])
        return cls(**kwargs)


@dataclass
class TimeBlock:
    id: str
    title: str
    start_time: str  # ISO-8601 instant
    end_time: str
    task_id: str | None = None
    color: str = "#4F46E5"
    type: str = TimeBlockType.TASK.value

    @property
    def start(self) -> datetime:
        return parse_instant(self.start_time)

    @property
    def end(self) -> datetime:
        return parse_instant(self.end_time)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_min(self) -> int:
        """Block duration in whole minutes."""
        return int(self.duration.total_seconds() / 60)

    def to_dict(self) -> dict:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TimeBlock":
        return cls(**_flat_kwargs(cls, data))


@dataclass
class CalendarEvent:
    id: str
    title: str
    start_time: str
    end_time: str
    calendar_id: str = ""
    color: str = ""

    @property
    def start(self) -> datetime:
        return parse_instant(self.start_time)

    @property
    def end(self) -> datetime:
        return parse_instant(self.end_time)

    def to_dict(self) -> dict:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "CalendarEvent":
        return cls(**_flat_kwargs(cls, data))


@dataclass
class TemplateBlock:
    """One block of a day template, placed by wall-clock time rather than instant."""

    title: str
    type: str
    start_hour: int
    start_minute: int
    duration_minutes: int
    color: str = "#4F46E5"

    def to_dict(self) -> dict:
        return _flat_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TemplateBlock":
        return cls(**_flat_kwargs(cls, data))


@dataclass
class Template:
    id: str
    name: str
    icon: str = ""
    blocks: list[TemplateBlock] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        d = _flat_to_dict(self)
        d["blocks"] = [b.to_dict() for b in self.blocks]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Template":
        kwargs = _flat_kwargs(cls, data)
        kwargs["blocks"] = [
            TemplateBlock.from_dict(b) if isinstance(b, dict) else b
            for b in kwargs.get("blocks") or []
        ]
        return cls(**kwargs)


@dataclass(frozen=True)
class Conflict:
    time_block_id: str
    calendar_event_id: str
    overlap_start_time: str
    overlap_end_time: str

    def to_dict(self) -> dict:
        return _flat_to_dict(self)


@dataclass
class DayPlan:
    date: str
    tasks: list[Task]
    time_blocks: list[TimeBlock]
    conflicts: list[Conflict]

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "tasks": [t.to_dict() for t in self.tasks],
            "timeBlocks": [b.to_dict() for b in self.time_blocks],
            "conflicts": [c.to_dict() for c in self.conflicts],
        }
