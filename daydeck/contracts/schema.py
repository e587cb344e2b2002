"""
Schema Module - Pydantic models for inbound record validation.

These models define the REQUIRED shape of the records other subsystems
(storage, UI, calendar import) hand to the scheduling core. Field names are
the camelCase JSON contract; snake_case is accepted too.

Validation is a HARD GATE at the boundary:
- Unknown recurrence frequency, interval < 1, weekday outside 0..6 -> rejected
- Malformed dates (YYYY-MM-DD), times (HH:mm), instants (ISO-8601) -> rejected
- Time blocks and calendar events with end <= start -> rejected
- Template blocks outside the day or shorter than a minute -> rejected

Core functions trust records built here and do not re-validate.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from daydeck.dates import minutes_of_day, parse_instant
from daydeck.models import CalendarEvent, Recurrence, Task, Template, TimeBlock


def _check_date(value: str | None) -> str | None:
    if value is None:
        return value
    if len(value) != 10:
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    date.fromisoformat(value)
    return value


def _check_instant(value: str) -> str:
    parse_instant(value)
    return value


class ContractModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# =============================================================================
# TASKS
# =============================================================================


class RecurrencePayload(ContractModel):
    """Repeat rule anchored at the task's scheduled date."""

    frequency: Literal["daily", "weekly", "monthly", "yearly"]
    interval: int = Field(ge=1, default=1)
    days_of_week: list[int] | None = None
    end_date: str | None = None

    @field_validator("days_of_week")
    @classmethod
    def weekdays_in_range(cls, v: list[int] | None) -> list[int] | None:
        if v is not None and any(d < 0 or d > 6 for d in v):
            raise ValueError("daysOfWeek values must be 0 (Sunday) to 6 (Saturday)")
        return v

    @field_validator("end_date")
    @classmethod
    def end_date_is_date(cls, v: str | None) -> str | None:
        return _check_date(v)


class SubtaskPayload(ContractModel):
    id: str
    title: str
    completed: bool = False
    parent_task_id: str | None = None


class TaskPayload(ContractModel):
    """Single task record."""

    id: str = Field(min_length=1)
    title: str
    description: str = ""
    status: Literal["todo", "in_progress", "done", "cancelled"] = "todo"
    priority: Literal["low", "medium", "high", "urgent"] = "medium"
    scheduled_date: str
    scheduled_time: str | None = None
    estimated_minutes: int | None = Field(ge=0, default=None)
    subtasks: list[SubtaskPayload] = Field(default_factory=list)
    recurrence: RecurrencePayload | None = None
    notifications: list[dict] = Field(default_factory=list)
    sort_order: int = 0
    created_at: str = ""
    updated_at: str = ""
    completed_at: str | None = None
    carried_over_from: str | None = None

    @field_validator("scheduled_date", "carried_over_from")
    @classmethod
    def dates_are_dates(cls, v: str | None) -> str | None:
        return _check_date(v)

    @field_validator("scheduled_time")
    @classmethod
    def time_is_hhmm(cls, v: str | None) -> str | None:
        if v is not None:
            if len(v) != 5:
                raise ValueError(f"expected HH:mm, got {v!r}")
            minutes_of_day(v)
        return v


# =============================================================================
# TIMELINE
# =============================================================================


class _IntervalPayload(ContractModel):
    id: str = Field(min_length=1)
    title: str
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def instants_parse(cls, v: str) -> str:
        return _check_instant(v)

    @model_validator(mode="after")
    def end_after_start(self):
        if parse_instant(self.end_time) <= parse_instant(self.start_time):
            raise ValueError(f"{self.id}: endTime must be after startTime")
        return self


class TimeBlockPayload(_IntervalPayload):
    task_id: str | None = None
    color: str = "#4F46E5"
    type: Literal["task", "event", "break", "focus"] = "task"


class CalendarEventPayload(_IntervalPayload):
    calendar_id: str = ""
    color: str = ""


# =============================================================================
# TEMPLATES
# =============================================================================


class TemplateBlockPayload(ContractModel):
    title: str
    type: Literal["task", "event", "break", "focus"] = "task"
    start_hour: int = Field(ge=0, le=23)
    start_minute: int = Field(ge=0, le=59)
    duration_minutes: int = Field(ge=1)
    color: str = "#4F46E5"


class TemplatePayload(ContractModel):
    """Reusable day layout."""

    id: str = Field(min_length=1)
    name: str
    icon: str = ""
    blocks: list[TemplateBlockPayload] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


# =============================================================================
# PARSERS
# =============================================================================


def parse_recurrence(payload: dict) -> Recurrence:
    """Validate and build a Recurrence. Raises pydantic.ValidationError."""
    model = RecurrencePayload.model_validate(payload)
    return Recurrence.from_dict(model.model_dump())


def parse_task(payload: dict) -> Task:
    """Validate and build a Task. Raises pydantic.ValidationError."""
    model = TaskPayload.model_validate(payload)
    return Task.from_dict(model.model_dump())


def parse_time_block(payload: dict) -> TimeBlock:
    """Validate and build a TimeBlock. Raises pydantic.ValidationError."""
    model = TimeBlockPayload.model_validate(payload)
    return TimeBlock.from_dict(model.model_dump())


def parse_calendar_event(payload: dict) -> CalendarEvent:
    """Validate and build a CalendarEvent. Raises pydantic.ValidationError."""
    model = CalendarEventPayload.model_validate(payload)
    return CalendarEvent.from_dict(model.model_dump())


def parse_template(payload: dict) -> Template:
    """Validate and build a Template. Raises pydantic.ValidationError."""
    model = TemplatePayload.model_validate(payload)
    return Template.from_dict(model.model_dump())
