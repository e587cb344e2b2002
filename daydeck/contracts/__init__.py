"""
Contracts Module - Validation at the edges of the scheduling core.

This module provides:
- schema.py: Pydantic models for inbound record shape validation
- invariants.py: Timeline correctness checks

Invariants are enforced BOTH in tests AND in production.
"""

from .invariants import InvariantViolation, check_durations_preserved, check_packed
from .schema import (
    CalendarEventPayload,
    RecurrencePayload,
    TaskPayload,
    TemplatePayload,
    TimeBlockPayload,
    parse_calendar_event,
    parse_recurrence,
    parse_task,
    parse_template,
    parse_time_block,
)

__all__ = [
    "InvariantViolation",
    "check_packed",
    "check_durations_preserved",
    "TaskPayload",
    "RecurrencePayload",
    "TimeBlockPayload",
    "CalendarEventPayload",
    "TemplatePayload",
    "parse_task",
    "parse_recurrence",
    "parse_time_block",
    "parse_calendar_event",
    "parse_template",
]
