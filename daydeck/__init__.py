# DayDeck - Scheduling Core
"""
Exports for the app shell and other consumers.
"""

from .config import CarryOverBehavior, Settings, load_settings
from .models import (
    CalendarEvent,
    Conflict,
    DayPlan,
    Priority,
    Recurrence,
    RecurrenceFrequency,
    Subtask,
    Template,
    TemplateBlock,
    Task,
    TaskStatus,
    TimeBlock,
    TimeBlockType,
)

__all__ = [
    "Settings",
    "CarryOverBehavior",
    "load_settings",
    "Task",
    "Subtask",
    "Template",
    "TemplateBlock",
    "TaskStatus",
    "Priority",
    "Recurrence",
    "RecurrenceFrequency",
    "TimeBlock",
    "TimeBlockType",
    "CalendarEvent",
    "Conflict",
    "DayPlan",
]
