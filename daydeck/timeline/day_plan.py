"""
Day Plan - Assemble the read-only view of a single date.

This produces what the timeline screen shows for a day:
- Tasks scheduled that day, plus recurring tasks with an occurrence that day
- The day's time blocks, ordered by start
- Conflicts between those blocks and the day's calendar events
"""

import logging
from datetime import date, datetime, time, timedelta

from daydeck.dates import format_date, parse_date
from daydeck.models import CalendarEvent, DayPlan, Task
from daydeck.timeline.block_store import BlockStore
from daydeck.timeline.conflicts import detect_conflicts
from daydeck.timeline.intervals import overlaps
from daydeck.timeline.recurrence import task_occurrences

logger = logging.getLogger(__name__)


def tasks_on(tasks: list[Task], target_date: str | date) -> list[Task]:
    """
    Tasks that land on a date.

    A recurring task scheduled earlier is included when its rule produces
    target_date. The source task is listed as-is; no occurrence records are made.
    """
    day = format_date(target_date)
    selected = []

    for task in tasks:
        if task.scheduled_date == day:
            selected.append(task)
        elif task.recurrence and task.scheduled_date < day:
            if task_occurrences(task, day, day):
                selected.append(task)

    # Manual order first; stable sort keeps input order for ties
    return sorted(selected, key=lambda t: t.sort_order)


def build_day_plan(
    target_date: str | date,
    tasks: list[Task],
    store: BlockStore,
    events: list[CalendarEvent],
) -> DayPlan:
    """
    Build the plan for one date.

    Args:
        target_date: Date YYYY-MM-DD
        tasks: All known tasks
        store: The block store
        events: Calendar events (only those on target_date are considered)

    Returns:
        DayPlan for the date
    """
    day = format_date(target_date)

    blocks = store.blocks_on(day)
    day_events = [e for e in events if _touches_day(e, parse_date(day))]
    conflicts = detect_conflicts(blocks, day_events)

    plan = DayPlan(date=day, tasks=tasks_on(tasks, day), time_blocks=blocks, conflicts=conflicts)
    logger.debug(
        f"Day plan {day}: {len(plan.tasks)} tasks, {len(blocks)} blocks, {len(conflicts)} conflicts"
    )
    return plan


def _touches_day(event: CalendarEvent, day: date) -> bool:
    """Event overlaps the day, measured on the event's own clock."""
    midnight = datetime.combine(day, time.min, tzinfo=event.start.tzinfo)
    return overlaps(event.start, event.end, midnight, midnight + timedelta(days=1))
