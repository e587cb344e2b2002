"""
Recurrence Engine - Project repeating tasks onto calendar dates.

Pure functions. The engine never creates Task records; it returns
YYYY-MM-DD strings and leaves materialization to the caller.

Rules:
- daily: anchor + interval days
- weekly: anchor + interval weeks, or, with days_of_week, the next listed
  weekday later in the anchor's week; when none is left, the first listed
  weekday of the week `interval` weeks ahead (weeks start on Sunday)
- monthly / yearly: same day-of-month, clamped to the last day of the
  target month (Jan 31 + 1 month = Feb 28)
- end_date is inclusive

"No more occurrences" is returned as None, never raised.
"""

import logging
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from daydeck import config
from daydeck.dates import format_date, parse_date
from daydeck.models import Recurrence, RecurrenceFrequency, Task

logger = logging.getLogger(__name__)


def sunday_weekday(d: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6."""
    return (d.weekday() + 1) % 7


def next_occurrence(anchor_date: str | date, recurrence: Recurrence) -> str | None:
    """
    Next occurrence after anchor_date.

    Args:
        anchor_date: Date the rule is currently sitting on (YYYY-MM-DD)
        recurrence: The repeat rule

    Returns:
        Next date string, or None if the rule is exhausted or unusable
    """
    anchor = parse_date(anchor_date)
    nxt = _advance(anchor, recurrence)
    if nxt is None:
        return None

    if recurrence.end_date and nxt > parse_date(recurrence.end_date):
        return None

    return format_date(nxt)


def occurrences_in_range(
    anchor_date: str | date,
    recurrence: Recurrence,
    range_start: str | date,
    range_end: str | date,
) -> list[str]:
    """
    All occurrence dates within [range_start, range_end], ascending.

    The anchor itself counts as an occurrence. Anchors before the range are
    fast-forwarded; a rule that ends before the range yields [].
    """
    start = parse_date(range_start)
    end = parse_date(range_end)
    rule_end = parse_date(recurrence.end_date) if recurrence.end_date else None

    cursor = parse_date(anchor_date)

    while cursor < start:
        nxt = next_occurrence(cursor, recurrence)
        if nxt is None:
            return []
        nxt_date = parse_date(nxt)
        if nxt_date <= cursor:
            logger.warning(f"Recurrence {recurrence} does not advance from {cursor}")
            return []
        cursor = nxt_date

    occurrences = []
    while cursor <= end and (rule_end is None or cursor <= rule_end):
        if len(occurrences) >= config.RECURRENCE_MAX_OCCURRENCES:
            logger.warning(
                f"Stopped expanding {recurrence.frequency} rule at "
                f"{config.RECURRENCE_MAX_OCCURRENCES} occurrences ({format_date(cursor)})"
            )
            break

        occurrences.append(format_date(cursor))

        nxt = next_occurrence(cursor, recurrence)
        if nxt is None:
            break
        nxt_date = parse_date(nxt)
        if nxt_date <= cursor:
            logger.warning(f"Recurrence {recurrence} does not advance from {cursor}")
            break
        cursor = nxt_date

    return occurrences


def next_task_occurrence(task: Task) -> str | None:
    """Next occurrence after the task's scheduled date, or None if it doesn't repeat."""
    if not task.recurrence:
        return None
    return next_occurrence(task.scheduled_date, task.recurrence)


def task_occurrences(task: Task, range_start: str | date, range_end: str | date) -> list[str]:
    """Occurrences of a recurring task within a range. Non-recurring tasks yield []."""
    if not task.recurrence:
        return []
    return occurrences_in_range(task.scheduled_date, task.recurrence, range_start, range_end)


def _advance(current: date, recurrence: Recurrence) -> date | None:
    frequency = recurrence.frequency
    interval = recurrence.interval

    if frequency == RecurrenceFrequency.DAILY:
        return current + timedelta(days=interval)

    if frequency == RecurrenceFrequency.WEEKLY:
        if recurrence.days_of_week:
            return _next_listed_weekday(current, recurrence.days_of_week, interval)
        return current + timedelta(weeks=interval)

    if frequency == RecurrenceFrequency.MONTHLY:
        return current + relativedelta(months=interval)

    if frequency == RecurrenceFrequency.YEARLY:
        return current + relativedelta(years=interval)

    logger.warning(f"Unknown recurrence frequency {frequency!r}; treating rule as exhausted")
    return None


def _next_listed_weekday(current: date, days_of_week: list[int], interval: int) -> date:
    """
    Later listed day in the current week if there is one (interval ignored),
    else the first listed day of the Sunday-started week `interval` weeks ahead.
    """
    listed = sorted(set(days_of_week))
    today = sunday_weekday(current)

    for day in listed:
        if day > today:
            return current + timedelta(days=day - today)

    days_until_sunday = 7 - today
    target_week_start = current + timedelta(days=days_until_sunday + (interval - 1) * 7)
    return target_week_start + timedelta(days=listed[0])
