"""
Interval primitives shared by conflict detection and block packing.

All intervals are half-open [start, end): touching endpoints never overlap.
"""

from datetime import datetime, timedelta

from daydeck.dates import parse_instant


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Overlap exists if each interval starts before the other ends."""
    return a_start < b_end and b_start < a_end


def overlap_window(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> tuple[datetime, datetime] | None:
    """The shared [start, end) of two intervals, or None if they don't overlap."""
    if not overlaps(a_start, a_end, b_start, b_end):
        return None
    return max(a_start, b_start), min(a_end, b_end)


def duration(start: str | datetime, end: str | datetime) -> timedelta:
    return parse_instant(end) - parse_instant(start)


def is_valid_interval(start: str | datetime, end: str | datetime) -> bool:
    """End must be strictly after start."""
    return duration(start, end) > timedelta(0)
