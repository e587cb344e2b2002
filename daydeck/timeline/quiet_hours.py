"""
Quiet hours - a daily HH:mm window where reminders should not fire.

Start is inclusive, end exclusive. When start > end the window spans
midnight (22:00 -> 07:00). Times are compared on the moment's own wall clock.
"""

from datetime import datetime

from daydeck.config import Settings
from daydeck.dates import minutes_of_day, parse_instant


def is_in_quiet_hours(moment: str | datetime, quiet_start: str, quiet_end: str) -> bool:
    dt = parse_instant(moment)
    now = dt.hour * 60 + dt.minute
    start = minutes_of_day(quiet_start)
    end = minutes_of_day(quiet_end)

    if start <= end:
        return start <= now < end

    # Spans midnight
    return now >= start or now < end


def is_quiet(moment: str | datetime, settings: Settings) -> bool:
    """Quiet-hours check against the user's configured window."""
    return is_in_quiet_hours(moment, settings.quiet_hours_start, settings.quiet_hours_end)
