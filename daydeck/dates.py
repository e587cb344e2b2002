"""
Date and time helpers.

Calendar dates are YYYY-MM-DD strings (lexicographic order == chronological
order). Instants are ISO-8601 strings; a trailing "Z" is accepted and a naive
instant is read as UTC. Every helper takes a date, a datetime or a string.
"""

from datetime import UTC, date, datetime, time, timedelta

from daydeck.config import DATE_FORMAT, TIME_FORMAT


def parse_instant(value: str | datetime | date) -> datetime:
    """Parse an ISO-8601 instant into an aware datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    else:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_date(value: str | datetime | date) -> date:
    """Calendar date of a date string, an instant string, or a date/datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if len(value) == 10:
        return date.fromisoformat(value)
    return parse_instant(value).date()


def format_instant(dt: datetime) -> str:
    """Millisecond ISO-8601 with UTC written as Z."""
    s = parse_instant(dt).isoformat(timespec="milliseconds")
    if s.endswith("+00:00"):
        s = s[: -len("+00:00")] + "Z"
    return s


def format_date(value: str | datetime | date) -> str:
    return parse_date(value).strftime(DATE_FORMAT)


def format_time(value: str | datetime) -> str:
    return parse_instant(value).strftime(TIME_FORMAT)


def today_iso() -> str:
    return date.today().strftime(DATE_FORMAT)


def day_start(value: str | datetime | date) -> datetime:
    """Midnight at the start of the value's day, in the value's offset."""
    dt = parse_instant(value)
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def day_end(value: str | datetime | date) -> datetime:
    """23:59:59.999 on the value's day."""
    dt = parse_instant(value)
    return dt.replace(hour=23, minute=59, second=59, microsecond=999000)


def add_minutes(value: str | datetime | date, minutes: int) -> datetime:
    return parse_instant(value) + timedelta(minutes=minutes)


def minutes_between(start: str | datetime | date, end: str | datetime | date) -> int:
    """Signed whole minutes from start to end, truncated toward zero."""
    delta = parse_instant(end) - parse_instant(start)
    return int(delta.total_seconds() / 60)


def same_day(a: str | datetime | date, b: str | datetime | date) -> bool:
    return parse_date(a) == parse_date(b)


def minutes_of_day(hhmm: str) -> int:
    """'07:30' -> 450"""
    hours, minutes = hhmm.split(":")
    hour, minute = int(hours), int(minutes)
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Invalid time of day: {hhmm!r} (use HH:mm)")
    return hour * 60 + minute
