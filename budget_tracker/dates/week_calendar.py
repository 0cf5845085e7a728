"""
Week Calendar Utilities

Pure helpers for week arithmetic and display labels.

Weeks start on Monday at local midnight and end on Sunday at
23:59:59.999. Every instant handled here is a naive local datetime;
timezone-aware values are converted to local time before use.
"""

from datetime import date, datetime, time, timedelta
from typing import Union


DateLike = Union[date, datetime]

WEEK_LENGTH = timedelta(days=6, hours=23, minutes=59, seconds=59, milliseconds=999)


def now() -> datetime:
    """Current local instant."""
    return datetime.now()


def to_local(value: DateLike) -> datetime:
    """
    Normalize a date or datetime to a naive local datetime.

    Plain dates become local midnight. Aware datetimes are converted
    to the local timezone and stripped of tzinfo.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def week_start(value: DateLike) -> datetime:
    """
    Monday at local midnight of the week containing ``value``.

    Sunday belongs to the week that started the previous Monday.
    """
    moment = to_local(value)
    # Sunday=0 .. Saturday=6
    weekday = moment.isoweekday() % 7
    offset = -6 if weekday == 0 else 1 - weekday
    shifted = moment + timedelta(days=offset)
    return datetime.combine(shifted.date(), time.min)


def week_end(value: DateLike) -> datetime:
    """Sunday at 23:59:59.999 of the week containing ``value``."""
    return week_start(value) + WEEK_LENGTH


def is_same_week(first: DateLike, second: DateLike) -> bool:
    return week_start(first) == week_start(second)


def is_same_day(first: DateLike, second: DateLike) -> bool:
    return to_local(first).date() == to_local(second).date()


def format_date(value: DateLike) -> str:
    """Long date with weekday, e.g. ``Wednesday, October 14, 2026``."""
    moment = to_local(value)
    return f"{moment:%A}, {moment:%B} {moment.day}, {moment.year}"


def format_time(value: DateLike) -> str:
    """12-hour clock with a two-digit hour, e.g. ``09:05 AM``."""
    return f"{to_local(value):%I:%M %p}"


def format_date_time(value: DateLike) -> str:
    return f"{format_date(value)} at {format_time(value)}"


def week_label(start: DateLike) -> str:
    """
    Short label for a week.

    ``Jul 7-13`` when the week stays inside one month,
    ``Jul 28 - Aug 3`` when it crosses into the next.
    """
    first = to_local(start)
    last = week_end(first)
    if first.month == last.month:
        return f"{first:%b} {first.day}-{last.day}"
    return f"{first:%b} {first.day} - {last:%b} {last.day}"
