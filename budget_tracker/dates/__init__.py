"""Date and week arithmetic package."""

from budget_tracker.dates.week_calendar import (
    WEEK_LENGTH,
    DateLike,
    format_date,
    format_date_time,
    format_time,
    is_same_day,
    is_same_week,
    now,
    to_local,
    week_end,
    week_label,
    week_start,
)

__all__ = [
    "WEEK_LENGTH",
    "DateLike",
    "format_date",
    "format_date_time",
    "format_time",
    "is_same_day",
    "is_same_week",
    "now",
    "to_local",
    "week_end",
    "week_label",
    "week_start",
]
