"""
Weekly recurrence arithmetic for visit assignments.

Weekdays are numbered Sunday=0 .. Saturday=6 throughout the portal. All
arithmetic is in whole calendar days; no timezone handling is done here.
"""

from datetime import date, datetime, timedelta
from typing import List

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def _as_date(day: date) -> date:
    # datetime is a date subclass; keep only the calendar day
    return day.date() if isinstance(day, datetime) else day


def _check_weekday(weekday: int) -> None:
    if isinstance(weekday, bool) or not isinstance(weekday, int) or not 0 <= weekday <= 6:
        raise ValueError(f"weekday must be an integer in [0, 6], got {weekday!r}")


def weekday_of(day: date) -> int:
    """Weekday of a date in the Sunday=0 numbering."""
    # isoweekday: Monday=1 .. Sunday=7
    return day.isoweekday() % 7


def weekday_name(weekday: int) -> str:
    _check_weekday(weekday)
    return WEEKDAY_NAMES[weekday]


def next_occurrence(target_weekday: int, from_date: date) -> date:
    """
    Next date after `from_date` that falls on `target_weekday`.

    Always looks strictly forward: when `from_date` already is that weekday
    the result is one week later, never `from_date` itself.
    """
    _check_weekday(target_weekday)
    from_date = _as_date(from_date)
    days_ahead = (target_weekday - weekday_of(from_date) + 7) % 7
    return from_date + timedelta(days=days_ahead or 7)


def weekly_dates(start_date: date, repeat_count: int) -> List[date]:
    """`repeat_count` dates, one week apart, beginning at `start_date`."""
    if repeat_count < 0:
        raise ValueError(f"repeat_count must not be negative, got {repeat_count}")
    start_date = _as_date(start_date)
    return [start_date + timedelta(weeks=i) for i in range(repeat_count)]


def generate_series(target_weekday: int, repeat_count: int, from_date: date) -> List[date]:
    """Ascending dates of a weekly series starting at next_occurrence()."""
    return weekly_dates(next_occurrence(target_weekday, from_date), repeat_count)
