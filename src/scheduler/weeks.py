"""Week-anchor arithmetic for the calendar views.

A week is identified by its Monday (the "anchor"). Day-of-week indexes are
ISO: 1 = Monday ... 7 = Sunday.
"""

from datetime import date, datetime, timedelta

from src.scheduler.models import DayOfWeek

DAYS_PER_WEEK = 7


def as_date(value: date | datetime) -> date:
    """Drop the time part of a datetime; plain dates pass through."""
    return value.date() if isinstance(value, datetime) else value


def iso_day(value: date | datetime) -> DayOfWeek:
    """ISO day of week of a date (Sunday is 7, not 0)."""
    return DayOfWeek(as_date(value).isoweekday())


def monday_of(value: date | datetime) -> date:
    """Monday of the week containing `value`. Idempotent."""
    day = as_date(value)
    return day - timedelta(days=day.weekday())


def shift_week(anchor: date, weeks: int = 1) -> date:
    """Move a week anchor forward (or backward for negative `weeks`)."""
    return anchor + timedelta(days=DAYS_PER_WEEK * weeks)


def date_for_day(anchor: date, day: int) -> date:
    """Concrete date of ISO `day` in the week anchored at `anchor`."""
    return monday_of(anchor) + timedelta(days=DayOfWeek(day) - 1)


def week_dates(anchor: date) -> list[date]:
    """The seven dates Monday..Sunday of the anchor's week."""
    monday = monday_of(anchor)
    return [monday + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def week_range(anchor: date) -> tuple[date, date]:
    """(Monday, Sunday) bounds, as sent to the backend's date-range filter."""
    monday = monday_of(anchor)
    return monday, monday + timedelta(days=DAYS_PER_WEEK - 1)


def is_current_week(anchor: date, today: date | None = None) -> bool:
    if today is None:
        today = date.today()
    return monday_of(anchor) == monday_of(today)
