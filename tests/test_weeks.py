from datetime import date, datetime, timedelta

import pytest

from src.scheduler.models import DayOfWeek
from src.scheduler.weeks import (
    as_date,
    date_for_day,
    is_current_week,
    iso_day,
    monday_of,
    shift_week,
    week_dates,
    week_range,
)
from tests.factories import WEEK_OF_MARCH_2


@pytest.mark.parametrize("offset", range(7))
def test_monday_of_every_day_in_week(offset: int) -> None:
    assert monday_of(WEEK_OF_MARCH_2 + timedelta(days=offset)) == WEEK_OF_MARCH_2


def test_sunday_belongs_to_preceding_monday() -> None:
    assert monday_of(date(2026, 3, 8)) == date(2026, 3, 2)
    assert iso_day(date(2026, 3, 8)) is DayOfWeek.SUNDAY


def test_monday_of_accepts_datetimes() -> None:
    assert monday_of(datetime(2026, 3, 5, 18, 30)) == WEEK_OF_MARCH_2


def test_monday_of_across_year_boundary() -> None:
    assert monday_of(date(2027, 1, 1)) == date(2026, 12, 28)


@pytest.mark.parametrize("day", [date(2026, 1, 1), date(2026, 2, 28), date(2026, 10, 19), date(2024, 2, 29)])
def test_week_anchor_determinism(day: date) -> None:
    anchor = monday_of(day)
    assert monday_of(anchor) == anchor
    assert monday_of(anchor + timedelta(days=7)) == anchor + timedelta(days=7)
    assert shift_week(anchor) == anchor + timedelta(days=7)


def test_shift_week_backwards_and_multiple() -> None:
    assert shift_week(WEEK_OF_MARCH_2, -1) == date(2026, 2, 23)
    assert shift_week(WEEK_OF_MARCH_2, 4) == date(2026, 3, 30)
    assert shift_week(shift_week(WEEK_OF_MARCH_2, 1), -1) == WEEK_OF_MARCH_2


def test_week_dates_and_range() -> None:
    dates = week_dates(date(2026, 3, 4))
    assert dates[0] == WEEK_OF_MARCH_2
    assert dates[-1] == date(2026, 3, 8)
    assert len(dates) == 7
    assert week_range(date(2026, 3, 4)) == (date(2026, 3, 2), date(2026, 3, 8))


def test_date_for_day() -> None:
    assert date_for_day(WEEK_OF_MARCH_2, 1) == WEEK_OF_MARCH_2
    assert date_for_day(WEEK_OF_MARCH_2, DayOfWeek.FRIDAY) == date(2026, 3, 6)
    assert date_for_day(date(2026, 3, 6), 7) == date(2026, 3, 8)


def test_is_current_week() -> None:
    assert is_current_week(WEEK_OF_MARCH_2, today=date(2026, 3, 8))
    assert not is_current_week(WEEK_OF_MARCH_2, today=date(2026, 3, 9))


def test_datetimes_are_normalised_to_dates() -> None:
    now = datetime(2026, 3, 8, 23, 45)
    assert as_date(now) == date(2026, 3, 8)
    assert as_date(WEEK_OF_MARCH_2) is WEEK_OF_MARCH_2
    assert is_current_week(WEEK_OF_MARCH_2, today=now)
    assert not is_current_week(WEEK_OF_MARCH_2, today=datetime(2026, 3, 9, 0, 5))
