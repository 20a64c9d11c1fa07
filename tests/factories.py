"""Builders shared by the test modules."""

from datetime import date

from src.scheduler.models import Modality, ScheduleEntry

MONDAY = 1
TUESDAY = 2

# 2026-03-02 is a Monday
WEEK_OF_MARCH_2 = date(2026, 3, 2)


def make_entry(
    entry_id: str | None,
    start: str,
    duration: int,
    *,
    room: str | None = "lab-a",
    day: int = MONDAY,
    course: str = "course-1",
    active: bool = True,
    **extra,
) -> ScheduleEntry:
    modality = Modality.IN_PERSON if room else Modality.VIRTUAL
    return ScheduleEntry(
        id=entry_id,
        course_id=course,
        room_id=room,
        modality=modality,
        day_of_week=day,
        start_time=start,
        duration_minutes=duration,
        active=active,
        **extra,
    )
