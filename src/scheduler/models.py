"""Pydantic models for schedule data.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Payloads use camelCase English keys (courseId, roomId, dayOfWeek, startTime);
Python code uses snake_case names.
"""

from datetime import time
from enum import Enum, IntEnum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.scheduler.errors import InvalidScheduleEntry
from src.scheduler.utils import (
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    format_time,
    intervals_overlap,
    parse_time,
)


class Modality(str, Enum):
    """How a session is delivered. Only in-person sessions occupy a room."""

    IN_PERSON = "in_person"
    VIRTUAL = "virtual"


class DayOfWeek(IntEnum):
    """ISO 8601 day of week (1 = Monday ... 7 = Sunday)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Room(BaseModel):
    """A classroom of a branch. Read-only here; owned by the CRUD layer."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    id: str
    name: str = ""
    capacity: int | None = None  # 0 or None means unlimited
    branch_id: str | None = None

    @property
    def unlimited(self) -> bool:
        return not self.capacity or self.capacity <= 0


class ScheduleEntry(BaseModel):
    """One weekly recurring session of a course.

    The time of day is stored as minutes since midnight; "HH:MM" strings and
    datetime.time values are accepted on input. An entry never crosses
    midnight, and has a room if and only if it is in person.

    Optional display fields (course_name, room_name, ...) are the extra
    columns the backend adds to listing responses; nothing in the core
    depends on them except occupancy classification.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel
    )

    id: str | None = None  # None for a candidate that was never saved
    course_id: str
    room_id: str | None = None
    modality: Modality = Modality.IN_PERSON
    day_of_week: DayOfWeek
    start_time: int  # minutes since midnight
    duration_minutes: int
    active: bool = True

    course_name: str | None = None
    room_name: str | None = None
    room_capacity: int | None = None
    course_capacity: int | None = None
    enrolled_count: int | None = None
    course_group_id: str | None = None

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _check_day(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool):
            if not 1 <= value <= 7:
                raise InvalidScheduleEntry(
                    f"day_of_week must be 1 (Monday) .. 7 (Sunday), got {value}"
                )
        return value

    @field_validator("start_time", mode="before")
    @classmethod
    def _coerce_start(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_time(value)
        if isinstance(value, time):
            return value.hour * MINUTES_PER_HOUR + value.minute
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "ScheduleEntry":
        if self.duration_minutes <= 0:
            raise InvalidScheduleEntry(
                f"duration_minutes must be positive, got {self.duration_minutes}"
            )
        if not 0 <= self.start_time < MINUTES_PER_DAY:
            raise InvalidScheduleEntry(
                f"start_time must be within the day, got {self.start_time}"
            )
        if self.end_time > MINUTES_PER_DAY:
            raise InvalidScheduleEntry(
                f"Session {self.start_label}+{self.duration_minutes}min crosses midnight"
            )
        if self.modality is Modality.IN_PERSON and not self.room_id:
            raise InvalidScheduleEntry("In-person session requires a room")
        if self.modality is Modality.VIRTUAL and self.room_id:
            raise InvalidScheduleEntry("Virtual session cannot be bound to a room")
        return self

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ScheduleEntry":
        """Build an entry from a camelCase payload (courseId, roomId, ...).

        Raises:
            InvalidScheduleEntry: For any malformed payload, including type
                errors pydantic reports as ValidationError.
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidScheduleEntry(str(e)) from e

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration_minutes

    @property
    def start_label(self) -> str:
        return format_time(self.start_time)

    @property
    def end_label(self) -> str:
        return format_time(self.end_time)

    @property
    def in_person(self) -> bool:
        return self.modality is Modality.IN_PERSON

    def overlaps(self, other: "ScheduleEntry") -> bool:
        """True if both sessions fall on the same day and their times overlap.

        Room and modality are not considered here; see conflicts.detect_conflicts.
        """
        if self.day_of_week != other.day_of_week:
            return False
        return intervals_overlap(
            self.start_time, self.end_time, other.start_time, other.end_time
        )
