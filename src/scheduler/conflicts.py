"""Room conflict detection for schedule entries.

A conflict is a normal result, not an error: the caller (the create/edit
flow) shows every clashing session and refuses to persist while the list is
non-empty. Detection is pure; fetching the room's current entries and any
locking around the read-check-write sequence belong to the caller.
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict

from src.scheduler.aggregation import group_by_room_and_day, schedulable
from src.scheduler.logging import get_logger
from src.scheduler.models import DayOfWeek, ScheduleEntry
from src.scheduler.utils import format_time

log = get_logger(__name__)


class Conflict(BaseModel):
    """An existing session clashing with a candidate in the same room and day."""

    model_config = ConfigDict(frozen=True)

    entry_id: str | None
    course_id: str
    course_name: str | None = None
    day_of_week: DayOfWeek
    start_time: int
    end_time: int

    @classmethod
    def from_entry(cls, entry: ScheduleEntry) -> "Conflict":
        return cls(
            entry_id=entry.id,
            course_id=entry.course_id,
            course_name=entry.course_name,
            day_of_week=entry.day_of_week,
            start_time=entry.start_time,
            end_time=entry.end_time,
        )

    @property
    def start_label(self) -> str:
        return format_time(self.start_time)

    @property
    def end_label(self) -> str:
        return format_time(self.end_time)


class ConflictPair(BaseModel):
    """Two stored sessions double-booking a room, found by a batch audit."""

    model_config = ConfigDict(frozen=True)

    room_id: str
    day_of_week: DayOfWeek
    first: Conflict
    second: Conflict

    @property
    def overlap_minutes(self) -> int:
        return min(self.first.end_time, self.second.end_time) - max(
            self.first.start_time, self.second.start_time
        )


def detect_conflicts(
    candidate: ScheduleEntry,
    existing_entries: Iterable[ScheduleEntry],
    exclude_id: str | None = None,
) -> list[Conflict]:
    """Find every existing session the candidate would clash with.

    Only active in-person entries in the candidate's room on the same day
    are considered. ``exclude_id`` skips the stored version of the entry
    being edited so it does not conflict with itself.

    Args:
        candidate: Entry about to be created or updated.
        existing_entries: Entries of the target room as currently stored.
        exclude_id: Id of the entry under edit, if any.

    Returns:
        All overlapping entries as Conflict records, in input order.
        Empty for virtual or room-less candidates.
    """
    if not candidate.in_person or not candidate.room_id:
        return []

    conflicts: list[Conflict] = []
    for entry in existing_entries:
        if not entry.active or not entry.in_person:
            continue
        if entry.room_id != candidate.room_id:
            continue
        if exclude_id is not None and entry.id == exclude_id:
            continue
        if entry.overlaps(candidate):
            conflicts.append(Conflict.from_entry(entry))

    if conflicts:
        log.debug(
            "conflicts_detected",
            room_id=candidate.room_id,
            day_of_week=int(candidate.day_of_week),
            start=candidate.start_label,
            end=candidate.end_label,
            count=len(conflicts),
        )
    return conflicts


def has_conflicts(
    candidate: ScheduleEntry,
    existing_entries: Iterable[ScheduleEntry],
    exclude_id: str | None = None,
) -> bool:
    """True when detect_conflicts() would return anything."""
    return bool(detect_conflicts(candidate, existing_entries, exclude_id))


def find_room_conflicts(entries: Iterable[ScheduleEntry]) -> list[ConflictPair]:
    """Audit a batch of stored entries for room double-bookings.

    Each clashing pair is reported once, ordered by room, day and start time.
    Inactive and virtual entries are ignored.
    """
    grouped = group_by_room_and_day(schedulable(entries))

    pairs: list[ConflictPair] = []
    for room_id in sorted(grouped):
        for day, day_entries in sorted(grouped[room_id].items()):
            ordered = sorted(day_entries, key=lambda e: e.start_time)
            for i, first in enumerate(ordered):
                for second in ordered[i + 1 :]:
                    # Sorted by start: once one starts after `first` ends, all later ones do
                    if second.start_time >= first.end_time:
                        break
                    pairs.append(
                        ConflictPair(
                            room_id=room_id,
                            day_of_week=day,
                            first=Conflict.from_entry(first),
                            second=Conflict.from_entry(second),
                        )
                    )

    log.info("room_conflict_audit", pairs=len(pairs))
    return pairs
