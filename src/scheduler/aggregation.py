"""Grouping of schedule entries by room and day for the calendar views.

Pure input preparation for src.scheduler.layout: no business rules, and
input order is preserved inside every bucket.
"""

from typing import Any, Iterable, Mapping

from src.scheduler.errors import InvalidScheduleEntry
from src.scheduler.logging import get_logger
from src.scheduler.models import DayOfWeek, ScheduleEntry

log = get_logger(__name__)

ALL_DAYS: tuple[DayOfWeek, ...] = tuple(DayOfWeek)

RoomDayBuckets = dict[str, dict[DayOfWeek, list[ScheduleEntry]]]


def load_entries(
    raw_entries: Iterable[ScheduleEntry | Mapping[str, Any]],
) -> list[ScheduleEntry]:
    """Turn camelCase payloads into ScheduleEntry models, skipping malformed ones.

    Already-built entries pass through untouched. A malformed payload is
    logged and dropped so one bad row does not hide a whole calendar.
    """
    entries: list[ScheduleEntry] = []
    skipped = 0
    for raw in raw_entries:
        if isinstance(raw, ScheduleEntry):
            entries.append(raw)
            continue
        try:
            entries.append(ScheduleEntry.from_payload(raw))
        except InvalidScheduleEntry as e:
            skipped += 1
            log.warning(
                "schedule_entry_skipped",
                entry_id=raw.get("id") if isinstance(raw, Mapping) else None,
                reason=str(e).splitlines()[0],
            )

    if skipped:
        log.info("schedule_entries_loaded", loaded=len(entries), skipped=skipped)
    return entries


def schedulable(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    """Entries that occupy a room: active and in person."""
    return [e for e in entries if e.active and e.in_person and e.room_id]


def group_by_room_and_day(entries: Iterable[ScheduleEntry]) -> RoomDayBuckets:
    """Group entries as {room_id: {day: [entries]}}.

    Every room seen gets all seven day buckets, empty ones included.
    Entries without a room are skipped.
    """
    result: RoomDayBuckets = {}
    for entry in entries:
        if not entry.room_id:
            continue
        days = result.setdefault(entry.room_id, {day: [] for day in ALL_DAYS})
        days[entry.day_of_week].append(entry)
    return result


def group_by_day(
    entries: Iterable[ScheduleEntry], room_id: str
) -> dict[DayOfWeek, list[ScheduleEntry]]:
    """Group one room's entries by day; all seven days are present."""
    result: dict[DayOfWeek, list[ScheduleEntry]] = {day: [] for day in ALL_DAYS}
    for entry in entries:
        if entry.room_id == room_id:
            result[entry.day_of_week].append(entry)
    return result


def group_by_room_and_days(
    entries: Iterable[ScheduleEntry],
    room_ids: Iterable[str],
    days: Iterable[int],
) -> RoomDayBuckets:
    """Buckets for the cartesian product of the selected rooms and days.

    Rooms and days keep the order they were selected in; entries outside
    the selection are ignored.
    """
    selected_days = [DayOfWeek(day) for day in days]
    result: RoomDayBuckets = {
        room_id: {day: [] for day in selected_days} for room_id in room_ids
    }
    for entry in entries:
        buckets = result.get(entry.room_id) if entry.room_id else None
        if buckets is None or entry.day_of_week not in buckets:
            continue
        buckets[entry.day_of_week].append(entry)
    return result
