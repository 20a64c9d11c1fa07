"""Calendar layout engine - grid coordinates for schedule entries.

The admin calendar draws a fixed visible window (07:00-22:00 by default, one
gridline per hour) and places each session as an absolutely positioned block:

    top    = (start - window_start) / window_span * 100
    height = max(duration / window_span * 100, min_height_percent)

Three grid shapes share that computation:
  - day:       one concrete date, one column per room
  - week:      one room, one column per ISO day (1..7) of an anchored week
  - multi-day: selected rooms x selected days (weekdays-only, weekend-only)

Only active in-person entries are drawn. Raw payloads that fail validation
are skipped (see aggregation.load_entries). Sessions outside the window are
positioned outside 0..100 unless the window clamps.
"""

from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, model_validator

from src.scheduler.aggregation import (
    ALL_DAYS,
    group_by_day,
    group_by_room_and_days,
    load_entries,
    schedulable,
)
from src.scheduler.config import SchedulerConfig, get_config
from src.scheduler.errors import InvalidLayoutWindow
from src.scheduler.logging import get_logger
from src.scheduler.models import DayOfWeek, Room, ScheduleEntry
from src.scheduler.utils import MINUTES_PER_HOUR
from src.scheduler.weeks import as_date, date_for_day, iso_day, monday_of

log = get_logger(__name__)

RawEntries = Iterable[ScheduleEntry | Mapping[str, Any]]


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    WEEKDAYS = "weekdays"
    WEEKEND = "weekend"

    @property
    def days(self) -> tuple[DayOfWeek, ...]:
        if self is ViewMode.WEEKDAYS:
            return ALL_DAYS[:5]
        if self is ViewMode.WEEKEND:
            return ALL_DAYS[5:]
        return ALL_DAYS


class CalendarWindow(BaseModel):
    """Visible hour range of a calendar grid, [start_hour, end_hour)."""

    model_config = ConfigDict(frozen=True)

    start_hour: int = 7
    end_hour: int = 22
    min_height_percent: float = 2.5
    clamp: bool = False

    @model_validator(mode="after")
    def _check_bounds(self) -> "CalendarWindow":
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise InvalidLayoutWindow(
                f"Window must satisfy 0 <= start < end <= 24, "
                f"got {self.start_hour}..{self.end_hour}"
            )
        if not 0 <= self.min_height_percent <= 100:
            raise InvalidLayoutWindow(
                f"min_height_percent must be within 0..100, got {self.min_height_percent}"
            )
        return self

    @classmethod
    def from_config(cls, config: SchedulerConfig | None = None) -> "CalendarWindow":
        config = config or get_config()
        return cls(
            start_hour=config.calendar_start_hour,
            end_hour=config.calendar_end_hour,
            min_height_percent=config.calendar_min_height_percent,
            clamp=config.calendar_clamp,
        )

    @property
    def start_minute(self) -> int:
        return self.start_hour * MINUTES_PER_HOUR

    @property
    def end_minute(self) -> int:
        return self.end_hour * MINUTES_PER_HOUR

    @property
    def span_minutes(self) -> int:
        return self.end_minute - self.start_minute

    def hours(self) -> list[int]:
        """Hourly gridline labels."""
        return list(range(self.start_hour, self.end_hour))

    def contains(self, entry: ScheduleEntry) -> bool:
        return self.start_minute <= entry.start_time and entry.end_time <= self.end_minute

    def position(self, entry: ScheduleEntry) -> "CalendarCell | None":
        """Grid coordinates of one entry.

        Returns None only in clamping mode, for a session entirely outside
        the window.
        """
        start, end = entry.start_time, entry.end_time
        clipped = False
        if self.clamp:
            visible_start = max(start, self.start_minute)
            visible_end = min(end, self.end_minute)
            if visible_end <= visible_start:
                return None
            clipped = (visible_start, visible_end) != (start, end)
            start, end = visible_start, visible_end

        top = (start - self.start_minute) / self.span_minutes * 100
        height = max((end - start) / self.span_minutes * 100, self.min_height_percent)

        # A floored block stays inside the grid when the session does, and
        # always when clamping
        if (self.clamp or self.contains(entry)) and top + height > 100:
            top = max(100 - height, 0.0)

        return CalendarCell(
            entry_id=entry.id,
            entry=entry,
            top_percent=top,
            height_percent=height,
            clipped=clipped,
        )

    def cells(self, entries: Iterable[ScheduleEntry]) -> list["CalendarCell"]:
        """Positions for a column of entries, ordered by start time."""
        cells = []
        for entry in sorted(entries, key=lambda e: e.start_time):
            cell = self.position(entry)
            if cell is not None:
                cells.append(cell)
        return cells


class CalendarCell(BaseModel):
    """Vertical placement of one session inside its column, in percent."""

    model_config = ConfigDict(frozen=True)

    entry_id: str | None
    entry: ScheduleEntry
    top_percent: float
    height_percent: float
    clipped: bool = False

    @property
    def bottom_percent(self) -> float:
        return self.top_percent + self.height_percent


class RoomColumn(BaseModel):
    room: Room
    cells: list[CalendarCell]


class DayColumn(BaseModel):
    day: DayOfWeek
    calendar_date: date
    is_today: bool
    cells: list[CalendarCell]


class RoomDayColumn(BaseModel):
    room: Room
    day: DayOfWeek
    calendar_date: date
    is_today: bool
    cells: list[CalendarCell]


class DayGrid(BaseModel):
    """Single date, one column per room."""

    calendar_date: date
    day: DayOfWeek
    hours: list[int]
    columns: list[RoomColumn]

    @property
    def total(self) -> int:
        return sum(len(c.cells) for c in self.columns)


class WeekGrid(BaseModel):
    """Single room, one column per day of the anchored week."""

    room_id: str
    week_start: date
    hours: list[int]
    columns: list[DayColumn]

    @property
    def total(self) -> int:
        return sum(len(c.cells) for c in self.columns)


class MultiDayGrid(BaseModel):
    """Selected rooms x selected days of the anchored week."""

    week_start: date
    days: list[DayOfWeek]
    hours: list[int]
    columns: list[RoomDayColumn]

    @property
    def total(self) -> int:
        return sum(len(c.cells) for c in self.columns)


def layout_day(
    entries: RawEntries,
    rooms: Sequence[Room],
    day: date,
    window: CalendarWindow | None = None,
) -> DayGrid:
    """Lay out one concrete date with a column per room.

    The date only selects the ISO day of week; entries are weekly.
    """
    window = window or CalendarWindow.from_config()
    day = as_date(day)
    dow = iso_day(day)
    columns: list[RoomColumn] = []

    if rooms:
        buckets = group_by_room_and_days(
            schedulable(load_entries(entries)), [r.id for r in rooms], [dow]
        )
        columns = [
            RoomColumn(room=room, cells=window.cells(buckets[room.id][dow]))
            for room in rooms
        ]

    grid = DayGrid(calendar_date=day, day=dow, hours=window.hours(), columns=columns)
    log.debug("calendar_layout", view="day", date=day.isoformat(), rooms=len(rooms), cells=grid.total)
    return grid


def layout_week(
    entries: RawEntries,
    room_id: str,
    week_start: date,
    window: CalendarWindow | None = None,
    today: date | None = None,
) -> WeekGrid:
    """Lay out one room's full week, flagging the column that is today.

    `week_start` may be any date of the week; it is anchored to its Monday.
    """
    window = window or CalendarWindow.from_config()
    today = as_date(today) if today is not None else date.today()
    anchor = monday_of(week_start)

    by_day = group_by_day(schedulable(load_entries(entries)), room_id)
    columns = []
    for day in ALL_DAYS:
        on_date = date_for_day(anchor, day)
        columns.append(
            DayColumn(
                day=day,
                calendar_date=on_date,
                is_today=on_date == today,
                cells=window.cells(by_day[day]),
            )
        )

    grid = WeekGrid(room_id=room_id, week_start=anchor, hours=window.hours(), columns=columns)
    log.debug("calendar_layout", view="week", room_id=room_id, week_start=anchor.isoformat(), cells=grid.total)
    return grid


def layout_multi_day(
    entries: RawEntries,
    rooms: Sequence[Room],
    days: Iterable[int],
    week_start: date,
    window: CalendarWindow | None = None,
    today: date | None = None,
) -> MultiDayGrid:
    """Lay out the selected rooms over a subset of days (room-major columns)."""
    window = window or CalendarWindow.from_config()
    today = as_date(today) if today is not None else date.today()
    anchor = monday_of(week_start)
    selected_days = [DayOfWeek(day) for day in days]
    columns: list[RoomDayColumn] = []

    if rooms:
        buckets = group_by_room_and_days(
            schedulable(load_entries(entries)), [r.id for r in rooms], selected_days
        )
        for room in rooms:
            for day in selected_days:
                on_date = date_for_day(anchor, day)
                columns.append(
                    RoomDayColumn(
                        room=room,
                        day=day,
                        calendar_date=on_date,
                        is_today=on_date == today,
                        cells=window.cells(buckets[room.id][day]),
                    )
                )

    grid = MultiDayGrid(
        week_start=anchor, days=selected_days, hours=window.hours(), columns=columns
    )
    log.debug("calendar_layout", view="multi_day", rooms=len(rooms), days=len(selected_days), cells=grid.total)
    return grid


def layout_view(
    mode: ViewMode,
    entries: RawEntries,
    rooms: Sequence[Room],
    anchor: date,
    window: CalendarWindow | None = None,
    today: date | None = None,
) -> DayGrid | list[WeekGrid] | MultiDayGrid:
    """Dispatch a calendar view mode to its grid shape.

    DAY lays out `anchor` itself; WEEK gives one week grid per room;
    WEEKDAYS and WEEKEND are multi-day grids over the anchor's week.
    """
    entries = load_entries(entries)
    if mode is ViewMode.DAY:
        return layout_day(entries, rooms, anchor, window)
    if mode is ViewMode.WEEK:
        return [layout_week(entries, room.id, anchor, window, today) for room in rooms]
    return layout_multi_day(entries, rooms, mode.days, anchor, window, today)
