"""Classroom scheduling core.

Conflict detection, occupancy tiers and calendar grid layout for course
schedule entries. Fetching and persisting entries is left to the caller.
"""

from src.scheduler.conflicts import (
    Conflict,
    ConflictPair,
    detect_conflicts,
    find_room_conflicts,
    has_conflicts,
)
from src.scheduler.errors import (
    InvalidLayoutWindow,
    InvalidScheduleEntry,
    SchedulingError,
)
from src.scheduler.layout import (
    CalendarCell,
    CalendarWindow,
    ViewMode,
    layout_day,
    layout_multi_day,
    layout_view,
    layout_week,
)
from src.scheduler.models import DayOfWeek, Modality, Room, ScheduleEntry
from src.scheduler.occupancy import OccupancySnapshot, OccupancyTier, classify
from src.scheduler.weeks import monday_of, shift_week

__all__ = [
    "ScheduleEntry",
    "Room",
    "Modality",
    "DayOfWeek",
    "Conflict",
    "ConflictPair",
    "detect_conflicts",
    "has_conflicts",
    "find_room_conflicts",
    "OccupancyTier",
    "OccupancySnapshot",
    "classify",
    "CalendarWindow",
    "CalendarCell",
    "ViewMode",
    "layout_day",
    "layout_week",
    "layout_multi_day",
    "layout_view",
    "monday_of",
    "shift_week",
    "SchedulingError",
    "InvalidScheduleEntry",
    "InvalidLayoutWindow",
]
