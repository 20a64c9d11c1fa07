"""Wall-clock helpers shared by the interval model, detector and layout engine.

Times of day are plain integers (minutes since midnight) so comparisons are
exact. The backend exchanges them as "HH:MM" strings.
"""

import re

from src.scheduler.errors import InvalidScheduleEntry

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def parse_time(value: str) -> int:
    """Convert an "HH:MM" (or "HH:MM:SS") string to minutes since midnight.

    Seconds are accepted because the backend serializes SQL TIME columns
    with them, but they are dropped: the core works at minute precision.

    Raises:
        InvalidScheduleEntry: If the string is not a valid time of day.
    """
    match = _TIME_RE.match(value)
    if not match:
        raise InvalidScheduleEntry(f"Invalid time of day {value!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidScheduleEntry(f"Time of day out of range: {value!r}")
    return hours * MINUTES_PER_HOUR + minutes


def format_time(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM". 1440 renders as "24:00"."""
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open overlap test for [start_a, end_a) and [start_b, end_b).

    Back-to-back sessions (one ends when the other starts) do not overlap.
    """
    return start_a < end_b and start_b < end_a
