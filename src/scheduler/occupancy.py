"""Occupancy tiers from capacity vs. enrollment.

The tier drives the colour/badge of a session in the admin UI. Capacity is
advisory: nothing here prevents over-enrollment, which simply maps to FULL.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

from src.scheduler.models import ScheduleEntry


class OccupancyTier(str, Enum):
    UNLIMITED = "unlimited"
    AVAILABLE = "available"
    PARTIAL = "partial"
    NEARLY_FULL = "nearly_full"
    FULL = "full"


# Labels shown next to the colour badge
TIER_LABELS: dict[OccupancyTier, str] = {
    OccupancyTier.UNLIMITED: "No limit",
    OccupancyTier.AVAILABLE: "Available",
    OccupancyTier.PARTIAL: "Seats available",
    OccupancyTier.NEARLY_FULL: "Nearly full",
    OccupancyTier.FULL: "Full",
}

# Fill order for limited capacity, emptiest first
FILL_ORDER: tuple[OccupancyTier, ...] = (
    OccupancyTier.AVAILABLE,
    OccupancyTier.PARTIAL,
    OccupancyTier.NEARLY_FULL,
    OccupancyTier.FULL,
)


def classify(capacity: int | None, enrolled: int | None) -> OccupancyTier:
    """Map (capacity, enrolled) to an occupancy tier.

    Thresholds on enrolled/capacity: >= 1.0 full, >= 0.8 nearly full,
    >= 0.5 partial, otherwise available. A missing or non-positive
    capacity is unlimited whatever the enrollment.
    """
    if capacity is None or capacity <= 0:
        return OccupancyTier.UNLIMITED

    enrolled = max(enrolled or 0, 0)
    # Cross-multiplied so boundaries are exact
    if enrolled >= capacity:
        return OccupancyTier.FULL
    if enrolled * 10 >= capacity * 8:
        return OccupancyTier.NEARLY_FULL
    if enrolled * 2 >= capacity:
        return OccupancyTier.PARTIAL
    return OccupancyTier.AVAILABLE


class OccupancySnapshot(BaseModel):
    """Capacity and enrollment of one session at a point in time."""

    model_config = ConfigDict(frozen=True)

    capacity: int | None = None
    enrolled: int | None = 0

    @field_validator("enrolled")
    @classmethod
    def _clamp_enrolled(cls, value: int | None) -> int:
        return max(value or 0, 0)

    @property
    def unlimited(self) -> bool:
        return self.capacity is None or self.capacity <= 0

    @property
    def tier(self) -> OccupancyTier:
        return classify(self.capacity, self.enrolled)

    @property
    def seats_left(self) -> int | None:
        if self.unlimited:
            return None
        return max(self.capacity - self.enrolled, 0)

    @classmethod
    def for_entry(cls, entry: ScheduleEntry) -> "OccupancySnapshot":
        """Snapshot from the listing fields of an entry.

        The course's maximum capacity wins; the room capacity is the
        fallback when the course sets none.
        """
        capacity = entry.course_capacity
        if not capacity or capacity <= 0:
            capacity = entry.room_capacity
        return cls(capacity=capacity, enrolled=entry.enrolled_count)


def classify_entry(entry: ScheduleEntry) -> OccupancyTier:
    return OccupancySnapshot.for_entry(entry).tier
