import pytest
from pydantic import ValidationError

from src.scheduler.occupancy import (
    FILL_ORDER,
    TIER_LABELS,
    OccupancySnapshot,
    OccupancyTier,
    classify,
    classify_entry,
)
from tests.factories import make_entry


@pytest.mark.parametrize(
    ("capacity", "enrolled", "expected"),
    [
        (20, 0, OccupancyTier.AVAILABLE),
        (20, 9, OccupancyTier.AVAILABLE),
        (20, 10, OccupancyTier.PARTIAL),
        (20, 15, OccupancyTier.PARTIAL),
        (20, 16, OccupancyTier.NEARLY_FULL),
        (20, 18, OccupancyTier.NEARLY_FULL),
        (20, 19, OccupancyTier.NEARLY_FULL),
        (20, 20, OccupancyTier.FULL),
        (20, 25, OccupancyTier.FULL),
        (10, -3, OccupancyTier.AVAILABLE),
        (3, 2, OccupancyTier.PARTIAL),
        (5, 4, OccupancyTier.NEARLY_FULL),
        (1, 1, OccupancyTier.FULL),
    ],
)
def test_classify_thresholds(capacity: int, enrolled: int, expected: OccupancyTier) -> None:
    assert classify(capacity, enrolled) is expected


@pytest.mark.parametrize("capacity", [None, 0, -5])
@pytest.mark.parametrize("enrolled", [0, 1, 50, 10_000])
def test_missing_capacity_is_unlimited(capacity, enrolled: int) -> None:
    assert classify(capacity, enrolled) is OccupancyTier.UNLIMITED


def test_enrolled_none_counts_as_empty() -> None:
    assert classify(10, None) is OccupancyTier.AVAILABLE


@pytest.mark.parametrize("capacity", [1, 2, 3, 7, 10, 20, 33, 100])
def test_more_enrolled_is_never_less_full(capacity: int) -> None:
    ranks = [FILL_ORDER.index(classify(capacity, n)) for n in range(capacity * 2)]
    assert ranks == sorted(ranks)


def test_snapshot_clamps_and_counts_seats() -> None:
    snapshot = OccupancySnapshot(capacity=20, enrolled=-4)
    assert snapshot.enrolled == 0
    assert snapshot.seats_left == 20
    assert snapshot.tier is OccupancyTier.AVAILABLE

    over = OccupancySnapshot(capacity=20, enrolled=23)
    assert over.seats_left == 0
    assert over.tier is OccupancyTier.FULL

    unlimited = OccupancySnapshot(capacity=None, enrolled=7)
    assert unlimited.unlimited
    assert unlimited.seats_left is None
    assert unlimited.tier is OccupancyTier.UNLIMITED


def test_snapshot_coerces_enrolled_before_clamping() -> None:
    assert OccupancySnapshot(capacity=10, enrolled="5").tier is OccupancyTier.PARTIAL
    assert OccupancySnapshot(capacity=10, enrolled="-3").enrolled == 0
    assert OccupancySnapshot(capacity=10, enrolled=None).enrolled == 0
    with pytest.raises(ValidationError):
        OccupancySnapshot(capacity=10, enrolled="five")


def test_entry_prefers_course_capacity_over_room() -> None:
    entry = make_entry("h1", "10:00", 60, course_capacity=10, room_capacity=40, enrolled_count=9)
    assert classify_entry(entry) is OccupancyTier.NEARLY_FULL

    room_only = make_entry("h2", "10:00", 60, room_capacity=40, enrolled_count=9)
    assert classify_entry(room_only) is OccupancyTier.AVAILABLE

    bare = make_entry("h3", "10:00", 60)
    assert classify_entry(bare) is OccupancyTier.UNLIMITED


def test_every_tier_has_a_label() -> None:
    assert set(TIER_LABELS) == set(OccupancyTier)
