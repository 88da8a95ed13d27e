from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from app.availability.evaluator import has_opening_on_day
from app.availability.facility_config import FacilityConfig, FacilityKind
from app.availability.types import BlockedRange, Reservation, Resource


DAY_START = datetime(2026, 3, 2, 0, 0, tzinfo=timezone.utc)
RESOURCES = [Resource(id="A", label="A"), Resource(id="B", label="B"), Resource(id="C", label="C")]


def _at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc)


def _reservation(start: datetime, end: datetime, resource_id: str | None = None, user_id: str = "u1"):
    return Reservation(user_id=user_id, resource_id=resource_id, start_at=start, end_at=end)


def _room(reservations, blocked=(), config=None) -> bool:
    return has_opening_on_day(
        kind=FacilityKind.SINGLE_RESOURCE,
        config=config or FacilityConfig(),
        day_start=DAY_START,
        resources=[],
        reservations=list(reservations),
        blocked_ranges=list(blocked),
    )


def _parking(reservations, resources=RESOURCES, blocked=(), config=None) -> bool:
    return has_opening_on_day(
        kind=FacilityKind.MULTI_RESOURCE,
        config=config or FacilityConfig(),
        day_start=DAY_START,
        resources=list(resources),
        reservations=list(reservations),
        blocked_ranges=list(blocked),
    )


def test_default_config_thresholds():
    config = FacilityConfig()
    assert config.slot_duration_minutes == 30
    assert config.threshold_slots == 4


def test_empty_room_day_is_available():
    assert _room([]) is True


def test_room_with_single_trailing_bucket_is_unavailable():
    assert _room([_reservation(_at(9), _at(18, 30))]) is False


def test_room_with_three_hour_gap_is_available():
    assert _room([_reservation(_at(9), _at(12)), _reservation(_at(15), _at(19))]) is True


def test_room_counts_reservations_regardless_of_resource():
    reservations = [
        _reservation(_at(9), _at(14), resource_id="A"),
        _reservation(_at(14), _at(19), resource_id=None),
    ]
    assert _room(reservations) is False


def test_blocked_range_closes_room_day():
    blocked = [BlockedRange(start_at=_at(0), end_at=_at(23, 59))]
    assert _room([], blocked=blocked) is False


def test_parking_is_available_when_any_resource_is_free():
    reservations = [_reservation(_at(9), _at(19), resource_id="A")]
    assert _parking(reservations) is True


def test_parking_is_unavailable_when_every_resource_is_booked():
    reservations = [
        _reservation(_at(9), _at(19), resource_id=resource.id) for resource in RESOURCES
    ]
    assert _parking(reservations) is False


def test_parking_blocked_range_applies_to_every_resource():
    blocked = [BlockedRange(start_at=_at(9), end_at=_at(18))]
    assert _parking([], blocked=blocked) is False


def test_parking_ignores_reservations_without_resource():
    reservations = [_reservation(_at(9), _at(19), resource_id=None)]
    assert _parking(reservations, resources=[Resource(id="A")]) is True


def test_parking_without_active_resources_fails_closed():
    assert _parking([], resources=[]) is False


def test_degenerate_window_never_has_opening():
    config = FacilityConfig(available_from_minutes=19 * 60, available_to_minutes=9 * 60)
    assert config.has_degenerate_window
    assert FacilityConfig().has_degenerate_window is False
    assert _room([], config=config) is False
    assert _parking([], config=config) is False


def test_stricter_minimum_never_opens_more_days():
    reservations = [_reservation(_at(9), _at(12)), _reservation(_at(15), _at(19))]
    results = [
        _room(reservations, config=FacilityConfig(min_reservation_minutes=minutes))
        for minutes in range(30, 631, 30)
    ]
    first_closed = results.index(False)
    assert all(results[:first_closed])
    assert not any(results[first_closed:])
    # six free buckets of 30 minutes fit exactly 180 minutes
    assert first_closed == 6


def test_config_from_settings_normalizes_bad_values():
    settings = SimpleNamespace(
        slot_duration_minutes=0,
        available_from_time="25:00",
        available_to_time=None,
        min_reservation_minutes="abc",
    )
    config = FacilityConfig.from_settings(settings)
    assert config == FacilityConfig()


def test_config_from_settings_keeps_valid_values():
    settings = SimpleNamespace(
        slot_duration_minutes=15,
        available_from_time="08:00",
        available_to_time="22:30",
        min_reservation_minutes=45,
    )
    config = FacilityConfig.from_settings(settings)
    assert config.available_from_minutes == 480
    assert config.available_to_minutes == 1350
    assert config.threshold_slots == 3


def test_config_from_missing_settings_uses_defaults():
    assert FacilityConfig.from_settings(None) == FacilityConfig()


def test_facility_kind_from_tag():
    assert FacilityKind.from_tag("parking") is FacilityKind.MULTI_RESOURCE
    assert FacilityKind.from_tag("PARKING ") is FacilityKind.MULTI_RESOURCE
    assert FacilityKind.from_tag("room") is FacilityKind.SINGLE_RESOURCE
    assert FacilityKind.from_tag(None) is FacilityKind.SINGLE_RESOURCE


@pytest.mark.parametrize("duration", [0, -15, float("nan"), float("inf")])
def test_unusable_slot_duration_falls_back_to_default(duration):
    config = FacilityConfig(slot_duration_minutes=duration)
    assert config.threshold_slots == 4
    assert _room([], config=config) is True
    assert _room([_reservation(_at(9), _at(18, 30))], config=config) is False


@pytest.mark.parametrize("minimum", [0, -60, float("nan"), None])
def test_unusable_minimum_falls_back_to_default(minimum):
    config = FacilityConfig(min_reservation_minutes=minimum)
    assert config.threshold_slots == 4
    assert _parking([], config=config) is True


def test_same_inputs_give_same_decision():
    reservations = [
        _reservation(_at(9), _at(12), resource_id="A"),
        _reservation(_at(13), _at(19), resource_id="B"),
    ]
    blocked = [BlockedRange(start_at=_at(16), end_at=_at(17))]
    first = [_room(reservations, blocked), _parking(reservations, blocked=blocked)]
    second = [_room(reservations, blocked), _parking(reservations, blocked=blocked)]
    assert first == second
