from __future__ import annotations

from datetime import datetime
from typing import Sequence

from app.availability.buckets import build_busy_slots
from app.availability.facility_config import FacilityConfig, FacilityKind
from app.availability.types import BlockedRange, BusyInterval, Reservation, Resource


def has_opening_on_day(
    kind: FacilityKind,
    config: FacilityConfig,
    day_start: datetime,
    resources: Sequence[Resource],
    reservations: Sequence[Reservation],
    blocked_ranges: Sequence[BlockedRange],
) -> bool:
    blocked_intervals = [BusyInterval(start=b.start_at, end=b.end_at) for b in blocked_ranges]

    if kind is FacilityKind.MULTI_RESOURCE:
        return _any_resource_has_opening(
            config=config,
            day_start=day_start,
            resources=resources,
            reservations=reservations,
            blocked_intervals=blocked_intervals,
        )

    intervals = [BusyInterval(start=r.start_at, end=r.end_at) for r in reservations]
    return _window_has_opening(config, day_start, intervals + blocked_intervals)


def _any_resource_has_opening(
    config: FacilityConfig,
    day_start: datetime,
    resources: Sequence[Resource],
    reservations: Sequence[Reservation],
    blocked_intervals: list[BusyInterval],
) -> bool:
    for resource in resources:
        intervals = [
            BusyInterval(start=r.start_at, end=r.end_at)
            for r in reservations
            if r.resource_id == resource.id
        ]
        if _window_has_opening(config, day_start, intervals + blocked_intervals):
            return True
    return False


def _window_has_opening(
    config: FacilityConfig,
    day_start: datetime,
    intervals: list[BusyInterval],
) -> bool:
    if config.has_degenerate_window:
        return False
    busy_slots = build_busy_slots(
        day_start=day_start,
        from_minutes=config.available_from_minutes,
        to_minutes=config.available_to_minutes,
        slot_duration_minutes=config.slot_duration_minutes,
        busy_intervals=intervals,
    )
    return busy_slots.slots_per_day > 0 and busy_slots.max_free_run >= config.threshold_slots
