from __future__ import annotations

from datetime import date, datetime, time as dt_time, timedelta, tzinfo
from typing import Iterator, Sequence

from app.availability.evaluator import has_opening_on_day
from app.availability.facility_config import FacilityConfig, FacilityKind
from app.availability.types import (
    BlockedRange,
    DaySummary,
    Reservation,
    Resource,
    overlaps,
)


MAX_CALENDAR_DAYS = 62


class RangeTooLongError(ValueError):
    pass


def build_month_summary(
    kind: FacilityKind,
    config: FacilityConfig,
    start_date: date,
    end_date: date,
    resources: Sequence[Resource],
    reservations: Sequence[Reservation],
    blocked_ranges: Sequence[BlockedRange],
    viewer_user_id: str | None,
    tz: tzinfo,
) -> list[DaySummary]:
    if day_count(start_date, end_date) > MAX_CALENDAR_DAYS:
        raise RangeTooLongError(f"Calendar range is limited to {MAX_CALENDAR_DAYS} days")

    days: list[DaySummary] = []
    for day in iter_days(start_date, end_date):
        day_start = local_midnight(day, tz)
        day_end = local_midnight(day + timedelta(days=1), tz)

        day_reservations = [
            r for r in reservations if overlaps(r.start_at, r.end_at, day_start, day_end)
        ]
        day_blocks = [
            b for b in blocked_ranges if overlaps(b.start_at, b.end_at, day_start, day_end)
        ]

        has_my_reservation = viewer_user_id is not None and any(
            r.user_id == viewer_user_id for r in day_reservations
        )
        has_availability = has_opening_on_day(
            kind=kind,
            config=config,
            day_start=day_start,
            resources=resources,
            reservations=day_reservations,
            blocked_ranges=day_blocks,
        )
        days.append(
            DaySummary(
                date=day,
                has_availability=has_availability,
                has_my_reservation=has_my_reservation,
            )
        )
    return days


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    cursor = start_date
    while cursor <= end_date:
        yield cursor
        cursor += timedelta(days=1)


def day_count(start_date: date, end_date: date) -> int:
    return (end_date - start_date).days + 1


def local_midnight(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, dt_time.min, tzinfo=tz)
