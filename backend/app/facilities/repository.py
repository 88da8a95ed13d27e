from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from sqlalchemy.orm import Session

from app.availability.facility_config import FacilityConfig, FacilityKind
from app.availability.time_window import to_utc
from app.availability.types import OCCUPYING_STATUSES, BlockedRange, Reservation, Resource
from app.db.models import (
    Facility,
    FacilityBlockedRange,
    FacilityReservation,
    FacilitySettings,
    FacilitySlot,
)


ACTIVE_SLOT_STATUS = "active"


@dataclass(frozen=True)
class FacilitySnapshot:
    kind: FacilityKind
    config: FacilityConfig
    resources: list[Resource] = field(default_factory=list)
    reservations: list[Reservation] = field(default_factory=list)
    blocked_ranges: list[BlockedRange] = field(default_factory=list)


def get_facility(db: Session, tenant_id: str, facility_id: str) -> Facility | None:
    return (
        db.query(Facility)
        .filter(Facility.id == facility_id)
        .filter(Facility.tenant_id == tenant_id)
        .first()
    )


def get_facility_settings(db: Session, tenant_id: str, facility_id: str) -> FacilitySettings | None:
    return (
        db.query(FacilitySettings)
        .filter(FacilitySettings.tenant_id == tenant_id)
        .filter(FacilitySettings.facility_id == facility_id)
        .first()
    )


def list_active_resources(db: Session, tenant_id: str, facility_id: str) -> list[Resource]:
    rows = (
        db.query(FacilitySlot)
        .filter(FacilitySlot.tenant_id == tenant_id)
        .filter(FacilitySlot.facility_id == facility_id)
        .filter(FacilitySlot.status == ACTIVE_SLOT_STATUS)
        .order_by(FacilitySlot.created_at, FacilitySlot.id)
        .all()
    )
    return [
        Resource(id=str(row.id), label=row.slot_name or "")
        for row in rows
        if row.id
    ]


def list_occupying_reservations(
    db: Session,
    tenant_id: str,
    facility_id: str,
    window_start: datetime,
    window_end_exclusive: datetime,
    resource_ids: Sequence[str] | None = None,
) -> list[Reservation]:
    query = (
        db.query(FacilityReservation)
        .filter(FacilityReservation.tenant_id == tenant_id)
        .filter(FacilityReservation.facility_id == facility_id)
        .filter(FacilityReservation.status.in_(sorted(OCCUPYING_STATUSES)))
        .filter(FacilityReservation.start_at < to_utc(window_end_exclusive))
        .filter(FacilityReservation.end_at > to_utc(window_start))
    )
    if resource_ids is not None:
        query = query.filter(FacilityReservation.slot_id.in_(list(resource_ids)))

    return [
        Reservation(
            user_id=row.user_id,
            resource_id=row.slot_id,
            start_at=to_utc(row.start_at),
            end_at=to_utc(row.end_at),
        )
        for row in query.all()
    ]


def list_blocked_ranges(
    db: Session,
    tenant_id: str,
    facility_id: str,
    window_start: datetime,
    window_end_exclusive: datetime,
) -> list[BlockedRange]:
    rows = (
        db.query(FacilityBlockedRange)
        .filter(FacilityBlockedRange.tenant_id == tenant_id)
        .filter(FacilityBlockedRange.facility_id == facility_id)
        .filter(FacilityBlockedRange.start_at < to_utc(window_end_exclusive))
        .filter(FacilityBlockedRange.end_at > to_utc(window_start))
        .all()
    )
    return [BlockedRange(start_at=to_utc(row.start_at), end_at=to_utc(row.end_at)) for row in rows]


def load_facility_snapshot(
    db: Session,
    tenant_id: str,
    facility_id: str,
    facility_kind: FacilityKind,
    window_start: datetime,
    window_end_exclusive: datetime,
) -> FacilitySnapshot:
    settings = get_facility_settings(db, tenant_id=tenant_id, facility_id=facility_id)
    return FacilitySnapshot(
        kind=facility_kind,
        config=FacilityConfig.from_settings(settings),
        resources=list_active_resources(db, tenant_id=tenant_id, facility_id=facility_id),
        reservations=list_occupying_reservations(
            db,
            tenant_id=tenant_id,
            facility_id=facility_id,
            window_start=window_start,
            window_end_exclusive=window_end_exclusive,
        ),
        blocked_ranges=list_blocked_ranges(
            db,
            tenant_id=tenant_id,
            facility_id=facility_id,
            window_start=window_start,
            window_end_exclusive=window_end_exclusive,
        ),
    )
