from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.availability.facility_config import FacilityKind
from app.config import DEFAULT_TIMEZONE
from app.db.models import Tenant, UserTenant
from app.db.session import SessionLocal
from app.facilities.repository import get_facility


@dataclass(frozen=True)
class ViewerContext:
    tenant_id: str
    user_id: str
    facility_id: str
    facility_kind: FacilityKind
    tz: ZoneInfo


class MissingViewerContextError(ValueError):
    pass


class TenantMembershipError(LookupError):
    pass


class FacilityNotFoundError(LookupError):
    pass


def get_viewer_context(user_id: str | None, facility_id: str | None) -> ViewerContext:
    viewer_id = _pick_string(user_id)
    if viewer_id is None:
        raise MissingViewerContextError("Missing viewer identity")

    target_facility_id = _pick_string(facility_id)
    if target_facility_id is None:
        raise FacilityNotFoundError("Missing facility id")

    session = SessionLocal()
    try:
        membership = (
            session.query(UserTenant)
            .filter(UserTenant.user_id == viewer_id)
            .first()
        )
        if membership is None or not membership.tenant_id:
            raise TenantMembershipError("User does not belong to a tenant")

        facility = get_facility(
            session, tenant_id=membership.tenant_id, facility_id=target_facility_id
        )
        if facility is None:
            raise FacilityNotFoundError("Facility not found for tenant")

        tenant = session.query(Tenant).filter(Tenant.id == membership.tenant_id).first()
        return ViewerContext(
            tenant_id=membership.tenant_id,
            user_id=viewer_id,
            facility_id=facility.id,
            facility_kind=FacilityKind.from_tag(facility.facility_type),
            tz=resolve_timezone(getattr(tenant, "timezone", None)),
        )
    finally:
        session.close()


def resolve_timezone(name: str | None) -> ZoneInfo:
    for candidate in (name, DEFAULT_TIMEZONE, "UTC"):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            continue
    return ZoneInfo("UTC")


def _pick_string(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None
