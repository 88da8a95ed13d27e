from app.availability.time_window import (
    DEFAULT_AVAILABLE_FROM,
    DEFAULT_AVAILABLE_TO,
    DEFAULT_SLOT_DURATION_MINUTES,
)
from app.db.models import Facility, FacilitySettings, FacilitySlot, Tenant, UserTenant
from app.db.session import SessionLocal


DEMO_TENANT_NAME = "Demo Residence"
DEMO_USER_ID = "demo-user"
PARKING_SLOTS = [
    ("F1", "Front F1"),
    ("F2", "Front F2"),
    ("F3", "Front F3"),
    ("F4", "Front F4"),
    ("F5", "Front F5"),
    ("F6", "Front F6"),
    ("B1", "Back B1"),
    ("B2", "Back B2"),
    ("B3", "Back B3"),
    ("B4", "Back B4"),
    ("B5", "Back B5"),
    ("B6", "Back B6"),
]


def seed_demo_facilities() -> None:
    session = SessionLocal()
    try:
        tenant = session.query(Tenant).filter(Tenant.name == DEMO_TENANT_NAME).first()
        if tenant is None:
            tenant = Tenant(name=DEMO_TENANT_NAME, timezone="Asia/Tokyo")
            session.add(tenant)
            session.flush()

        membership = (
            session.query(UserTenant)
            .filter(UserTenant.user_id == DEMO_USER_ID)
            .filter(UserTenant.tenant_id == tenant.id)
            .first()
        )
        if membership is None:
            session.add(UserTenant(user_id=DEMO_USER_ID, tenant_id=tenant.id))

        room = _ensure_facility(session, tenant_id=tenant.id, name="Community Room", facility_type="room")
        parking = _ensure_facility(
            session, tenant_id=tenant.id, name="Guest Parking", facility_type="parking"
        )

        _ensure_settings(session, tenant_id=tenant.id, facility_id=room.id, min_reservation_minutes=120)
        _ensure_settings(session, tenant_id=tenant.id, facility_id=parking.id, min_reservation_minutes=60)

        existing_keys = {
            slot.slot_key
            for slot in session.query(FacilitySlot)
            .filter(FacilitySlot.facility_id == parking.id)
            .all()
        }
        for slot_key, slot_name in PARKING_SLOTS:
            if slot_key in existing_keys:
                continue
            session.add(
                FacilitySlot(
                    tenant_id=tenant.id,
                    facility_id=parking.id,
                    slot_key=slot_key,
                    slot_name=slot_name,
                    status="active",
                )
            )

        session.commit()
        print(f"Seeded tenant id={tenant.id} room id={room.id} parking id={parking.id}")
    finally:
        session.close()


def _ensure_facility(session, tenant_id: str, name: str, facility_type: str) -> Facility:
    facility = (
        session.query(Facility)
        .filter(Facility.tenant_id == tenant_id)
        .filter(Facility.facility_name == name)
        .first()
    )
    if facility is None:
        facility = Facility(tenant_id=tenant_id, facility_name=name, facility_type=facility_type)
        session.add(facility)
        session.flush()
    return facility


def _ensure_settings(session, tenant_id: str, facility_id: str, min_reservation_minutes: int) -> None:
    settings = (
        session.query(FacilitySettings)
        .filter(FacilitySettings.facility_id == facility_id)
        .first()
    )
    if settings is not None:
        return
    session.add(
        FacilitySettings(
            tenant_id=tenant_id,
            facility_id=facility_id,
            slot_duration_minutes=DEFAULT_SLOT_DURATION_MINUTES,
            available_from_time=DEFAULT_AVAILABLE_FROM,
            available_to_time=DEFAULT_AVAILABLE_TO,
            min_reservation_minutes=min_reservation_minutes,
        )
    )


if __name__ == "__main__":
    seed_demo_facilities()
