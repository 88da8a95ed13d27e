from app.db.base import Base
from app.db.models import (
    Facility,
    FacilityBlockedRange,
    FacilityReservation,
    FacilitySettings,
    FacilitySlot,
    Tenant,
    UserTenant,
)

__all__ = [
    "Base",
    "Facility",
    "FacilityBlockedRange",
    "FacilityReservation",
    "FacilitySettings",
    "FacilitySlot",
    "Tenant",
    "UserTenant",
]
