from app.facilities.args import (
    CalendarRangeArgs,
    RangeAvailabilityArgs,
    SlotGridArgs,
    map_validation_error,
    parse_calendar_args,
    parse_range_availability_args,
    parse_slot_grid_args,
)
from app.facilities.context import (
    FacilityNotFoundError,
    MissingViewerContextError,
    TenantMembershipError,
    ViewerContext,
    get_viewer_context,
)
from app.facilities.repository import (
    FacilitySnapshot,
    get_facility,
    get_facility_settings,
    list_active_resources,
    list_blocked_ranges,
    list_occupying_reservations,
    load_facility_snapshot,
)

__all__ = [
    "CalendarRangeArgs",
    "RangeAvailabilityArgs",
    "SlotGridArgs",
    "map_validation_error",
    "parse_calendar_args",
    "parse_range_availability_args",
    "parse_slot_grid_args",
    "FacilityNotFoundError",
    "MissingViewerContextError",
    "TenantMembershipError",
    "ViewerContext",
    "get_viewer_context",
    "FacilitySnapshot",
    "get_facility",
    "get_facility_settings",
    "list_active_resources",
    "list_blocked_ranges",
    "list_occupying_reservations",
    "load_facility_snapshot",
]
