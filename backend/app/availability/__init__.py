from app.availability.buckets import build_busy_slots
from app.availability.calendar import (
    MAX_CALENDAR_DAYS,
    RangeTooLongError,
    build_month_summary,
    day_count,
    local_midnight,
)
from app.availability.evaluator import has_opening_on_day
from app.availability.facility_config import FacilityConfig, FacilityKind
from app.availability.range_check import has_any_free_resource_for_range
from app.availability.slot_states import resolve_slot_states
from app.availability.time_window import add_minutes, parse_time_to_minutes
from app.availability.types import (
    BlockedRange,
    BusyInterval,
    BusySlots,
    DaySummary,
    Reservation,
    Resource,
    SlotState,
    SlotStateItem,
)

__all__ = [
    "MAX_CALENDAR_DAYS",
    "BlockedRange",
    "BusyInterval",
    "BusySlots",
    "DaySummary",
    "FacilityConfig",
    "FacilityKind",
    "RangeTooLongError",
    "Reservation",
    "Resource",
    "SlotState",
    "SlotStateItem",
    "add_minutes",
    "build_busy_slots",
    "build_month_summary",
    "day_count",
    "has_any_free_resource_for_range",
    "has_opening_on_day",
    "local_midnight",
    "parse_time_to_minutes",
    "resolve_slot_states",
]
