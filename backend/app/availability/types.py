from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from app.availability.time_window import to_utc


OCCUPYING_STATUSES = frozenset({"pending", "confirmed"})


class SlotState(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    MY = "my"


@dataclass(frozen=True)
class Resource:
    id: str
    label: str = ""


@dataclass(frozen=True)
class Reservation:
    user_id: str | None
    resource_id: str | None
    start_at: datetime
    end_at: datetime


@dataclass(frozen=True)
class BlockedRange:
    start_at: datetime
    end_at: datetime


@dataclass(frozen=True)
class BusyInterval:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class BusySlots:
    slots_per_day: int
    max_free_run: int


@dataclass(frozen=True)
class DaySummary:
    date: date
    has_availability: bool
    has_my_reservation: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "hasAvailability": self.has_availability,
            "hasMyReservation": self.has_my_reservation,
        }


@dataclass(frozen=True)
class SlotStateItem:
    id: str
    label: str
    state: SlotState

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "state": self.state.value}


def overlaps(start: datetime, end: datetime, window_start: datetime, window_end: datetime) -> bool:
    """Half-open overlap; intervals that only touch do not overlap."""
    return to_utc(start) < to_utc(window_end) and to_utc(end) > to_utc(window_start)
