from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.availability.buckets import normalize_slot_duration
from app.availability.time_window import (
    DEFAULT_AVAILABLE_FROM_MINUTES,
    DEFAULT_AVAILABLE_TO_MINUTES,
    DEFAULT_MIN_RESERVATION_MINUTES,
    DEFAULT_SLOT_DURATION_MINUTES,
    parse_time_to_minutes,
)


class FacilityKind(str, Enum):
    MULTI_RESOURCE = "parking"
    SINGLE_RESOURCE = "room"

    @classmethod
    def from_tag(cls, tag: str | None) -> "FacilityKind":
        if str(tag or "").strip().lower() == cls.MULTI_RESOURCE.value:
            return cls.MULTI_RESOURCE
        return cls.SINGLE_RESOURCE


@dataclass(frozen=True)
class FacilityConfig:
    slot_duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES
    available_from_minutes: int = DEFAULT_AVAILABLE_FROM_MINUTES
    available_to_minutes: int = DEFAULT_AVAILABLE_TO_MINUTES
    min_reservation_minutes: int = DEFAULT_MIN_RESERVATION_MINUTES

    @property
    def threshold_slots(self) -> int:
        duration = normalize_slot_duration(self.slot_duration_minutes)
        minimum = _positive_int(self.min_reservation_minutes, DEFAULT_MIN_RESERVATION_MINUTES)
        return max(1, math.ceil(minimum / duration))

    @property
    def has_degenerate_window(self) -> bool:
        return self.available_to_minutes <= self.available_from_minutes

    @classmethod
    def from_settings(cls, settings: Any | None) -> "FacilityConfig":
        if settings is None:
            return cls()
        return cls(
            slot_duration_minutes=_positive_int(
                getattr(settings, "slot_duration_minutes", None),
                DEFAULT_SLOT_DURATION_MINUTES,
            ),
            available_from_minutes=parse_time_to_minutes(
                getattr(settings, "available_from_time", None),
                DEFAULT_AVAILABLE_FROM_MINUTES,
            ),
            available_to_minutes=parse_time_to_minutes(
                getattr(settings, "available_to_time", None),
                DEFAULT_AVAILABLE_TO_MINUTES,
            ),
            min_reservation_minutes=_positive_int(
                getattr(settings, "min_reservation_minutes", None),
                DEFAULT_MIN_RESERVATION_MINUTES,
            ),
        )


def _positive_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool) or value is None:
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number) or number <= 0 or number != int(number):
        return fallback
    return int(number)
