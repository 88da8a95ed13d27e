from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone


DEFAULT_AVAILABLE_FROM = "09:00"
DEFAULT_AVAILABLE_TO = "19:00"
DEFAULT_AVAILABLE_FROM_MINUTES = 9 * 60
DEFAULT_AVAILABLE_TO_MINUTES = 19 * 60
DEFAULT_SLOT_DURATION_MINUTES = 30
DEFAULT_MIN_RESERVATION_MINUTES = 120

_HM_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):([0-5][0-9])")


def parse_time_to_minutes(value: object, fallback_minutes: int) -> int:
    if not isinstance(value, str) or not value:
        return fallback_minutes
    match = _HM_PATTERN.fullmatch(value)
    if match is None:
        return fallback_minutes
    return int(match.group(1)) * 60 + int(match.group(2))


def add_minutes(base: datetime, minutes: float) -> datetime:
    # Returned in UTC so later comparisons and subtraction stay absolute.
    return to_utc(base) + timedelta(minutes=minutes)


def minutes_between(start: datetime, end: datetime) -> float:
    return (to_utc(end) - to_utc(start)).total_seconds() / 60


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
