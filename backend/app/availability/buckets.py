from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from app.availability.time_window import (
    DEFAULT_SLOT_DURATION_MINUTES,
    add_minutes,
    minutes_between,
    to_utc,
)
from app.availability.types import BusyInterval, BusySlots


def build_busy_slots(
    day_start: datetime,
    from_minutes: int,
    to_minutes: int,
    slot_duration_minutes: float,
    busy_intervals: Iterable[BusyInterval],
) -> BusySlots:
    duration = normalize_slot_duration(slot_duration_minutes)

    window_start = add_minutes(day_start, from_minutes)
    window_end = add_minutes(day_start, to_minutes)
    if window_end <= window_start:
        return BusySlots(slots_per_day=0, max_free_run=0)

    slots_per_day = max(1, math.floor(minutes_between(window_start, window_end) / duration))
    busy = [False] * slots_per_day

    for interval in busy_intervals:
        clipped_start = max(to_utc(interval.start), window_start)
        clipped_end = min(to_utc(interval.end), window_end)
        if clipped_end <= clipped_start:
            continue

        # Any bucket touched by the interval is unusable.
        start_index = math.floor(minutes_between(window_start, clipped_start) / duration)
        end_index = math.ceil(minutes_between(window_start, clipped_end) / duration)
        start_index = max(0, start_index)
        end_index = min(slots_per_day, end_index)

        for index in range(start_index, end_index):
            busy[index] = True

    return BusySlots(slots_per_day=slots_per_day, max_free_run=longest_free_run(busy))


def longest_free_run(busy: list[bool]) -> int:
    longest = 0
    current = 0
    for is_busy in busy:
        if is_busy:
            current = 0
            continue
        current += 1
        if current > longest:
            longest = current
    return longest


def normalize_slot_duration(value: float | None) -> float:
    if value is None or isinstance(value, bool):
        return DEFAULT_SLOT_DURATION_MINUTES
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_SLOT_DURATION_MINUTES
    if not math.isfinite(number) or number <= 0:
        return DEFAULT_SLOT_DURATION_MINUTES
    return number
