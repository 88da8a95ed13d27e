from __future__ import annotations

from datetime import datetime
from typing import Sequence

from app.availability.types import (
    Reservation,
    Resource,
    SlotState,
    SlotStateItem,
    overlaps,
)


def resolve_slot_states(
    resources: Sequence[Resource],
    reservations: Sequence[Reservation],
    viewer_user_id: str | None,
    window_start: datetime | None = None,
    window_end: datetime | None = None,
) -> list[SlotStateItem]:
    if window_start is not None and window_end is not None:
        reservations = [
            r for r in reservations if overlaps(r.start_at, r.end_at, window_start, window_end)
        ]

    items: list[SlotStateItem] = []
    for resource in resources:
        held = [r for r in reservations if r.resource_id == resource.id]
        state = SlotState.AVAILABLE
        if viewer_user_id is not None and any(r.user_id == viewer_user_id for r in held):
            state = SlotState.MY
        elif held:
            state = SlotState.BOOKED
        items.append(SlotStateItem(id=resource.id, label=resource.label or "", state=state))
    return items
