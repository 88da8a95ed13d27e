from __future__ import annotations

from datetime import datetime
from typing import Sequence

from app.availability.types import Reservation, Resource, overlaps


def has_any_free_resource_for_range(
    resources: Sequence[Resource],
    reservations: Sequence[Reservation],
    range_start: datetime,
    range_end_exclusive: datetime,
) -> bool:
    # Whole-range check: no minimum reservation threshold applies here.
    reserved_ids = {
        r.resource_id
        for r in reservations
        if r.resource_id and overlaps(r.start_at, r.end_at, range_start, range_end_exclusive)
    }
    return any(resource.id not in reserved_ids for resource in resources)
