from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient

import app.main as main_module
from app.availability.facility_config import FacilityKind
from app.availability.slot_states import resolve_slot_states
from app.availability.types import Reservation, Resource, SlotState
from app.facilities.context import ViewerContext
from app.main import app


client = TestClient(app)

RESOURCES = [Resource(id="A", label="Front F1"), Resource(id="B", label="Front F2"), Resource(id="C")]


def _at(day: int, hour: int) -> datetime:
    return datetime(2026, 3, day, hour, 0, tzinfo=timezone.utc)


def _reservation(resource_id, user_id, start=None, end=None):
    return Reservation(
        user_id=user_id,
        resource_id=resource_id,
        start_at=start or _at(2, 10),
        end_at=end or _at(2, 12),
    )


def test_states_follow_resource_order_and_ownership():
    reservations = [
        _reservation("A", "someone"),
        _reservation("A", "viewer"),
        _reservation("B", "someone"),
    ]
    items = resolve_slot_states(RESOURCES, reservations, "viewer")
    assert [(item.id, item.state) for item in items] == [
        ("A", SlotState.MY),
        ("B", SlotState.BOOKED),
        ("C", SlotState.AVAILABLE),
    ]
    assert [item.label for item in items] == ["Front F1", "Front F2", ""]


def test_no_resources_gives_empty_list():
    assert resolve_slot_states([], [_reservation("A", "viewer")], "viewer") == []


def test_window_filters_out_reservations_on_other_days():
    reservations = [
        _reservation("A", "someone", start=_at(1, 10), end=_at(2, 0)),
        _reservation("B", "viewer", start=_at(3, 0), end=_at(3, 9)),
    ]
    items = resolve_slot_states(
        RESOURCES,
        reservations,
        "viewer",
        window_start=_at(2, 0),
        window_end=_at(3, 0),
    )
    assert all(item.state is SlotState.AVAILABLE for item in items)


def test_item_to_dict():
    item = resolve_slot_states([Resource(id="A", label="Front F1")], [], "viewer")[0]
    assert item.to_dict() == {"id": "A", "label": "Front F1", "state": "available"}


class FakeSession:
    def close(self):
        return None


def _patch_common(monkeypatch, resources, reservations):
    monkeypatch.setenv("ENV", "dev")
    monkeypatch.delenv("FACILITIES_API_KEY", raising=False)
    monkeypatch.setattr(main_module, "SessionLocal", lambda: FakeSession())
    monkeypatch.setattr(
        main_module,
        "get_viewer_context",
        lambda **_kwargs: ViewerContext(
            tenant_id="tenant-1",
            user_id="viewer",
            facility_id="parking-1",
            facility_kind=FacilityKind.MULTI_RESOURCE,
            tz=ZoneInfo("UTC"),
        ),
    )
    monkeypatch.setattr(main_module, "list_active_resources", lambda **_kwargs: resources)
    monkeypatch.setattr(main_module, "list_occupying_reservations", lambda **_kwargs: reservations)


def test_slots_route_for_single_day(monkeypatch):
    _patch_common(
        monkeypatch,
        resources=RESOURCES,
        reservations=[_reservation("A", "viewer"), _reservation("C", "someone")],
    )

    response = client.get(
        "/v1/facilities/parking-1/slots",
        params={"date": "2026-03-02"},
        headers={"X-User-Id": "viewer"},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["data"]["slots"] == [
        {"id": "A", "label": "Front F1", "state": "my"},
        {"id": "B", "label": "Front F2", "state": "available"},
        {"id": "C", "label": "", "state": "booked"},
    ]


def test_slots_route_for_date_range(monkeypatch):
    _patch_common(
        monkeypatch,
        resources=RESOURCES,
        reservations=[_reservation("B", "someone", start=_at(3, 9), end=_at(3, 18))],
    )

    response = client.get(
        "/v1/facilities/parking-1/slots",
        params={"start": "2026-03-01", "end": "2026-03-03"},
        headers={"X-User-Id": "viewer"},
    )

    states = [item["state"] for item in response.json()["data"]["slots"]]
    assert response.status_code == 200
    assert states == ["available", "booked", "available"]


def test_slots_route_without_resources(monkeypatch):
    _patch_common(monkeypatch, resources=[], reservations=[])

    response = client.get(
        "/v1/facilities/parking-1/slots",
        params={"date": "2026-03-02"},
        headers={"X-User-Id": "viewer"},
    )

    assert response.status_code == 200
    assert response.json()["data"]["slots"] == []


def test_slots_route_requires_date_or_range(monkeypatch):
    _patch_common(monkeypatch, resources=RESOURCES, reservations=[])

    response = client.get(
        "/v1/facilities/parking-1/slots",
        params={"start": "2026-03-01"},
        headers={"X-User-Id": "viewer"},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"
