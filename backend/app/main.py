import json
import logging
import time
import uuid

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.availability import (
    MAX_CALENDAR_DAYS,
    build_month_summary,
    day_count,
    has_any_free_resource_for_range,
    resolve_slot_states,
)
from app.db.session import SessionLocal
from app.facilities.args import (
    map_validation_error,
    parse_calendar_args,
    parse_range_availability_args,
    parse_slot_grid_args,
)
from app.facilities.context import (
    FacilityNotFoundError,
    MissingViewerContextError,
    TenantMembershipError,
    get_viewer_context,
)
from app.facilities.repository import (
    list_active_resources,
    list_occupying_reservations,
    load_facility_snapshot,
)
from app.security.dependencies import require_facilities_api_key


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    return logging.getLogger("facilities.backend")


MAX_REQUEST_ID_LENGTH = 128

logger = configure_logging()
app = FastAPI(title="Facility Availability Backend")


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id", "").strip()
    if not request_id or len(request_id) > MAX_REQUEST_ID_LENGTH:
        request_id = str(uuid.uuid4())
    start_time = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
    response.headers["x-request-id"] = request_id

    logger.info(
        json.dumps(
            {
                "event": "facility.http_request",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "has_viewer": bool(request.headers.get("x-user-id")),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }
        )
    )
    return response


@app.get("/health")
async def health():
    return JSONResponse(content={"ok": True})


@app.get(
    "/v1/facilities/{facility_id}/calendar",
    dependencies=[Depends(require_facilities_api_key)],
)
async def facility_calendar(
    facility_id: str,
    request: Request,
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> JSONResponse:
    try:
        context = get_viewer_context(user_id=x_user_id, facility_id=facility_id)
    except (ValueError, LookupError) as exc:
        return _viewer_context_error(exc, event="facility.calendar")

    try:
        args = parse_calendar_args(dict(request.query_params))
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"ok": False, **map_validation_error(exc)})

    if day_count(args.start, args.end) > MAX_CALENDAR_DAYS:
        return JSONResponse(
            status_code=400,
            content={
                "ok": False,
                "error_code": "RANGE_TOO_LONG",
                "human_message": f"Calendar range is limited to {MAX_CALENDAR_DAYS} days.",
            },
        )

    window_start, window_end = args.window(context.tz)

    db = SessionLocal()
    try:
        snapshot = load_facility_snapshot(
            db=db,
            tenant_id=context.tenant_id,
            facility_id=context.facility_id,
            facility_kind=context.facility_kind,
            window_start=window_start,
            window_end_exclusive=window_end,
        )
        days = build_month_summary(
            kind=snapshot.kind,
            config=snapshot.config,
            start_date=args.start,
            end_date=args.end,
            resources=snapshot.resources,
            reservations=snapshot.reservations,
            blocked_ranges=snapshot.blocked_ranges,
            viewer_user_id=context.user_id,
            tz=context.tz,
        )
    except Exception as exc:
        return _system_down(exc, event="facility.calendar.unexpected_error")
    finally:
        db.close()

    logger.info(
        json.dumps(
            {
                "event": "facility.calendar.days_computed",
                "tenant_id": context.tenant_id,
                "facility_id": context.facility_id,
                "facility_kind": context.facility_kind.value,
                "start": args.start.isoformat(),
                "end": args.end.isoformat(),
                "days": len(days),
            }
        )
    )
    return JSONResponse(content={"ok": True, "data": {"days": [day.to_dict() for day in days]}})


@app.get(
    "/v1/facilities/{facility_id}/availability",
    dependencies=[Depends(require_facilities_api_key)],
)
async def facility_range_availability(
    facility_id: str,
    request: Request,
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> JSONResponse:
    try:
        context = get_viewer_context(user_id=x_user_id, facility_id=facility_id)
    except (ValueError, LookupError) as exc:
        return _viewer_context_error(exc, event="facility.availability")

    try:
        args = parse_range_availability_args(dict(request.query_params))
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"ok": False, **map_validation_error(exc)})

    range_start, range_end = args.window(context.tz)

    db = SessionLocal()
    try:
        resources = list_active_resources(
            db=db,
            tenant_id=context.tenant_id,
            facility_id=context.facility_id,
        )
        if not resources:
            logger.info(
                json.dumps(
                    {
                        "event": "facility.availability.no_slots",
                        "tenant_id": context.tenant_id,
                        "facility_id": context.facility_id,
                    }
                )
            )
            return JSONResponse(content={"ok": True, "data": {"has_available_slot": False}})

        reservations = list_occupying_reservations(
            db=db,
            tenant_id=context.tenant_id,
            facility_id=context.facility_id,
            window_start=range_start,
            window_end_exclusive=range_end,
            resource_ids=[resource.id for resource in resources],
        )
        has_available_slot = has_any_free_resource_for_range(
            resources=resources,
            reservations=reservations,
            range_start=range_start,
            range_end_exclusive=range_end,
        )
    except Exception as exc:
        return _system_down(exc, event="facility.availability.unexpected_error")
    finally:
        db.close()

    logger.info(
        json.dumps(
            {
                "event": "facility.availability.range_checked",
                "tenant_id": context.tenant_id,
                "facility_id": context.facility_id,
                "start": args.start.isoformat(),
                "end": args.end.isoformat(),
                "has_available_slot": has_available_slot,
            }
        )
    )
    return JSONResponse(content={"ok": True, "data": {"has_available_slot": has_available_slot}})


@app.get(
    "/v1/facilities/{facility_id}/slots",
    dependencies=[Depends(require_facilities_api_key)],
)
async def facility_slots(
    facility_id: str,
    request: Request,
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> JSONResponse:
    try:
        context = get_viewer_context(user_id=x_user_id, facility_id=facility_id)
    except (ValueError, LookupError) as exc:
        return _viewer_context_error(exc, event="facility.slots")

    try:
        args = parse_slot_grid_args(dict(request.query_params))
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"ok": False, **map_validation_error(exc)})

    window_start, window_end = args.window(context.tz)

    db = SessionLocal()
    try:
        resources = list_active_resources(
            db=db,
            tenant_id=context.tenant_id,
            facility_id=context.facility_id,
        )
        reservations = []
        if resources:
            reservations = list_occupying_reservations(
                db=db,
                tenant_id=context.tenant_id,
                facility_id=context.facility_id,
                window_start=window_start,
                window_end_exclusive=window_end,
                resource_ids=[resource.id for resource in resources],
            )
        items = resolve_slot_states(
            resources=resources,
            reservations=reservations,
            viewer_user_id=context.user_id,
            window_start=window_start,
            window_end=window_end,
        )
    except Exception as exc:
        return _system_down(exc, event="facility.slots.unexpected_error")
    finally:
        db.close()

    logger.info(
        json.dumps(
            {
                "event": "facility.slots.listed",
                "tenant_id": context.tenant_id,
                "facility_id": context.facility_id,
                "facility_kind": context.facility_kind.value,
                "start": args.start.isoformat(),
                "end": args.end.isoformat(),
                "slots": len(items),
            }
        )
    )
    return JSONResponse(content={"ok": True, "data": {"slots": [item.to_dict() for item in items]}})


def _viewer_context_error(exc: Exception, event: str) -> JSONResponse:
    if isinstance(exc, MissingViewerContextError):
        status_code, error_code = 401, "AUTH_ERROR"
    elif isinstance(exc, TenantMembershipError):
        status_code, error_code = 403, "UNAUTHORIZED"
    elif isinstance(exc, FacilityNotFoundError):
        status_code, error_code = 404, "FACILITY_NOT_FOUND"
    else:
        status_code, error_code = 400, "VALIDATION_ERROR"

    logger.warning(
        json.dumps({"event": f"{event}.context_error", "error_code": error_code, "reason": str(exc)})
    )
    return JSONResponse(
        status_code=status_code,
        content={"ok": False, "error_code": error_code, "human_message": str(exc)},
    )


def _system_down(exc: Exception, event: str) -> JSONResponse:
    logger.error(json.dumps({"event": event, "error_message": str(exc)}))
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error_code": "SYSTEM_DOWN",
            "human_message": "Temporary issue computing facility availability.",
        },
    )
