from __future__ import annotations

import re
from datetime import date, datetime, timedelta, tzinfo
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from app.availability.calendar import local_midnight


_ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class DateRangeArgs(BaseModel):
    start: date
    end: date | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def require_iso_date(cls, value: Any) -> Any:
        return _check_iso_date(value)

    @model_validator(mode="after")
    def default_and_order(self) -> "DateRangeArgs":
        if self.end is None:
            self.end = self.start
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    def window(self, tz: tzinfo) -> tuple[datetime, datetime]:
        end = self.end or self.start
        return local_midnight(self.start, tz), local_midnight(end + timedelta(days=1), tz)


class CalendarRangeArgs(DateRangeArgs):
    pass


class RangeAvailabilityArgs(DateRangeArgs):
    pass


class SlotGridArgs(BaseModel):
    day: date | None = Field(default=None, alias="date")
    start: date | None = None
    end: date | None = None

    @field_validator("day", "start", "end", mode="before")
    @classmethod
    def require_iso_date(cls, value: Any) -> Any:
        return _check_iso_date(value)

    @model_validator(mode="after")
    def resolve_range(self) -> "SlotGridArgs":
        if self.day is not None:
            self.start = self.day
            self.end = self.day
        elif self.start is None or self.end is None:
            raise ValueError("date or start and end are required")
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    def window(self, tz: tzinfo) -> tuple[datetime, datetime]:
        return local_midnight(self.start, tz), local_midnight(self.end + timedelta(days=1), tz)


def parse_calendar_args(raw_args: dict[str, Any]) -> CalendarRangeArgs:
    return CalendarRangeArgs.model_validate(raw_args)


def parse_range_availability_args(raw_args: dict[str, Any]) -> RangeAvailabilityArgs:
    return RangeAvailabilityArgs.model_validate(raw_args)


def parse_slot_grid_args(raw_args: dict[str, Any]) -> SlotGridArgs:
    return SlotGridArgs.model_validate(raw_args)


def map_validation_error(error: ValidationError) -> dict[str, str]:
    return {
        "error_code": "VALIDATION_ERROR",
        "human_message": f"Invalid query: {error.errors()[0]['msg']}",
    }


def _check_iso_date(value: Any) -> Any:
    if value is None or isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_PATTERN.fullmatch(value.strip()):
        raise ValueError("dates must use YYYY-MM-DD")
    return value.strip()
