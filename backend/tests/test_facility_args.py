from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from app.facilities.args import (
    map_validation_error,
    parse_calendar_args,
    parse_range_availability_args,
    parse_slot_grid_args,
)


def test_calendar_end_defaults_to_start():
    args = parse_calendar_args({"start": "2026-03-01"})
    assert args.start == date(2026, 3, 1)
    assert args.end == date(2026, 3, 1)


def test_range_window_uses_local_midnights():
    args = parse_range_availability_args({"start": "2026-03-01", "end": "2026-03-02"})
    start, end = args.window(ZoneInfo("Asia/Tokyo"))
    assert start == datetime(2026, 2, 28, 15, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 3, 2, 15, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "raw",
    [
        {"start": "2026/03/01"},
        {"start": "2026-3-1"},
        {"start": "2026-13-01"},
        {"start": "2026-03-05", "end": "2026-03-01"},
        {"end": "2026-03-01"},
    ],
)
def test_calendar_args_reject_bad_input(raw):
    with pytest.raises(ValidationError):
        parse_calendar_args(raw)


def test_slot_grid_single_date():
    args = parse_slot_grid_args({"date": "2026-03-02"})
    assert (args.start, args.end) == (date(2026, 3, 2), date(2026, 3, 2))
    start, end = args.window(ZoneInfo("UTC"))
    assert start == datetime(2026, 3, 2, 0, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 3, 3, 0, 0, tzinfo=timezone.utc)


def test_slot_grid_date_wins_over_range():
    args = parse_slot_grid_args({"date": "2026-03-02", "start": "2026-03-01", "end": "2026-03-09"})
    assert (args.start, args.end) == (date(2026, 3, 2), date(2026, 3, 2))


def test_slot_grid_requires_both_range_ends():
    with pytest.raises(ValidationError):
        parse_slot_grid_args({"start": "2026-03-01"})


def test_map_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        parse_calendar_args({"start": "tomorrow"})

    mapped = map_validation_error(exc_info.value)
    assert mapped["error_code"] == "VALIDATION_ERROR"
    assert mapped["human_message"].startswith("Invalid query:")
