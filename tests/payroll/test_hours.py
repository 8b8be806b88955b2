from datetime import time, timedelta

import pytest

from src.timesheet_payroll.timesheet_payroll.core.enums import WorkKind
from src.timesheet_payroll.timesheet_payroll.payroll.hours import (
    compute_hours,
    compute_minutes,
    format_hours,
    is_night_shift,
)


@pytest.mark.parametrize("clock_in, clock_out", [("09:00", "18:00"), (None, None), ("22:00", "06:00"), ("x", "y")])
def test_day_off_is_always_zero(clock_in, clock_out):
    assert compute_hours(clock_in, clock_out, WorkKind.DAY_OFF) == 0.0
    assert compute_hours(clock_in, clock_out, "day_off") == 0.0


def test_regular_day_shift():
    assert compute_hours("09:00", "18:00", "regular") == 9.0


def test_overnight_shift_ends_next_day():
    assert compute_hours("22:00", "06:00", "regular") == 8.0
    assert is_night_shift("22:00", "06:00")
    assert not is_night_shift("09:00", "18:00")


def test_equal_times_count_as_full_day():
    assert compute_hours("09:00", "09:00", "regular") == 24.0
    assert is_night_shift("09:00", "09:00")


@pytest.mark.parametrize("clock_in, clock_out", [(None, "18:00"), ("09:00", None), ("", "18:00"), (None, None)])
def test_missing_time_is_zero(clock_in, clock_out):
    assert compute_hours(clock_in, clock_out, "regular") == 0.0


@pytest.mark.parametrize("clock_in, clock_out", [("9am", "18:00"), ("09:00", "25:61"), (object(), "18:00")])
def test_malformed_time_is_zero_not_an_error(clock_in, clock_out):
    assert compute_hours(clock_in, clock_out, "regular") == 0.0
    assert not is_night_shift(clock_in, clock_out)


def test_seconds_are_optional():
    assert compute_hours("09:00:00", "18:00:00") == compute_hours("09:00", "18:00")
    assert compute_minutes("08:30", "12:15") == 225


def test_driver_time_values_are_accepted():
    assert compute_hours(time(9, 0), time(17, 30)) == 8.5
    assert compute_hours(timedelta(hours=22), timedelta(hours=2)) == 4.0


def test_format_hours():
    assert format_hours("09:00", "18:30") == "9.50"
    assert format_hours(None, None, WorkKind.DAY_OFF) == "day off"
