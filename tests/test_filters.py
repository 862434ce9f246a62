from datetime import date, datetime, timedelta

import pytest

from shiftpay.earnings import RateMultipliers
from shiftpay.filters import TimeWindow, filter_shifts, window_range
from shiftpay.models import Job, Shift, ShiftType

JOBS = [Job(id="a", name="Cafe", hourly_rate=10.0), Job(id="b", name="Bar", hourly_rate=20.0)]


def build_shift(shift_id: str, job_id: str, day: date, hours: float, **kwargs) -> Shift:
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=9)
    return Shift(id=shift_id, job_id=job_id, date=day, start_time=start, end_time=start + timedelta(hours=hours), **kwargs)


@pytest.fixture
def shifts():
    return [
        build_shift("cafe", "a", date(2025, 1, 6), 8),
        build_shift("bar", "b", date(2025, 1, 7), 4, shift_type=ShiftType.OVERTIME, is_paid=True),
        build_shift("orphan", "ghost", date(2025, 1, 20), 5),
    ]


def ids(shifts):
    return [s.id for s in shifts]


def test_no_criteria_keeps_everything(shifts):
    assert ids(filter_shifts(shifts, JOBS)) == ["cafe", "bar", "orphan"]


def test_empty_collections_match_everything(shifts):
    assert ids(filter_shifts(shifts, JOBS, job_ids=[], shift_types=set())) == ["cafe", "bar", "orphan"]


def test_filter_by_job_type_and_paid(shifts):
    assert ids(filter_shifts(shifts, JOBS, job_ids={"a", "ghost"})) == ["cafe", "orphan"]
    assert ids(filter_shifts(shifts, JOBS, shift_types=[ShiftType.OVERTIME])) == ["bar"]
    assert ids(filter_shifts(shifts, JOBS, is_paid=False)) == ["cafe", "orphan"]


def test_earnings_bounds_are_inclusive(shifts):
    # cafe 80, bar 4h * 20 * 1.5 = 120, orphan 0
    assert ids(filter_shifts(shifts, JOBS, min_earnings=80)) == ["cafe", "bar"]
    assert ids(filter_shifts(shifts, JOBS, max_earnings=80)) == ["cafe", "orphan"]
    assert ids(filter_shifts(shifts, JOBS, min_earnings=81, max_earnings=119)) == []


def test_earnings_use_given_multipliers(shifts):
    flat = RateMultipliers(overtime=1.0)

    assert ids(filter_shifts(shifts, JOBS, min_earnings=81, multipliers=flat)) == []


def test_day_range_is_inclusive(shifts):
    assert ids(filter_shifts(shifts, JOBS, start=date(2025, 1, 7), end=date(2025, 1, 20))) == ["bar", "orphan"]
    assert ids(filter_shifts(shifts, JOBS, end=date(2025, 1, 6))) == ["cafe"]


def test_week_window_starts_on_monday():
    today = date(2025, 1, 22)

    assert window_range(TimeWindow.WEEK, today) == (date(2025, 1, 20), date(2025, 1, 26))
    assert window_range(TimeWindow.WEEK, today, -1) == (date(2025, 1, 13), date(2025, 1, 19))


def test_month_window_ends_today_only_for_current_month():
    today = date(2025, 3, 15)

    assert window_range(TimeWindow.MONTH, today) == (date(2025, 3, 1), date(2025, 3, 15))
    assert window_range(TimeWindow.MONTH, today, -1) == (date(2025, 2, 1), date(2025, 2, 28))
    assert window_range(TimeWindow.MONTH, today, -3) == (date(2024, 12, 1), date(2024, 12, 31))


def test_year_windows():
    today = date(2025, 3, 15)

    assert window_range(TimeWindow.YEAR_TO_DATE, today) == (date(2025, 1, 1), date(2025, 3, 15))
    assert window_range(TimeWindow.YEAR_TO_DATE, today, -1) == (date(2024, 1, 1), date(2024, 3, 15))
    assert window_range(TimeWindow.YEAR, today) == (date(2024, 3, 15), date(2025, 3, 15))


def test_year_window_from_leap_day_clamps():
    assert window_range(TimeWindow.YEAR, date(2024, 2, 29)) == (date(2023, 2, 28), date(2024, 2, 29))
