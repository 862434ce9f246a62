from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Collection, Iterable, List, Optional, Tuple

from .earnings import DEFAULT_MULTIPLIERS, RateMultipliers, index_jobs, shift_earnings
from .models import Job, Shift, ShiftType
from .schedule import add_months


class TimeWindow(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR_TO_DATE = "ytd"
    YEAR = "year"


def window_range(window: TimeWindow, today: date, offset: int = 0) -> Tuple[date, date]:
    """Inclusive date range for a window, moved ``offset`` windows back (negative) or forward.

    Weeks start on Monday. The current month ends today; any other month ends
    on its last day. Year-to-date runs from January 1 of the shifted year up to
    the shifted day, and a year is the twelve months ending on the shifted day.
    """
    if window == TimeWindow.WEEK:
        start = today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
        return start, start + timedelta(days=6)
    if window == TimeWindow.MONTH:
        start = add_months(today.replace(day=1), offset)
        if offset == 0:
            return start, today
        return start, add_months(start, 1) - timedelta(days=1)
    end = add_months(today, 12 * offset)
    if window == TimeWindow.YEAR_TO_DATE:
        return end.replace(month=1, day=1), end
    return add_months(end, -12), end


def filter_shifts(
    shifts: Iterable[Shift],
    jobs: Iterable[Job],
    *,
    job_ids: Optional[Collection[str]] = None,
    shift_types: Optional[Collection[ShiftType]] = None,
    is_paid: Optional[bool] = None,
    min_earnings: Optional[float] = None,
    max_earnings: Optional[float] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> List[Shift]:
    """Filter shifts by job, type, paid flag, earnings bounds and day range.

    Empty or missing criteria match everything. Earnings bounds are inclusive
    and use the same earnings as everywhere else, so orphaned shifts count as 0.
    """
    by_id = index_jobs(jobs)

    def matches(shift: Shift) -> bool:
        if job_ids and shift.job_id not in job_ids:
            return False
        if shift_types and shift.shift_type not in shift_types:
            return False
        if is_paid is not None and shift.is_paid != is_paid:
            return False
        if start and shift.date < start:
            return False
        if end and shift.date > end:
            return False
        if min_earnings is not None or max_earnings is not None:
            earnings = shift_earnings(shift, by_id.get(shift.job_id), multipliers)
            if min_earnings is not None and earnings < min_earnings:
                return False
            if max_earnings is not None and earnings > max_earnings:
                return False
        return True

    return [shift for shift in shifts if matches(shift)]
