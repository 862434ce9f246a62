from __future__ import annotations
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional

from .earnings import DEFAULT_MULTIPLIERS, RateMultipliers, index_jobs, shift_earnings
from .models import EarningsSummary, ExpectedTotals, Job, JobEarnings, PayPeriod, Shift, ShiftType


def shifts_in_period(period: PayPeriod, job_id: str, shifts: Iterable[Shift]) -> List[Shift]:
    """Shifts for ``job_id`` whose calendar day falls inside the period."""
    return [s for s in shifts if s.job_id == job_id and period.contains(s.date)]


def expected_totals(
    period: PayPeriod,
    job_id: str,
    shifts: Iterable[Shift],
    job: Optional[Job],
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> ExpectedTotals:
    hours: Dict[ShiftType, float] = defaultdict(float)
    pay: Dict[ShiftType, float] = defaultdict(float)
    for shift in shifts_in_period(period, job_id, shifts):
        hours[shift.shift_type] += shift.duration
        pay[shift.shift_type] += shift_earnings(shift, job, multipliers)

    return ExpectedTotals(
        regular_hours=hours[ShiftType.REGULAR],
        overtime_hours=hours[ShiftType.OVERTIME],
        holiday_hours=hours[ShiftType.HOLIDAY],
        regular_pay=pay[ShiftType.REGULAR],
        overtime_pay=pay[ShiftType.OVERTIME],
        holiday_pay=pay[ShiftType.HOLIDAY],
    )


def _in_range(shift: Shift, start: date, end: date) -> bool:
    return start <= shift.date <= end


def earnings_summary(
    shifts: Iterable[Shift],
    jobs: Iterable[Job],
    start: date,
    end: date,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> EarningsSummary:
    """Hours and earnings across every job for shifts dated in ``[start, end]``."""
    by_id = index_jobs(jobs)
    total_hours = 0.0
    total_earnings = 0.0
    count = 0
    for shift in shifts:
        if not _in_range(shift, start, end):
            continue
        count += 1
        total_hours += shift.duration
        total_earnings += shift_earnings(shift, by_id.get(shift.job_id), multipliers)
    return EarningsSummary(
        start_date=start,
        end_date=end,
        total_hours=total_hours,
        total_earnings=total_earnings,
        shift_count=count,
    )


def earnings_by_job(
    shifts: Iterable[Shift],
    jobs: Iterable[Job],
    start: date,
    end: date,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> List[JobEarnings]:
    """Per-job totals for jobs that worked in the range, highest earnings first."""
    shifts = [s for s in shifts if _in_range(s, start, end)]
    results: List[JobEarnings] = []
    for job in jobs:
        job_shifts = [s for s in shifts if s.job_id == job.id]
        hours = sum(s.duration for s in job_shifts)
        if hours <= 0:
            continue
        earnings = sum(shift_earnings(s, job, multipliers) for s in job_shifts)
        results.append(JobEarnings(job=job, hours=hours, earnings=earnings))
    return sorted(results, key=lambda r: r.earnings, reverse=True)
