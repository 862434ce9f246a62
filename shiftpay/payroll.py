"""Payroll use cases: load plain collections from a repository and hand them to the core.

The computation modules (earnings, schedule, aggregator, reconciliation) never
see the repository. Everything here is read-only.
"""
from __future__ import annotations
from datetime import date
from typing import List, Optional
from uuid import uuid4

from .aggregator import earnings_by_job, earnings_summary, expected_totals
from .earnings import DEFAULT_MULTIPLIERS, RateMultipliers
from .errors import InvalidScheduleConfiguration
from .logging import get_logger
from .models import EarningsSummary, ExpectedTotals, Job, JobEarnings, PayComparison, PayPeriod, Payslip
from .reconciliation import compare, draft_payslip
from .schedule import (
    MAX_PERIODS,
    active_schedule_for,
    next_pay_date,
    period_containing,
    periods_in_range,
    upcoming_pay_dates,
)
from .storage import PayrollRepository

logger = get_logger(__name__)


def resolve_job(repo: PayrollRepository, job_id: str, **context) -> Optional[Job]:
    job = repo.get_job(job_id)
    if job is None:
        logger.warning("unresolved_job_reference", job_id=job_id, **context)
    return job


def periods_for_job(
    repo: PayrollRepository,
    job_id: str,
    start: date,
    end: date,
    max_periods: int = MAX_PERIODS,
) -> List[PayPeriod]:
    schedule = active_schedule_for(job_id, repo.find_pay_schedules(job_id))
    if schedule is None:
        return []
    try:
        return periods_in_range(schedule, start, end, max_periods=max_periods)
    except InvalidScheduleConfiguration as exc:
        logger.error("invalid_schedule_configuration", schedule_id=exc.schedule_id, reason=exc.reason)
        raise


def next_pay_date_for_job(
    repo: PayrollRepository, job_id: str, from_date: Optional[date] = None, max_periods: int = MAX_PERIODS
) -> Optional[date]:
    schedule = active_schedule_for(job_id, repo.find_pay_schedules(job_id))
    if schedule is None:
        return None
    try:
        return next_pay_date(schedule, from_date, max_periods=max_periods)
    except InvalidScheduleConfiguration as exc:
        logger.error("invalid_schedule_configuration", schedule_id=exc.schedule_id, reason=exc.reason)
        raise


def pay_period_for(repo: PayrollRepository, job_id: str, day: date, max_periods: int = MAX_PERIODS) -> Optional[PayPeriod]:
    schedule = active_schedule_for(job_id, repo.find_pay_schedules(job_id))
    if schedule is None:
        return None
    return period_containing(schedule, day, max_periods=max_periods)


def upcoming_pay_dates_for_job(
    repo: PayrollRepository,
    job_id: str,
    today: date,
    count: int = 5,
    horizon_months: int = 6,
) -> List[date]:
    schedule = active_schedule_for(job_id, repo.find_pay_schedules(job_id))
    if schedule is None:
        return []
    return upcoming_pay_dates(schedule, today, count=count, horizon_months=horizon_months)


def expected_for_period(
    repo: PayrollRepository,
    period: PayPeriod,
    job_id: str,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> ExpectedTotals:
    job = resolve_job(repo, job_id, period_id=period.id)
    return expected_totals(period, job_id, repo.find_shifts(job_id), job, multipliers)


def comparison_for_payslip(
    repo: PayrollRepository,
    payslip_id: str,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> PayComparison:
    payslip = repo.get_payslip(payslip_id)
    job = resolve_job(repo, payslip.job_id, payslip_id=payslip.id)
    return compare(payslip, job, repo.find_shifts(payslip.job_id), multipliers)


def comparisons_for_job(
    repo: PayrollRepository,
    job_id: str,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> List[PayComparison]:
    job = resolve_job(repo, job_id)
    shifts = repo.find_shifts(job_id)
    return [compare(p, job, shifts, multipliers) for p in repo.find_payslips(job_id)]


def draft_payslip_for_period(
    repo: PayrollRepository,
    period: PayPeriod,
    job_id: str,
    payslip_id: Optional[str] = None,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> Payslip:
    job = resolve_job(repo, job_id, period_id=period.id)
    return draft_payslip(payslip_id or str(uuid4()), period, job_id, repo.find_shifts(job_id), job, multipliers)


def summary(
    repo: PayrollRepository,
    start: date,
    end: date,
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> tuple[EarningsSummary, List[JobEarnings]]:
    jobs = repo.list_jobs()
    shifts = repo.find_shifts()
    known = {job.id for job in jobs}
    orphaned = sorted({s.job_id for s in shifts if s.job_id not in known and start <= s.date <= end})
    for job_id in orphaned:
        logger.warning("unresolved_job_reference", job_id=job_id)
    return (
        earnings_summary(shifts, jobs, start, end, multipliers),
        earnings_by_job(shifts, jobs, start, end, multipliers),
    )
