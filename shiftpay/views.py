from __future__ import annotations
from datetime import date
from typing import Iterable, List, Mapping, Optional

from .earnings import DEFAULT_MULTIPLIERS, RateMultipliers, shift_earnings
from .models import EarningsSummary, Job, JobEarnings, PayComparison, PayPeriod, Shift

UNKNOWN_JOB = "Unknown job"


def job_name(job: Optional[Job]) -> str:
    return job.name if job is not None else UNKNOWN_JOB


def format_jobs(jobs: Iterable[Job]) -> str:
    rows = []
    for job in jobs:
        status = "active" if job.is_active else "inactive"
        rows.append(f"{job.id} {job.name} rate: {job.hourly_rate:.2f}/h color: {job.color} ({status})")
    return "\n".join(rows)


def format_shifts(
    shifts: Iterable[Shift],
    jobs: Mapping[str, Job],
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> str:
    rows = ["Shifts", "Date        Start  End    Hours  Type      Earnings  Job"]
    total_hours = 0.0
    total_earnings = 0.0
    for shift in shifts:
        job = jobs.get(shift.job_id)
        earnings = shift_earnings(shift, job, multipliers)
        total_hours += shift.duration
        total_earnings += earnings
        rows.append(
            f"{shift.date.isoformat()}  {shift.start_time:%H:%M}  {shift.end_time:%H:%M}  "
            f"{shift.duration:>5.2f}  {shift.shift_type.value:<8}  {earnings:>8.2f}  {job_name(job)}"
        )
    rows.append(f"Total hours: {total_hours:.2f}  Total earnings: {total_earnings:.2f}")
    return "\n".join(rows)


def format_periods(periods: Iterable[PayPeriod]) -> str:
    rows = ["Start       End         Pay date"]
    for period in periods:
        rows.append(f"{period.start_date.isoformat()}  {period.end_date.isoformat()}  {period.pay_date.isoformat()}")
    return "\n".join(rows)


def format_pay_dates(dates: Iterable[date]) -> str:
    return "\n".join(d.isoformat() for d in dates)


def format_comparison(comparison: PayComparison, job: Optional[Job]) -> str:
    payslip = comparison.payslip
    expected = comparison.expected
    rows: List[str] = [
        f"Payslip {payslip.id} ({job_name(job)})",
        f"Period {comparison.period.start_date.isoformat()} - {comparison.period.end_date.isoformat()}, paid {payslip.pay_date.isoformat()}",
        "                Actual   Expected   Difference",
        f"Regular hours  {payslip.hours.regular:>7.2f}  {expected.regular_hours:>9.2f}  {comparison.regular_hours_difference:>+11.2f}",
        f"Overtime hours {payslip.hours.overtime:>7.2f}  {expected.overtime_hours:>9.2f}  {comparison.overtime_hours_difference:>+11.2f}",
        f"Holiday hours  {payslip.hours.holiday:>7.2f}  {expected.holiday_hours:>9.2f}  {comparison.holiday_hours_difference:>+11.2f}",
        f"Total hours    {payslip.total_hours:>7.2f}  {expected.total_hours:>9.2f}  {comparison.hours_difference:>+11.2f}",
        f"Gross pay      {payslip.gross_pay:>7.2f}  {expected.total_pay:>9.2f}  {comparison.pay_difference:>+11.2f}",
        f"Hours accuracy: {comparison.hours_accuracy:.1f}%",
        f"Pay accuracy: {comparison.pay_accuracy:.1f}%",
    ]
    if not payslip.is_valid:
        rows.append("Warning: net pay does not equal gross pay minus deductions")
    return "\n".join(rows)


def format_summary(summary: EarningsSummary, by_job: Iterable[JobEarnings]) -> str:
    rows = [
        f"Summary {summary.start_date.isoformat()} - {summary.end_date.isoformat()}",
        f"Shifts: {summary.shift_count}  Hours: {summary.total_hours:.2f}  Earnings: {summary.total_earnings:.2f}",
    ]
    for entry in by_job:
        rows.append(f"  {entry.job.name:<20} {entry.hours:>7.2f}h  {entry.earnings:>9.2f}")
    return "\n".join(rows)
