from __future__ import annotations
from typing import Iterable, Optional

from .aggregator import expected_totals, shifts_in_period
from .earnings import DEFAULT_MULTIPLIERS, RateMultipliers
from .models import Deductions, GrossPay, HoursBreakdown, Job, PayComparison, PayPeriod, Payslip, Shift


def accuracy(actual: float, expected: float) -> float:
    """Percentage agreement of ``actual`` with ``expected``, clamped to [0, 100].

    A non-positive expectation has no meaningful ratio and scores 0.
    """
    if expected <= 0:
        return 0.0
    score = (1 - abs(actual - expected) / expected) * 100
    return min(max(score, 0.0), 100.0)


def payslip_period(payslip: Payslip) -> PayPeriod:
    """The period a payslip reports for itself, independent of any schedule."""
    return PayPeriod(
        id=payslip.pay_period_id or f"payslip:{payslip.id}",
        schedule_id=None,
        start_date=payslip.period_start_date,
        end_date=payslip.period_end_date,
        pay_date=payslip.pay_date,
    )


def compare(
    payslip: Payslip,
    job: Optional[Job],
    shifts: Iterable[Shift],
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> PayComparison:
    period = payslip_period(payslip)
    matching = shifts_in_period(period, payslip.job_id, shifts)
    expected = expected_totals(period, payslip.job_id, matching, job, multipliers)

    hours_difference = payslip.total_hours - expected.total_hours
    pay_difference = payslip.gross_pay - expected.total_pay

    return PayComparison(
        payslip=payslip,
        period=period,
        expected_shifts=matching,
        job_hourly_rate=job.hourly_rate if job is not None else 0.0,
        job_resolved=job is not None,
        expected=expected,
        hours_difference=hours_difference,
        regular_hours_difference=payslip.hours.regular - expected.regular_hours,
        overtime_hours_difference=payslip.hours.overtime - expected.overtime_hours,
        holiday_hours_difference=payslip.hours.holiday - expected.holiday_hours,
        pay_difference=pay_difference,
        hours_accuracy=accuracy(payslip.total_hours, expected.total_hours),
        pay_accuracy=accuracy(payslip.gross_pay, expected.total_pay),
    )


def draft_payslip(
    payslip_id: str,
    period: PayPeriod,
    job_id: str,
    shifts: Iterable[Shift],
    job: Optional[Job],
    multipliers: RateMultipliers = DEFAULT_MULTIPLIERS,
) -> Payslip:
    """Pre-fill a payslip with expected values; net pay starts at the expected gross."""
    totals = expected_totals(period, job_id, shifts, job, multipliers)
    return Payslip(
        id=payslip_id,
        job_id=job_id,
        pay_period_id=period.id,
        pay_date=period.pay_date,
        period_start_date=period.start_date,
        period_end_date=period.end_date,
        hours=HoursBreakdown(
            regular=totals.regular_hours,
            overtime=totals.overtime_hours,
            holiday=totals.holiday_hours,
        ),
        gross=GrossPay(
            regular=totals.regular_pay,
            overtime=totals.overtime_pay,
            holiday=totals.holiday_pay,
        ),
        deductions=Deductions(),
        net_pay=totals.total_pay,
    )
