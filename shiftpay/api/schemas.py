from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ..earnings import RateMultipliers, shift_earnings
from ..models import EarningsSummary, ExpectedTotals, Job, JobEarnings, PayComparison, PayPeriod, Payslip, Shift, ShiftType
from ..views import job_name


class JobOut(BaseModel):
    id: str
    name: str
    hourly_rate: float
    color: str
    is_active: bool

    @classmethod
    def from_job(cls, job: Job) -> "JobOut":
        return cls(id=job.id, name=job.name, hourly_rate=job.hourly_rate, color=job.color, is_active=job.is_active)


class ShiftOut(BaseModel):
    id: str
    job_id: str
    date: date
    start_time: datetime
    end_time: datetime
    break_duration: float
    shift_type: ShiftType
    is_paid: bool
    hours: float
    earnings: float

    @classmethod
    def from_shift(cls, shift: Shift, job: Optional[Job], multipliers: RateMultipliers) -> "ShiftOut":
        return cls(
            id=shift.id,
            job_id=shift.job_id,
            date=shift.date,
            start_time=shift.start_time,
            end_time=shift.end_time,
            break_duration=shift.break_duration,
            shift_type=shift.shift_type,
            is_paid=shift.is_paid,
            hours=shift.duration,
            earnings=shift_earnings(shift, job, multipliers),
        )


class PayPeriodOut(BaseModel):
    id: str
    schedule_id: Optional[str] = None
    start_date: date
    end_date: date
    pay_date: date

    @classmethod
    def from_period(cls, period: PayPeriod) -> "PayPeriodOut":
        return cls(
            id=period.id,
            schedule_id=period.schedule_id,
            start_date=period.start_date,
            end_date=period.end_date,
            pay_date=period.pay_date,
        )


class NextPayDateOut(BaseModel):
    job_id: str
    pay_date: Optional[date] = None


class HoursOut(BaseModel):
    regular: float
    overtime: float
    holiday: float
    total: float


class ExpectedTotalsOut(BaseModel):
    regular_hours: float
    overtime_hours: float
    holiday_hours: float
    total_hours: float
    regular_pay: float
    overtime_pay: float
    holiday_pay: float
    total_pay: float

    @classmethod
    def from_totals(cls, totals: ExpectedTotals) -> "ExpectedTotalsOut":
        return cls(
            regular_hours=totals.regular_hours,
            overtime_hours=totals.overtime_hours,
            holiday_hours=totals.holiday_hours,
            total_hours=totals.total_hours,
            regular_pay=totals.regular_pay,
            overtime_pay=totals.overtime_pay,
            holiday_pay=totals.holiday_pay,
            total_pay=totals.total_pay,
        )


class GrossOut(BaseModel):
    regular: float
    overtime: float
    holiday: float
    bonuses: float
    other: float
    total: float


class DeductionsOut(BaseModel):
    tax: float
    insurance: float
    retirement: float
    other: float
    total: float


class PayslipOut(BaseModel):
    id: str
    job_id: str
    pay_period_id: Optional[str] = None
    pay_date: date
    period_start_date: date
    period_end_date: date
    hours: HoursOut
    gross: GrossOut
    deductions: DeductionsOut
    net_pay: float
    is_valid: bool

    @classmethod
    def from_payslip(cls, payslip: Payslip) -> "PayslipOut":
        return cls(
            id=payslip.id,
            job_id=payslip.job_id,
            pay_period_id=payslip.pay_period_id,
            pay_date=payslip.pay_date,
            period_start_date=payslip.period_start_date,
            period_end_date=payslip.period_end_date,
            hours=HoursOut(
                regular=payslip.hours.regular,
                overtime=payslip.hours.overtime,
                holiday=payslip.hours.holiday,
                total=payslip.total_hours,
            ),
            gross=GrossOut(
                regular=payslip.gross.regular,
                overtime=payslip.gross.overtime,
                holiday=payslip.gross.holiday,
                bonuses=payslip.gross.bonuses,
                other=payslip.gross.other,
                total=payslip.gross_pay,
            ),
            deductions=DeductionsOut(
                tax=payslip.deductions.tax,
                insurance=payslip.deductions.insurance,
                retirement=payslip.deductions.retirement,
                other=payslip.deductions.other,
                total=payslip.total_deductions,
            ),
            net_pay=payslip.net_pay,
            is_valid=payslip.is_valid,
        )


class ComparisonOut(BaseModel):
    payslip: PayslipOut
    job_name: str
    job_resolved: bool
    job_hourly_rate: float
    period: PayPeriodOut
    expected: ExpectedTotalsOut
    expected_shift_ids: list[str]
    hours_difference: float
    regular_hours_difference: float
    overtime_hours_difference: float
    holiday_hours_difference: float
    pay_difference: float
    hours_accuracy: float
    pay_accuracy: float

    @classmethod
    def from_comparison(cls, comparison: PayComparison, job: Optional[Job]) -> "ComparisonOut":
        return cls(
            payslip=PayslipOut.from_payslip(comparison.payslip),
            job_name=job_name(job),
            job_resolved=comparison.job_resolved,
            job_hourly_rate=comparison.job_hourly_rate,
            period=PayPeriodOut.from_period(comparison.period),
            expected=ExpectedTotalsOut.from_totals(comparison.expected),
            expected_shift_ids=[s.id for s in comparison.expected_shifts],
            hours_difference=comparison.hours_difference,
            regular_hours_difference=comparison.regular_hours_difference,
            overtime_hours_difference=comparison.overtime_hours_difference,
            holiday_hours_difference=comparison.holiday_hours_difference,
            pay_difference=comparison.pay_difference,
            hours_accuracy=comparison.hours_accuracy,
            pay_accuracy=comparison.pay_accuracy,
        )


class JobEarningsOut(BaseModel):
    job_id: str
    job_name: str
    hours: float
    earnings: float


class SummaryOut(BaseModel):
    start_date: date
    end_date: date
    shift_count: int
    total_hours: float
    total_earnings: float
    jobs: list[JobEarningsOut]

    @classmethod
    def from_summary(cls, summary: EarningsSummary, by_job: list[JobEarnings]) -> "SummaryOut":
        return cls(
            start_date=summary.start_date,
            end_date=summary.end_date,
            shift_count=summary.shift_count,
            total_hours=summary.total_hours,
            total_earnings=summary.total_earnings,
            jobs=[
                JobEarningsOut(job_id=e.job.id, job_name=e.job.name, hours=e.hours, earnings=e.earnings)
                for e in by_job
            ],
        )
