from datetime import date, datetime, timedelta

import pytest

from shiftpay.models import GrossPay, HoursBreakdown, Job, PayPeriod, Payslip, Shift, ShiftType
from shiftpay.reconciliation import accuracy, compare, draft_payslip, payslip_period

JOB = Job(id="job-a", name="Cafe", hourly_rate=10.0)


def make_shift(shift_id: str, day: date, hours: float, shift_type: ShiftType = ShiftType.REGULAR, job_id: str = "job-a") -> Shift:
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=8)
    return Shift(id=shift_id, job_id=job_id, date=day, start_time=start, end_time=start + timedelta(hours=hours), shift_type=shift_type)


def build_payslip(regular_hours: float = 40, regular_pay: float = 400, job_id: str = "job-a") -> Payslip:
    return Payslip(
        id="slip-1",
        job_id=job_id,
        pay_date=date(2025, 1, 13),
        period_start_date=date(2025, 1, 6),
        period_end_date=date(2025, 1, 12),
        hours=HoursBreakdown(regular=regular_hours),
        gross=GrossPay(regular=regular_pay),
        net_pay=regular_pay,
    )


def four_long_shifts() -> list[Shift]:
    return [make_shift(f"s{i}", date(2025, 1, 6) + timedelta(days=i), 9.5) for i in range(4)]


def test_hours_accuracy_against_expected():
    comparison = compare(build_payslip(regular_hours=40), JOB, four_long_shifts())

    assert comparison.expected.total_hours == 38
    assert comparison.hours_difference == 2
    assert comparison.regular_hours_difference == 2
    assert comparison.hours_accuracy == pytest.approx(94.7, abs=0.05)


def test_pay_difference_and_accuracy():
    comparison = compare(build_payslip(regular_pay=400), JOB, four_long_shifts())

    assert comparison.expected.total_pay == pytest.approx(380.0)
    assert comparison.pay_difference == pytest.approx(20.0)
    assert comparison.pay_accuracy == pytest.approx((1 - 20 / 380) * 100)


def test_zero_expected_gives_zero_accuracy():
    comparison = compare(build_payslip(), JOB, [])

    assert comparison.expected.total_hours == 0
    assert comparison.hours_accuracy == 0
    assert comparison.pay_accuracy == 0


def test_accuracy_is_clamped():
    assert accuracy(100, 40) == 0
    assert accuracy(40, 40) == 100
    assert accuracy(5, 0) == 0


def test_compare_is_idempotent():
    shifts = four_long_shifts()
    payslip = build_payslip()

    assert compare(payslip, JOB, shifts) == compare(payslip, JOB, shifts)


def test_compare_uses_the_payslip_period():
    shifts = four_long_shifts() + [make_shift("later", date(2025, 1, 13), 8)]

    comparison = compare(build_payslip(), JOB, shifts)

    assert comparison.period.start_date == date(2025, 1, 6)
    assert comparison.period.end_date == date(2025, 1, 12)
    assert comparison.period.pay_date == date(2025, 1, 13)
    assert comparison.period.schedule_id is None
    assert "later" not in [s.id for s in comparison.expected_shifts]


def test_compare_buckets_each_shift_type():
    shifts = [
        make_shift("r", date(2025, 1, 6), 8),
        make_shift("o", date(2025, 1, 7), 2, ShiftType.OVERTIME),
        make_shift("h", date(2025, 1, 8), 4, ShiftType.HOLIDAY),
    ]
    payslip = build_payslip(regular_hours=8)
    payslip.hours.overtime = 3

    comparison = compare(payslip, JOB, shifts)

    assert comparison.overtime_hours_difference == 1
    assert comparison.holiday_hours_difference == -4
    assert comparison.expected.total_pay == pytest.approx(80 + 30 + 80)


def test_compare_with_deleted_job_degrades_to_zero():
    shifts = [make_shift("s", date(2025, 1, 6), 8, job_id="gone")]

    comparison = compare(build_payslip(job_id="gone"), None, shifts)

    assert not comparison.job_resolved
    assert comparison.job_hourly_rate == 0
    assert comparison.expected.total_hours == 8
    assert comparison.expected.total_pay == 0
    assert comparison.pay_accuracy == 0


def test_payslip_period_prefers_linked_period_id():
    payslip = build_payslip()
    assert payslip_period(payslip).id == "payslip:slip-1"

    payslip.pay_period_id = "sched:2025-01-06"
    assert payslip_period(payslip).id == "sched:2025-01-06"


def test_draft_payslip_prefills_expected_values():
    period = PayPeriod(id="sched:2025-01-06", schedule_id="sched", start_date=date(2025, 1, 6), end_date=date(2025, 1, 12), pay_date=date(2025, 1, 13))
    shifts = [make_shift("r", date(2025, 1, 6), 8), make_shift("o", date(2025, 1, 7), 2, ShiftType.OVERTIME)]

    payslip = draft_payslip("draft-1", period, "job-a", shifts, JOB)

    assert payslip.pay_period_id == "sched:2025-01-06"
    assert payslip.pay_date == date(2025, 1, 13)
    assert payslip.hours.regular == 8
    assert payslip.hours.overtime == 2
    assert payslip.gross.overtime == pytest.approx(30.0)
    assert payslip.net_pay == pytest.approx(110.0)
    assert payslip.total_deductions == 0
    assert payslip.is_valid
