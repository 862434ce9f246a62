from datetime import date, datetime, time

from shiftpay.models import (
    Deductions,
    GrossPay,
    HoursBreakdown,
    Job,
    PayPeriod,
    Payslip,
    PresetShift,
    Recurrence,
    RecurrenceInterval,
    Shift,
)


def build_shift(start: str, end: str, break_hours: float = 0.0) -> Shift:
    return Shift(
        id="s1",
        job_id="job-a",
        date=date(2025, 1, 6),
        start_time=datetime.fromisoformat(f"2025-01-06T{start}"),
        end_time=datetime.fromisoformat(end if "T" in end else f"2025-01-06T{end}"),
        break_duration=break_hours,
    )


def test_shift_duration_subtracts_break():
    shift = build_shift("09:00", "17:00", break_hours=0.5)

    assert shift.duration == 7.5


def test_shift_duration_spans_midnight():
    shift = build_shift("22:00", "2025-01-07T06:00", break_hours=1)

    assert shift.duration == 7.0


def test_shift_duration_is_not_clamped():
    shift = build_shift("09:00", "10:00", break_hours=2)

    assert shift.duration == -1.0


def test_is_recurring_requires_an_interval():
    shift = build_shift("09:00", "17:00")
    assert not shift.is_recurring

    shift.recurrence = Recurrence(interval=RecurrenceInterval.NONE)
    assert not shift.is_recurring

    shift.recurrence = Recurrence(interval=RecurrenceInterval.WEEKLY)
    assert shift.is_recurring


def test_pay_period_contains_is_inclusive():
    period = PayPeriod(id="p", schedule_id=None, start_date=date(2025, 1, 6), end_date=date(2025, 1, 12), pay_date=date(2025, 1, 13))

    assert period.contains(date(2025, 1, 6))
    assert period.contains(date(2025, 1, 12))
    assert not period.contains(date(2025, 1, 13))
    assert not period.contains(date(2025, 1, 5))


def build_payslip(net_pay: float) -> Payslip:
    return Payslip(
        id="slip",
        job_id="job-a",
        pay_date=date(2025, 1, 13),
        period_start_date=date(2025, 1, 6),
        period_end_date=date(2025, 1, 12),
        hours=HoursBreakdown(regular=30, overtime=5, holiday=2),
        gross=GrossPay(regular=300, overtime=75, holiday=40, bonuses=20, other=5),
        deductions=Deductions(tax=60, insurance=10, retirement=15, other=5),
        net_pay=net_pay,
    )


def test_payslip_totals_are_derived():
    payslip = build_payslip(net_pay=350)

    assert payslip.total_hours == 37
    assert payslip.gross_pay == 440
    assert payslip.total_deductions == 90


def test_payslip_validity_tolerates_under_a_cent():
    assert build_payslip(net_pay=350).is_valid
    assert build_payslip(net_pay=350.005).is_valid
    assert not build_payslip(net_pay=349.5).is_valid


def test_preset_times_roll_past_midnight():
    preset = PresetShift(id="n", name="Night", start=time(22, 0), end=time(6, 0), break_duration=1.0)

    start, end = preset.times_on(date(2025, 1, 6))

    assert start == datetime(2025, 1, 6, 22, 0)
    assert end == datetime(2025, 1, 7, 6, 0)
    assert preset.duration == 7.0


def test_find_preset_by_id_then_name():
    morning = PresetShift(id="m", name="Morning", start=time(6, 0), end=time(14, 0))
    named_m = PresetShift(id="x", name="M", start=time(9, 0), end=time(17, 0))
    job = Job(id="a", name="Cafe", hourly_rate=10.0, preset_shifts=[named_m, morning])

    assert job.find_preset("m") is morning
    assert job.find_preset("MORNING") is morning
    assert job.find_preset("evening") is None
