from __future__ import annotations
import argparse
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

from . import payroll, tracking
from .codec import dumps_export, loads_export
from .config import get_settings
from .csv_io import export_shifts, import_shifts
from .earnings import index_jobs
from .errors import InvalidShift, RecordNotFound, ShiftPayError
from .filters import TimeWindow, filter_shifts, window_range
from .logging import bind_command, configure_logging
from .models import (
    Deductions,
    GrossPay,
    HoursBreakdown,
    Job,
    PayFrequency,
    PaySchedule,
    Payslip,
    PresetShift,
    Recurrence,
    RecurrenceInterval,
    Shift,
    ShiftType,
)
from .storage import DataStore
from .views import (
    format_comparison,
    format_jobs,
    format_pay_dates,
    format_periods,
    format_shifts,
    format_summary,
)


def store_from_args(args: argparse.Namespace) -> DataStore:
    settings = get_settings()
    path = Path(args.data) if args.data else settings.data_path
    return DataStore(path, theme_color=settings.theme_color)


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def cmd_add_job(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    job = Job(id=args.id or str(uuid4()), name=args.name, hourly_rate=args.rate, color=args.color)
    tracking.add_job(store, job)
    print(f"Added job {job.id} ({job.name})")


def cmd_list_jobs(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    jobs = store.list_jobs()
    if args.active:
        jobs = [j for j in jobs if j.is_active]
    print(format_jobs(jobs))


def cmd_update_job(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    job = store.require_job(args.id)
    if args.name:
        job.name = args.name
    if args.rate is not None:
        job.hourly_rate = args.rate
    if args.active is not None:
        job.is_active = args.active == "yes"
    tracking.update_job(store, job)
    print(f"Updated job {job.id} ({job.name})")


def cmd_delete_job(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    job = tracking.delete_job(store, args.id, force=args.force)
    if job is None:
        print(f"Deleted job {args.id}")
    else:
        print(f"Job {args.id} still has shifts; marked inactive")


def cmd_add_shift(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    day = parse_date(args.date)
    break_hours = args.break_hours
    if args.preset:
        preset = store.require_job(args.job).find_preset(args.preset)
        if preset is None:
            raise RecordNotFound("preset", args.preset)
        start, end = preset.times_on(day)
        if break_hours is None:
            break_hours = preset.break_duration
    elif args.start and args.end:
        start, end = tracking.shift_times(day, args.start, args.end)
    else:
        raise InvalidShift(args.id or "new", "start and end times are required without --preset")
    recurrence = None
    if args.repeat != RecurrenceInterval.NONE.value:
        recurrence = Recurrence(
            interval=RecurrenceInterval(args.repeat),
            end_date=parse_date(args.until) if args.until else None,
        )
    shift = Shift(
        id=args.id or str(uuid4()),
        job_id=args.job,
        date=day,
        start_time=start,
        end_time=end,
        break_duration=break_hours or 0.0,
        shift_type=ShiftType(args.type),
        notes=args.notes or "",
        is_paid=args.paid,
        hourly_rate_override=args.rate,
        recurrence=recurrence,
    )
    horizon = date.today() + timedelta(days=get_settings().recurrence_horizon_days)
    recorded = tracking.add_shift(store, shift, horizon=horizon)
    print(f"Added shift {shift.id}: {shift.duration:.2f}h on {shift.date}")
    if len(recorded) > 1:
        print(f"Generated {len(recorded) - 1} recurring shifts")


def cmd_list_shifts(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    multipliers = get_settings().multipliers
    start = parse_date(args.start) if args.start else None
    end = parse_date(args.end) if args.end else None
    if args.window:
        today = parse_date(args.today) if args.today else date.today()
        start, end = window_range(TimeWindow(args.window), today, args.offset)
    shifts = filter_shifts(
        store.find_shifts(),
        store.jobs.values(),
        job_ids=args.job,
        shift_types=[ShiftType(t) for t in args.type] if args.type else None,
        is_paid=args.paid,
        min_earnings=args.min_earnings,
        max_earnings=args.max_earnings,
        start=start,
        end=end,
        multipliers=multipliers,
    )
    print(format_shifts(shifts, index_jobs(store.jobs.values()), multipliers))


def cmd_add_preset(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    preset = PresetShift(
        id=args.id or str(uuid4()),
        name=args.name,
        start=tracking.parse_clock(args.start),
        end=tracking.parse_clock(args.end),
        break_duration=args.break_hours,
    )
    tracking.add_preset(store, args.job, preset)
    print(f"Added preset {preset.id} ({preset.name}): {preset.duration:.2f}h")


def cmd_delete_preset(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    tracking.delete_preset(store, args.job, args.preset)
    print(f"Deleted preset {args.preset}")


def cmd_mark_paid(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    shift = tracking.mark_shift_paid(store, args.id, paid=not args.unpaid)
    print(f"Shift {shift.id} marked {'paid' if shift.is_paid else 'unpaid'}")


def cmd_delete_shift(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    removed = tracking.delete_shift(store, args.id, delete_series=args.series)
    print(f"Deleted {removed} shift(s)")


def cmd_add_schedule(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    store.require_job(args.job)
    schedule = PaySchedule(
        id=args.id or str(uuid4()),
        job_id=args.job,
        frequency=PayFrequency(args.frequency),
        start_date=parse_date(args.anchor),
        custom_day_interval=args.interval,
    )
    tracking.add_pay_schedule(store, schedule)
    print(f"Added {schedule.frequency.value} pay schedule {schedule.id} for job {schedule.job_id}")


def cmd_periods(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    settings = get_settings()
    periods = payroll.periods_for_job(
        store, args.job, parse_date(args.start), parse_date(args.end), max_periods=settings.max_schedule_periods
    )
    print(format_periods(periods))


def cmd_next_pay_date(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    pay_date = payroll.next_pay_date_for_job(
        store,
        args.job,
        parse_date(args.from_date) if args.from_date else None,
        max_periods=get_settings().max_schedule_periods,
    )
    print(pay_date.isoformat() if pay_date else "No active pay schedule")


def cmd_upcoming(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    settings = get_settings()
    dates = payroll.upcoming_pay_dates_for_job(
        store,
        args.job,
        parse_date(args.today) if args.today else date.today(),
        count=args.count or settings.upcoming_pay_dates,
        horizon_months=settings.upcoming_horizon_months,
    )
    print(format_pay_dates(dates) if dates else "No upcoming pay dates")


def cmd_add_payslip(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    payslip = Payslip(
        id=args.id or str(uuid4()),
        job_id=args.job,
        pay_date=parse_date(args.pay_date),
        period_start_date=parse_date(args.start),
        period_end_date=parse_date(args.end),
        hours=HoursBreakdown(regular=args.regular_hours, overtime=args.overtime_hours, holiday=args.holiday_hours),
        gross=GrossPay(
            regular=args.regular_pay,
            overtime=args.overtime_pay,
            holiday=args.holiday_pay,
            bonuses=args.bonuses,
            other=args.other_earnings,
        ),
        deductions=Deductions(
            tax=args.tax,
            insurance=args.insurance,
            retirement=args.retirement,
            other=args.other_deductions,
        ),
        net_pay=args.net,
        pay_period_id=args.period,
        notes=args.notes or "",
    )
    tracking.add_payslip(store, payslip)
    print(f"Added payslip {payslip.id} gross {payslip.gross_pay:.2f} net {payslip.net_pay:.2f}")
    if not payslip.is_valid:
        print("Warning: net pay does not equal gross pay minus deductions")


def cmd_draft_payslip(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    settings = get_settings()
    period = payroll.pay_period_for(store, args.job, parse_date(args.date), max_periods=settings.max_schedule_periods)
    if period is None:
        raise RecordNotFound("pay period", f"{args.job}@{args.date}")
    payslip = payroll.draft_payslip_for_period(store, period, args.job, multipliers=settings.multipliers)
    print(
        f"Draft payslip {payslip.id} for {period.start_date} - {period.end_date}: "
        f"{payslip.total_hours:.2f}h gross {payslip.gross_pay:.2f}"
    )
    if args.save:
        tracking.add_payslip(store, payslip)
        print("Saved draft payslip")


def cmd_compare(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    comparison = payroll.comparison_for_payslip(store, args.payslip, get_settings().multipliers)
    print(format_comparison(comparison, store.get_job(comparison.payslip.job_id)))


def cmd_summary(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    totals, by_job = payroll.summary(store, parse_date(args.start), parse_date(args.end), get_settings().multipliers)
    print(format_summary(totals, by_job))


def cmd_export(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    export = tracking.export_data(store, datetime.now(timezone.utc))
    path = Path(args.path)
    path.write_text(dumps_export(export))
    print(f"Exported {len(export.jobs)} jobs and {len(export.shifts)} shifts to {path}")


def cmd_import(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    export = loads_export(path.read_text())
    tracking.import_data(store, export)
    print(f"Imported {len(export.jobs)} jobs and {len(export.shifts)} shifts from {path}")


def cmd_export_csv(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    export_shifts(path, store.find_shifts(args.job))
    print(f"Exported shifts to {path}")


def cmd_import_csv(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    path = Path(args.path)
    shifts = tracking.import_shifts(store, import_shifts(path))
    print(f"Imported {len(shifts)} shifts from {path}")


def cmd_reset(args: argparse.Namespace) -> None:
    store = store_from_args(args)
    store.reset()
    store.save()
    print("Removed all jobs and shifts")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shift tracking and payslip reconciliation CLI")
    parser.add_argument("--data", help="Path to the JSON data store")
    sub = parser.add_subparsers(dest="command", required=True)

    job = sub.add_parser("add-job", help="Add a job")
    job.add_argument("name")
    job.add_argument("rate", type=float, help="Hourly rate")
    job.add_argument("--color", default="Blue")
    job.add_argument("--id")
    job.set_defaults(func=cmd_add_job)

    list_jobs = sub.add_parser("list-jobs", help="List jobs by name")
    list_jobs.add_argument("--active", action="store_true", help="Only active jobs")
    list_jobs.set_defaults(func=cmd_list_jobs)

    update_job = sub.add_parser("update-job", help="Change a job's name, rate or active flag")
    update_job.add_argument("id")
    update_job.add_argument("--name")
    update_job.add_argument("--rate", type=float)
    update_job.add_argument("--active", choices=["yes", "no"])
    update_job.set_defaults(func=cmd_update_job)

    delete_job = sub.add_parser("delete-job", help="Delete a job, or deactivate it if it has shifts")
    delete_job.add_argument("id")
    delete_job.add_argument("--force", action="store_true", help="Delete even if shifts reference it")
    delete_job.set_defaults(func=cmd_delete_job)

    shift = sub.add_parser("add-shift", help="Record a worked shift")
    shift.add_argument("job")
    shift.add_argument("date")
    shift.add_argument("start", nargs="?", help="HH:MM")
    shift.add_argument("end", nargs="?", help="HH:MM; earlier than start means past midnight")
    shift.add_argument("--preset", help="Take start, end and break from a saved preset (id or name)")
    shift.add_argument("--break", dest="break_hours", type=float, help="Break in hours")
    shift.add_argument("--type", choices=[t.value for t in ShiftType], default=ShiftType.REGULAR.value)
    shift.add_argument("--rate", type=float, help="Hourly rate override")
    shift.add_argument("--notes")
    shift.add_argument("--paid", action="store_true")
    shift.add_argument("--repeat", choices=[r.value for r in RecurrenceInterval], default=RecurrenceInterval.NONE.value)
    shift.add_argument("--until", help="Last date of a recurring series")
    shift.add_argument("--id")
    shift.set_defaults(func=cmd_add_shift)

    list_shifts = sub.add_parser("list-shifts", help="List shifts with earnings")
    list_shifts.add_argument("--job", action="append", help="Repeat to match several jobs")
    list_shifts.add_argument("--type", action="append", choices=[t.value for t in ShiftType])
    paid = list_shifts.add_mutually_exclusive_group()
    paid.add_argument("--paid", dest="paid", action="store_true", default=None)
    paid.add_argument("--unpaid", dest="paid", action="store_false", default=None)
    list_shifts.add_argument("--min-earnings", type=float)
    list_shifts.add_argument("--max-earnings", type=float)
    list_shifts.add_argument("--start", help="First day to include")
    list_shifts.add_argument("--end", help="Last day to include")
    list_shifts.add_argument("--window", choices=[w.value for w in TimeWindow], help="Overrides --start and --end")
    list_shifts.add_argument("--offset", type=int, default=0, help="Windows back (negative) or forward")
    list_shifts.add_argument("--today", help="Reference day for --window")
    list_shifts.set_defaults(func=cmd_list_shifts)

    add_preset = sub.add_parser("add-preset", help="Save a reusable shift template for a job")
    add_preset.add_argument("job")
    add_preset.add_argument("name")
    add_preset.add_argument("start", help="HH:MM")
    add_preset.add_argument("end", help="HH:MM")
    add_preset.add_argument("--break", dest="break_hours", type=float, default=0.0, help="Break in hours")
    add_preset.add_argument("--id")
    add_preset.set_defaults(func=cmd_add_preset)

    delete_preset = sub.add_parser("delete-preset", help="Remove a shift template")
    delete_preset.add_argument("job")
    delete_preset.add_argument("preset", help="Preset id or name")
    delete_preset.set_defaults(func=cmd_delete_preset)

    mark_paid = sub.add_parser("mark-paid", help="Flag a shift as paid")
    mark_paid.add_argument("id")
    mark_paid.add_argument("--unpaid", action="store_true")
    mark_paid.set_defaults(func=cmd_mark_paid)

    delete_shift = sub.add_parser("delete-shift", help="Delete a shift")
    delete_shift.add_argument("id")
    delete_shift.add_argument("--series", action="store_true", help="Also delete generated occurrences")
    delete_shift.set_defaults(func=cmd_delete_shift)

    schedule = sub.add_parser("add-schedule", help="Add a pay schedule for a job")
    schedule.add_argument("job")
    schedule.add_argument("frequency", choices=[f.value for f in PayFrequency])
    schedule.add_argument("anchor", help="First period start date")
    schedule.add_argument("--interval", type=int, help="Days between pay dates for custom schedules")
    schedule.add_argument("--id")
    schedule.set_defaults(func=cmd_add_schedule)

    periods = sub.add_parser("periods", help="List pay periods starting in a date range")
    periods.add_argument("job")
    periods.add_argument("start")
    periods.add_argument("end")
    periods.set_defaults(func=cmd_periods)

    next_pay = sub.add_parser("next-pay-date", help="Next pay date on the schedule's phase")
    next_pay.add_argument("job")
    next_pay.add_argument("--from", dest="from_date")
    next_pay.set_defaults(func=cmd_next_pay_date)

    upcoming = sub.add_parser("upcoming", help="Upcoming pay dates")
    upcoming.add_argument("job")
    upcoming.add_argument("--today")
    upcoming.add_argument("--count", type=int)
    upcoming.set_defaults(func=cmd_upcoming)

    payslip = sub.add_parser("add-payslip", help="Record a payslip")
    payslip.add_argument("job")
    payslip.add_argument("pay_date")
    payslip.add_argument("start")
    payslip.add_argument("end")
    for name in (
        "regular-hours",
        "overtime-hours",
        "holiday-hours",
        "regular-pay",
        "overtime-pay",
        "holiday-pay",
        "bonuses",
        "other-earnings",
        "tax",
        "insurance",
        "retirement",
        "other-deductions",
    ):
        payslip.add_argument(f"--{name}", type=float, default=0.0)
    payslip.add_argument("--net", type=float, required=True)
    payslip.add_argument("--period", help="Linked pay period id")
    payslip.add_argument("--notes")
    payslip.add_argument("--id")
    payslip.set_defaults(func=cmd_add_payslip)

    draft = sub.add_parser("draft-payslip", help="Pre-fill a payslip from recorded shifts")
    draft.add_argument("job")
    draft.add_argument("date", help="Any date inside the pay period")
    draft.add_argument("--save", action="store_true")
    draft.set_defaults(func=cmd_draft_payslip)

    comparison = sub.add_parser("compare", help="Compare a payslip against recorded shifts")
    comparison.add_argument("payslip")
    comparison.set_defaults(func=cmd_compare)

    summary = sub.add_parser("summary", help="Hours and earnings in a date range")
    summary.add_argument("start")
    summary.add_argument("end")
    summary.set_defaults(func=cmd_summary)

    export = sub.add_parser("export", help="Export jobs, shifts and theme to JSON")
    export.add_argument("path")
    export.set_defaults(func=cmd_export)

    imp = sub.add_parser("import", help="Replace jobs, shifts and theme from a JSON export")
    imp.add_argument("path")
    imp.set_defaults(func=cmd_import)

    export_csv = sub.add_parser("export-csv", help="Export shifts to CSV")
    export_csv.add_argument("path")
    export_csv.add_argument("--job")
    export_csv.set_defaults(func=cmd_export_csv)

    import_csv = sub.add_parser("import-csv", help="Import shifts from CSV")
    import_csv.add_argument("path")
    import_csv.set_defaults(func=cmd_import_csv)

    reset = sub.add_parser("reset", help="Remove all jobs and shifts")
    reset.set_defaults(func=cmd_reset)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(get_settings().log_level)
    bind_command(args.command)
    try:
        args.func(args)
    except ShiftPayError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
