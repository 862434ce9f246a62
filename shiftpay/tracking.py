from __future__ import annotations
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from .errors import InvalidShift, RecordNotFound
from .logging import get_logger
from .models import ExportData, Job, PaySchedule, Payslip, PresetShift, Shift
from .recurrence import generate_occurrences, propagate_series_update
from .schedule import validate_schedule
from .storage import DataStore

logger = get_logger(__name__)

RECURRENCE_HORIZON_DAYS = 90


def add_job(store: DataStore, job: Job) -> Job:
    store.add_job(job)
    store.save()
    logger.info("job_added", job_id=job.id, name=job.name)
    return job


def update_job(store: DataStore, job: Job) -> Job:
    store.require_job(job.id)
    store.add_job(job)
    store.save()
    logger.info("job_updated", job_id=job.id, hourly_rate=job.hourly_rate, active=job.is_active)
    return job


def delete_job(store: DataStore, job_id: str, force: bool = False) -> Optional[Job]:
    """Remove a job, or deactivate it while shifts still reference it.

    ``force`` removes it regardless; its shifts and payslips stay behind as
    orphans. Returns the deactivated job, or None when it was removed.
    """
    job = store.require_job(job_id)
    if store.find_shifts(job_id) and not force:
        job.is_active = False
        store.save()
        logger.info("job_deactivated", job_id=job_id)
        return job
    del store.jobs[job_id]
    store.save()
    logger.info("job_deleted", job_id=job_id, forced=force)
    return None


def validate_shift(shift: Shift) -> None:
    """Reject shifts whose worked hours would come out negative, or with a non-positive override."""
    if shift.break_duration < 0:
        raise InvalidShift(shift.id, f"break cannot be negative, got {shift.break_duration}")
    if shift.end_time < shift.start_time:
        raise InvalidShift(shift.id, "end time is before start time")
    if shift.duration < 0:
        raise InvalidShift(shift.id, f"{shift.break_duration}h break is longer than the shift")
    if shift.hourly_rate_override is not None and shift.hourly_rate_override <= 0:
        raise InvalidShift(shift.id, f"rate override must be positive, got {shift.hourly_rate_override}")


def add_shift(store: DataStore, shift: Shift, horizon: Optional[date] = None) -> List[Shift]:
    """Record a shift for an existing job, expanding it if it recurs.

    Open-ended series are expanded up to ``horizon``, by default
    RECURRENCE_HORIZON_DAYS from today. Returns the shift followed by any
    generated occurrences.
    """
    store.require_job(shift.job_id)
    validate_shift(shift)
    recorded = [shift]
    store.add_shift(shift)
    if shift.is_recurring:
        occurrences = generate_occurrences(shift, until=horizon or date.today() + timedelta(days=RECURRENCE_HORIZON_DAYS))
        for occurrence in occurrences:
            store.add_shift(occurrence)
        recorded.extend(occurrences)
        logger.info("recurring_shifts_generated", parent_shift_id=shift.id, count=len(occurrences))
    store.save()
    logger.info("shift_added", shift_id=shift.id, job_id=shift.job_id, date=shift.date.isoformat())
    return recorded


def series_children(store: DataStore, parent_id: str) -> List[Shift]:
    return [s for s in store.find_shifts() if s.parent_shift_id == parent_id]


def import_shifts(store: DataStore, shifts: List[Shift]) -> List[Shift]:
    """Add already-built shifts, such as CSV rows; nothing is stored unless every row is valid."""
    for shift in shifts:
        validate_shift(shift)
    for shift in shifts:
        store.add_shift(shift)
    store.save()
    logger.info("shifts_imported", count=len(shifts))
    return shifts


def update_shift(store: DataStore, shift: Shift) -> Shift:
    store.get_shift(shift.id)
    validate_shift(shift)
    store.add_shift(shift)
    if shift.is_recurring and shift.parent_shift_id is None:
        for child in propagate_series_update(shift, series_children(store, shift.id)):
            store.add_shift(child)
    store.save()
    logger.info("shift_updated", shift_id=shift.id)
    return shift


def delete_shift(store: DataStore, shift_id: str, delete_series: bool = False) -> int:
    """Delete a shift, and with ``delete_series`` every occurrence generated from it."""
    shift = store.get_shift(shift_id)
    doomed = [shift.id]
    if delete_series and shift.is_recurring and shift.parent_shift_id is None:
        doomed.extend(child.id for child in series_children(store, shift.id))
    for doomed_id in doomed:
        del store.shifts[doomed_id]
    store.save()
    logger.info("shift_deleted", shift_id=shift_id, removed=len(doomed))
    return len(doomed)


def mark_shift_paid(store: DataStore, shift_id: str, paid: bool = True) -> Shift:
    shift = store.get_shift(shift_id)
    shift.is_paid = paid
    store.save()
    return shift


def add_pay_schedule(store: DataStore, schedule: PaySchedule) -> PaySchedule:
    validate_schedule(schedule)
    store.add_pay_schedule(schedule)
    store.save()
    logger.info("pay_schedule_added", schedule_id=schedule.id, job_id=schedule.job_id, frequency=schedule.frequency.value)
    return schedule


def add_payslip(store: DataStore, payslip: Payslip) -> Payslip:
    store.add_payslip(payslip)
    store.save()
    if not payslip.is_valid:
        logger.warning(
            "payslip_net_pay_mismatch",
            payslip_id=payslip.id,
            net_pay=payslip.net_pay,
            gross_pay=payslip.gross_pay,
            total_deductions=payslip.total_deductions,
        )
    logger.info("payslip_added", payslip_id=payslip.id, job_id=payslip.job_id)
    return payslip


def delete_payslip(store: DataStore, payslip_id: str) -> None:
    store.get_payslip(payslip_id)
    del store.payslips[payslip_id]
    store.save()
    logger.info("payslip_deleted", payslip_id=payslip_id)


def add_preset(store: DataStore, job_id: str, preset: PresetShift) -> PresetShift:
    job = store.require_job(job_id)
    if preset.break_duration < 0:
        raise InvalidShift(preset.id, f"break cannot be negative, got {preset.break_duration}")
    if preset.duration < 0:
        raise InvalidShift(preset.id, f"{preset.break_duration}h break is longer than the shift")
    job.preset_shifts.append(preset)
    store.save()
    logger.info("preset_added", job_id=job_id, preset_id=preset.id, name=preset.name)
    return preset


def delete_preset(store: DataStore, job_id: str, key: str) -> None:
    job = store.require_job(job_id)
    preset = job.find_preset(key)
    if preset is None:
        raise RecordNotFound("preset", key)
    job.preset_shifts.remove(preset)
    store.save()
    logger.info("preset_deleted", job_id=job_id, preset_id=preset.id)


def parse_clock(value: str) -> time:
    return datetime.strptime(value, "%H:%M").time()


def shift_times(day: date, start: str, end: str) -> tuple[datetime, datetime]:
    """Timestamps for ``HH:MM`` clock times on ``day``; an earlier end runs past midnight."""
    t0 = datetime.combine(day, parse_clock(start))
    t1 = datetime.combine(day, parse_clock(end))
    if t1 < t0:
        t1 += timedelta(days=1)
    return t0, t1


def export_data(store: DataStore, exported_at: datetime) -> ExportData:
    return ExportData(
        jobs=store.list_jobs(),
        shifts=store.find_shifts(),
        theme_color=store.theme_color,
        export_date=exported_at,
    )


def import_data(store: DataStore, export: ExportData) -> None:
    """Replace jobs, shifts and theme with an export's contents. Schedules and payslips are kept."""
    for shift in export.shifts:
        validate_shift(shift)
    store.jobs = {job.id: job for job in export.jobs}
    store.shifts = {shift.id: shift for shift in export.shifts}
    store.theme_color = export.theme_color
    store.save()
    logger.info("data_imported", jobs=len(export.jobs), shifts=len(export.shifts), exported_at=export.export_date.isoformat())
