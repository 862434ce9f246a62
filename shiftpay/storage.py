from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from . import codec
from .errors import DataImportError, RecordNotFound, UnresolvedJobReference
from .logging import get_logger
from .models import Job, PaySchedule, Payslip, Shift

logger = get_logger(__name__)

DEFAULT_THEME = "Blue"

JOBS_KEY = "jobs"
SHIFTS_KEY = "shifts"
PAY_SCHEDULES_KEY = "pay_schedules"
PAYSLIPS_KEY = "payslips"
THEME_COLOR_KEY = "theme_color"


class PayrollRepository(Protocol):
    """Read access the payroll use cases need; callers inject an implementation."""

    def get_job(self, job_id: str) -> Optional[Job]: ...

    def list_jobs(self) -> List[Job]: ...

    def find_shifts(self, job_id: Optional[str] = None) -> List[Shift]: ...

    def find_pay_schedules(self, job_id: Optional[str] = None) -> List[PaySchedule]: ...

    def find_payslips(self, job_id: Optional[str] = None) -> List[Payslip]: ...

    def get_payslip(self, payslip_id: str) -> Payslip: ...


class DataStore:
    """Key-value JSON blob store: one named collection per record type.

    With no ``path`` the store lives only in memory and ``save`` is a no-op.
    """

    def __init__(self, path: Optional[Path] = None, theme_color: str = DEFAULT_THEME) -> None:
        self.path = path
        self.jobs: Dict[str, Job] = {}
        self.shifts: Dict[str, Shift] = {}
        self.pay_schedules: Dict[str, PaySchedule] = {}
        self.payslips: Dict[str, Payslip] = {}
        self.theme_color = theme_color
        if path is not None and path.exists():
            self.load()

    def load(self) -> None:
        try:
            content = json.loads(self.path.read_text())
            self.jobs = {j["id"]: codec.decode_job(j) for j in content.get(JOBS_KEY, [])}
            self.shifts = {s["id"]: codec.decode_shift(s) for s in content.get(SHIFTS_KEY, [])}
            self.pay_schedules = {p["id"]: codec.decode_schedule(p) for p in content.get(PAY_SCHEDULES_KEY, [])}
            self.payslips = {p["id"]: codec.decode_payslip(p) for p in content.get(PAYSLIPS_KEY, [])}
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise DataImportError(f"Could not read store at {self.path}: {exc}") from exc
        self.theme_color = content.get(THEME_COLOR_KEY) or self.theme_color
        logger.debug("store_loaded", path=str(self.path), jobs=len(self.jobs), shifts=len(self.shifts))

    def save(self) -> None:
        if self.path is None:
            return
        payload = {
            JOBS_KEY: [codec.encode_job(j) for j in self.jobs.values()],
            SHIFTS_KEY: [codec.encode_shift(s) for s in self.shifts.values()],
            PAY_SCHEDULES_KEY: [codec.encode_schedule(p) for p in self.pay_schedules.values()],
            PAYSLIPS_KEY: [codec.encode_payslip(p) for p in self.payslips.values()],
            THEME_COLOR_KEY: self.theme_color,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2))
        logger.debug("store_saved", path=str(self.path))

    def add_job(self, job: Job) -> None:
        self.jobs[job.id] = job

    def add_shift(self, shift: Shift) -> None:
        self.shifts[shift.id] = shift

    def add_pay_schedule(self, schedule: PaySchedule) -> None:
        self.pay_schedules[schedule.id] = schedule

    def add_payslip(self, payslip: Payslip) -> None:
        self.payslips[payslip.id] = payslip

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get(job_id)

    def require_job(self, job_id: str) -> Job:
        try:
            return self.jobs[job_id]
        except KeyError:
            raise UnresolvedJobReference(job_id) from None

    def get_shift(self, shift_id: str) -> Shift:
        try:
            return self.shifts[shift_id]
        except KeyError:
            raise RecordNotFound("shift", shift_id) from None

    def get_pay_schedule(self, schedule_id: str) -> PaySchedule:
        try:
            return self.pay_schedules[schedule_id]
        except KeyError:
            raise RecordNotFound("pay schedule", schedule_id) from None

    def get_payslip(self, payslip_id: str) -> Payslip:
        try:
            return self.payslips[payslip_id]
        except KeyError:
            raise RecordNotFound("payslip", payslip_id) from None

    def list_jobs(self) -> List[Job]:
        """Return jobs ordered by display name."""

        return sorted(self.jobs.values(), key=lambda j: j.name.lower())

    def find_shifts(self, job_id: Optional[str] = None) -> List[Shift]:
        shifts = list(self.shifts.values())
        if job_id:
            shifts = [s for s in shifts if s.job_id == job_id]
        return sorted(shifts, key=lambda s: (s.date, s.start_time))

    def find_pay_schedules(self, job_id: Optional[str] = None) -> List[PaySchedule]:
        schedules = list(self.pay_schedules.values())
        if job_id:
            schedules = [p for p in schedules if p.job_id == job_id]
        return schedules

    def find_payslips(self, job_id: Optional[str] = None) -> List[Payslip]:
        payslips = list(self.payslips.values())
        if job_id:
            payslips = [p for p in payslips if p.job_id == job_id]
        return sorted(payslips, key=lambda p: p.pay_date)

    def reset(self) -> None:
        """Forget jobs and shifts; the theme is kept."""
        self.jobs = {}
        self.shifts = {}
