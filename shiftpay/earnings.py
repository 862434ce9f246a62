from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .models import Job, Shift, ShiftType


@dataclass(frozen=True)
class RateMultipliers:
    """Pay multiplier applied on top of the effective rate, per shift type."""

    regular: float = 1.0
    overtime: float = 1.5
    holiday: float = 2.0

    def for_type(self, shift_type: ShiftType) -> float:
        if shift_type == ShiftType.OVERTIME:
            return self.overtime
        if shift_type == ShiftType.HOLIDAY:
            return self.holiday
        return self.regular


DEFAULT_MULTIPLIERS = RateMultipliers()


def effective_rate(shift: Shift, job: Optional[Job]) -> float:
    """Override rate, else the job's hourly rate, else zero for an unknown job."""
    if shift.hourly_rate_override is not None:
        return shift.hourly_rate_override
    if job is not None:
        return job.hourly_rate
    return 0.0


def shift_earnings(shift: Shift, job: Optional[Job], multipliers: RateMultipliers = DEFAULT_MULTIPLIERS) -> float:
    return shift.duration * effective_rate(shift, job) * multipliers.for_type(shift.shift_type)


def index_jobs(jobs: Iterable[Job]) -> Mapping[str, Job]:
    return {job.id: job for job in jobs}


def resolve_job(job_id: str, jobs: Mapping[str, Job]) -> Optional[Job]:
    return jobs.get(job_id)
