from __future__ import annotations


class ShiftPayError(Exception):
    """Base class for errors raised by shiftpay."""


class InvalidScheduleConfiguration(ShiftPayError, ValueError):
    """A pay schedule cannot step forward (bad interval or runaway walk)."""

    def __init__(self, schedule_id: str, reason: str) -> None:
        super().__init__(f"Pay schedule {schedule_id} is invalid: {reason}")
        self.schedule_id = schedule_id
        self.reason = reason


class UnresolvedJobReference(ShiftPayError, KeyError):
    """A record points at a job id that is not in the job collection.

    Payroll computations never raise this; they degrade to a zero rate. It is
    only raised where an existing job is required, e.g. recording a new shift.
    """

    def __init__(self, job_id: str) -> None:
        super().__init__(job_id)
        self.job_id = job_id

    def __str__(self) -> str:
        return f"Job {self.job_id} not found"


class RecordNotFound(ShiftPayError, KeyError):
    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(record_id)
        self.kind = kind
        self.record_id = record_id

    def __str__(self) -> str:
        return f"{self.kind.capitalize()} {self.record_id} not found"


class DataImportError(ShiftPayError, ValueError):
    """Stored or imported JSON could not be decoded into shiftpay records."""


class InvalidShift(ShiftPayError, ValueError):
    """A shift or preset would record a negative duration or a non-positive rate."""

    def __init__(self, shift_id: str, reason: str) -> None:
        super().__init__(f"Shift {shift_id} is invalid: {reason}")
        self.shift_id = shift_id
        self.reason = reason
