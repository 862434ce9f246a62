from __future__ import annotations
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, List, Optional
from uuid import uuid4

from .models import RecurrenceInterval, Shift
from .schedule import add_months

MAX_OCCURRENCES = 10_000


def occurrence_date(start: date, interval: RecurrenceInterval, index: int) -> Optional[date]:
    if interval == RecurrenceInterval.DAILY:
        return start + timedelta(days=index)
    if interval == RecurrenceInterval.WEEKLY:
        return start + timedelta(weeks=index)
    if interval == RecurrenceInterval.BIWEEKLY:
        return start + timedelta(weeks=2 * index)
    if interval == RecurrenceInterval.MONTHLY:
        return add_months(start, index)
    return None


def generate_occurrences(
    shift: Shift,
    until: date,
    id_factory: Callable[[], str] = lambda: str(uuid4()),
) -> List[Shift]:
    """Concrete copies of a recurring shift dated after it, up to its end date.

    ``until`` bounds open-ended series. Each copy keeps the parent's times of
    day and points back at it through ``parent_shift_id``.
    """
    if not shift.is_recurring:
        return []
    end = shift.recurrence.end_date or until
    occurrences: List[Shift] = []
    for index in range(1, MAX_OCCURRENCES + 1):
        day = occurrence_date(shift.date, shift.recurrence.interval, index)
        if day is None or day > end:
            break
        offset = day - shift.date
        occurrences.append(
            replace(
                shift,
                id=id_factory(),
                date=day,
                start_time=shift.start_time + offset,
                end_time=shift.end_time + offset,
                recurrence=None,
                parent_shift_id=shift.id,
            )
        )
    return occurrences


def propagate_series_update(parent: Shift, children: List[Shift]) -> List[Shift]:
    """Carry the parent's pay-relevant fields onto its occurrences, keeping their dates and times."""
    return [
        replace(
            child,
            job_id=parent.job_id,
            break_duration=parent.break_duration,
            shift_type=parent.shift_type,
            hourly_rate_override=parent.hourly_rate_override,
            notes=parent.notes,
        )
        for child in children
    ]
