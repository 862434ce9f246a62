from __future__ import annotations
from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional

from .errors import InvalidScheduleConfiguration
from .models import PayFrequency, PayPeriod, PaySchedule

DEFAULT_CUSTOM_INTERVAL_DAYS = 14
MAX_PERIODS = 100_000


def add_months(anchor: date, months: int) -> date:
    """Move ``anchor`` by whole calendar months, clamping to the target month's last day."""
    month_index = anchor.month - 1 + months
    year = anchor.year + month_index // 12
    month = month_index % 12 + 1
    _, last_day = monthrange(year, month)
    return date(year, month, min(anchor.day, last_day))


def step_days(schedule: PaySchedule) -> Optional[int]:
    """Length of one step in days, or None for calendar-month schedules."""
    if schedule.frequency == PayFrequency.WEEKLY:
        return 7
    if schedule.frequency == PayFrequency.BIWEEKLY:
        return 14
    if schedule.frequency == PayFrequency.MONTHLY:
        return None
    interval = schedule.custom_day_interval
    if interval is None:
        interval = DEFAULT_CUSTOM_INTERVAL_DAYS
    if interval <= 0:
        raise InvalidScheduleConfiguration(schedule.id, f"custom interval must be positive, got {interval}")
    return interval


def boundary(schedule: PaySchedule, index: int) -> date:
    """The ``index``-th period start counted from the anchor (index 0 is the anchor)."""
    days = step_days(schedule)
    if days is None:
        return add_months(schedule.start_date, index)
    return schedule.start_date + timedelta(days=days * index)


def validate_schedule(schedule: PaySchedule) -> None:
    step_days(schedule)


def next_pay_date(schedule: PaySchedule, from_date: Optional[date] = None, max_periods: int = MAX_PERIODS) -> date:
    """First pay date on the anchor's phase strictly after ``from_date``.

    Without ``from_date`` (or with one before the anchor) this is one step
    forward from the anchor.
    """
    validate_schedule(schedule)
    index = 1
    candidate = boundary(schedule, index)
    if from_date is None:
        return candidate
    while candidate <= from_date:
        index += 1
        if index > max_periods:
            raise InvalidScheduleConfiguration(schedule.id, f"no pay date within {max_periods} periods of the anchor")
        candidate = boundary(schedule, index)
    return candidate


def period_id(schedule: PaySchedule, start: date) -> str:
    return f"{schedule.id}:{start.isoformat()}"


def periods_in_range(
    schedule: PaySchedule,
    range_start: date,
    range_end: date,
    max_periods: int = MAX_PERIODS,
) -> List[PayPeriod]:
    """Enumerate the schedule's periods that start inside ``[range_start, range_end]``.

    The walk always begins at the anchor so that every emitted period keeps the
    anchor's phase, however far back the anchor lies.
    """
    validate_schedule(schedule)
    periods: List[PayPeriod] = []
    index = 0
    current = boundary(schedule, index)
    while current <= range_end:
        if index >= max_periods:
            raise InvalidScheduleConfiguration(schedule.id, f"walk exceeded {max_periods} periods")
        following = boundary(schedule, index + 1)
        if following <= current:
            raise InvalidScheduleConfiguration(schedule.id, f"schedule does not advance past {current.isoformat()}")
        if current >= range_start:
            periods.append(
                PayPeriod(
                    id=period_id(schedule, current),
                    schedule_id=schedule.id,
                    start_date=current,
                    end_date=following - timedelta(days=1),
                    pay_date=following,
                )
            )
        current = following
        index += 1
    return periods


def period_containing(schedule: PaySchedule, day: date, max_periods: int = MAX_PERIODS) -> Optional[PayPeriod]:
    if day < schedule.start_date:
        validate_schedule(schedule)
        return None
    periods = periods_in_range(schedule, schedule.start_date, day, max_periods=max_periods)
    for period in reversed(periods):
        if period.contains(day):
            return period
    return None


def upcoming_pay_dates(
    schedule: PaySchedule,
    today: date,
    count: int = 5,
    horizon_months: int = 6,
    max_periods: int = MAX_PERIODS,
) -> List[date]:
    """Pay dates of the next ``count`` periods that start on or after ``today``.

    A period already in progress on ``today`` is left out even though its pay
    date is still ahead; only periods starting inside the horizon count.
    """
    periods = periods_in_range(schedule, today, add_months(today, horizon_months), max_periods=max_periods)
    return [period.pay_date for period in periods[:count]]


def active_schedule_for(job_id: str, schedules: Iterable[PaySchedule]) -> Optional[PaySchedule]:
    for schedule in schedules:
        if schedule.job_id == job_id and schedule.is_active:
            return schedule
    return None
