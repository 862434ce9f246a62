from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Optional

NET_PAY_TOLERANCE = 0.01


class ShiftType(str, Enum):
    REGULAR = "regular"
    OVERTIME = "overtime"
    HOLIDAY = "holiday"


class RecurrenceInterval(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class PayFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


@dataclass
class PresetShift:
    """A reusable start/end/break template; an end earlier than the start runs past midnight."""

    id: str
    name: str
    start: time
    end: time
    break_duration: float = 0.0  # hours

    def times_on(self, day: date) -> tuple[datetime, datetime]:
        start = datetime.combine(day, self.start)
        end = datetime.combine(day, self.end)
        if end < start:
            end += timedelta(days=1)
        return start, end

    @property
    def duration(self) -> float:
        start, end = self.times_on(date(2000, 1, 1))
        return (end - start).total_seconds() / 3600.0 - self.break_duration


@dataclass
class Job:
    id: str
    name: str
    hourly_rate: float
    color: str = "Blue"
    is_active: bool = True
    preset_shifts: List[PresetShift] = field(default_factory=list)

    def find_preset(self, key: str) -> Optional[PresetShift]:
        """Look a preset up by id, then by case-insensitive name."""
        for preset in self.preset_shifts:
            if preset.id == key:
                return preset
        for preset in self.preset_shifts:
            if preset.name.lower() == key.lower():
                return preset
        return None


@dataclass
class Recurrence:
    interval: RecurrenceInterval = RecurrenceInterval.NONE
    end_date: Optional[date] = None


@dataclass
class Shift:
    id: str
    job_id: str
    date: date
    start_time: datetime
    end_time: datetime
    break_duration: float = 0.0  # hours
    shift_type: ShiftType = ShiftType.REGULAR
    notes: str = ""
    is_paid: bool = False
    hourly_rate_override: Optional[float] = None
    recurrence: Optional[Recurrence] = None
    parent_shift_id: Optional[str] = None

    @property
    def duration(self) -> float:
        """Worked hours: the shift span minus the break. Never clamped."""
        span = (self.end_time - self.start_time).total_seconds() / 3600.0
        return span - self.break_duration

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None and self.recurrence.interval != RecurrenceInterval.NONE


@dataclass
class PaySchedule:
    id: str
    job_id: str
    frequency: PayFrequency
    start_date: date  # anchor; the first period starts here
    custom_day_interval: Optional[int] = None
    is_active: bool = True


@dataclass
class PayPeriod:
    id: str
    schedule_id: Optional[str]
    start_date: date
    end_date: date
    pay_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class HoursBreakdown:
    regular: float = 0.0
    overtime: float = 0.0
    holiday: float = 0.0

    @property
    def total(self) -> float:
        return self.regular + self.overtime + self.holiday


@dataclass
class GrossPay:
    regular: float = 0.0
    overtime: float = 0.0
    holiday: float = 0.0
    bonuses: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return self.regular + self.overtime + self.holiday + self.bonuses + self.other


@dataclass
class Deductions:
    tax: float = 0.0
    insurance: float = 0.0
    retirement: float = 0.0
    other: float = 0.0

    @property
    def total(self) -> float:
        return self.tax + self.insurance + self.retirement + self.other


@dataclass
class Payslip:
    id: str
    job_id: str
    pay_date: date
    period_start_date: date
    period_end_date: date
    hours: HoursBreakdown = field(default_factory=HoursBreakdown)
    gross: GrossPay = field(default_factory=GrossPay)
    deductions: Deductions = field(default_factory=Deductions)
    net_pay: float = 0.0
    pay_period_id: Optional[str] = None
    notes: str = ""

    @property
    def total_hours(self) -> float:
        return self.hours.total

    @property
    def gross_pay(self) -> float:
        return self.gross.total

    @property
    def total_deductions(self) -> float:
        return self.deductions.total

    @property
    def is_valid(self) -> bool:
        """Net pay agrees with gross minus deductions to within a cent."""
        return abs(self.net_pay - (self.gross_pay - self.total_deductions)) < NET_PAY_TOLERANCE


@dataclass(frozen=True)
class ExpectedTotals:
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    holiday_hours: float = 0.0
    regular_pay: float = 0.0
    overtime_pay: float = 0.0
    holiday_pay: float = 0.0

    @property
    def total_hours(self) -> float:
        return self.regular_hours + self.overtime_hours + self.holiday_hours

    @property
    def total_pay(self) -> float:
        return self.regular_pay + self.overtime_pay + self.holiday_pay


@dataclass(frozen=True)
class PayComparison:
    payslip: Payslip
    period: PayPeriod
    expected_shifts: List[Shift]
    job_hourly_rate: float
    job_resolved: bool
    expected: ExpectedTotals
    hours_difference: float
    regular_hours_difference: float
    overtime_hours_difference: float
    holiday_hours_difference: float
    pay_difference: float
    hours_accuracy: float
    pay_accuracy: float


@dataclass(frozen=True)
class EarningsSummary:
    start_date: date
    end_date: date
    total_hours: float
    total_earnings: float
    shift_count: int


@dataclass(frozen=True)
class JobEarnings:
    job: Job
    hours: float
    earnings: float


@dataclass
class ExportData:
    jobs: List[Job]
    shifts: List[Shift]
    theme_color: str
    export_date: datetime
