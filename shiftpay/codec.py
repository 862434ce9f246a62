from __future__ import annotations
import json
from dataclasses import asdict
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from .errors import DataImportError
from .models import (
    Deductions,
    ExportData,
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

CLOCK_FORMAT = "%H:%M"


def _date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def encode_preset(preset: PresetShift) -> Dict[str, Any]:
    payload = asdict(preset)
    payload["start"] = preset.start.strftime(CLOCK_FORMAT)
    payload["end"] = preset.end.strftime(CLOCK_FORMAT)
    return payload


def decode_preset(data: Dict[str, Any]) -> PresetShift:
    data = dict(data)
    data["start"] = time.fromisoformat(data["start"])
    data["end"] = time.fromisoformat(data["end"])
    return PresetShift(**data)


def encode_job(job: Job) -> Dict[str, Any]:
    payload = asdict(job)
    payload["preset_shifts"] = [encode_preset(p) for p in job.preset_shifts]
    return payload


def decode_job(data: Dict[str, Any]) -> Job:
    data = dict(data)
    data["preset_shifts"] = [decode_preset(p) for p in data.get("preset_shifts", [])]
    return Job(**data)


def encode_shift(shift: Shift) -> Dict[str, Any]:
    payload = asdict(shift)
    payload["date"] = shift.date.isoformat()
    payload["start_time"] = shift.start_time.isoformat()
    payload["end_time"] = shift.end_time.isoformat()
    payload["shift_type"] = shift.shift_type.value
    if shift.recurrence is not None:
        payload["recurrence"] = {
            "interval": shift.recurrence.interval.value,
            "end_date": _iso(shift.recurrence.end_date),
        }
    return payload


def decode_shift(data: Dict[str, Any]) -> Shift:
    data = dict(data)
    data["date"] = date.fromisoformat(data["date"])
    data["start_time"] = datetime.fromisoformat(data["start_time"])
    data["end_time"] = datetime.fromisoformat(data["end_time"])
    data["shift_type"] = ShiftType(data.get("shift_type") or ShiftType.REGULAR.value)
    recurrence = data.get("recurrence")
    if recurrence is not None:
        data["recurrence"] = Recurrence(
            interval=RecurrenceInterval(recurrence.get("interval", RecurrenceInterval.NONE.value)),
            end_date=_date(recurrence.get("end_date")),
        )
    return Shift(**data)


def encode_schedule(schedule: PaySchedule) -> Dict[str, Any]:
    payload = asdict(schedule)
    payload["frequency"] = schedule.frequency.value
    payload["start_date"] = schedule.start_date.isoformat()
    return payload


def decode_schedule(data: Dict[str, Any]) -> PaySchedule:
    data = dict(data)
    data["frequency"] = PayFrequency(data["frequency"])
    data["start_date"] = date.fromisoformat(data["start_date"])
    return PaySchedule(**data)


def encode_payslip(payslip: Payslip) -> Dict[str, Any]:
    payload = asdict(payslip)
    payload["pay_date"] = payslip.pay_date.isoformat()
    payload["period_start_date"] = payslip.period_start_date.isoformat()
    payload["period_end_date"] = payslip.period_end_date.isoformat()
    return payload


def decode_payslip(data: Dict[str, Any]) -> Payslip:
    data = dict(data)
    data["pay_date"] = date.fromisoformat(data["pay_date"])
    data["period_start_date"] = date.fromisoformat(data["period_start_date"])
    data["period_end_date"] = date.fromisoformat(data["period_end_date"])
    data["hours"] = HoursBreakdown(**data.get("hours", {}))
    data["gross"] = GrossPay(**data.get("gross", {}))
    data["deductions"] = Deductions(**data.get("deductions", {}))
    return Payslip(**data)


def encode_export(export: ExportData) -> Dict[str, Any]:
    return {
        "jobs": [encode_job(j) for j in export.jobs],
        "shifts": [encode_shift(s) for s in export.shifts],
        "theme_color": export.theme_color,
        "export_date": export.export_date.isoformat(),
    }


def decode_export(data: Dict[str, Any]) -> ExportData:
    return ExportData(
        jobs=[decode_job(j) for j in data.get("jobs", [])],
        shifts=[decode_shift(s) for s in data.get("shifts", [])],
        theme_color=data["theme_color"],
        export_date=datetime.fromisoformat(data["export_date"]),
    )


def dumps_export(export: ExportData) -> str:
    return json.dumps(encode_export(export), indent=2)


def loads_export(text: str) -> ExportData:
    try:
        return decode_export(json.loads(text))
    except (KeyError, TypeError, ValueError) as exc:
        raise DataImportError(f"Invalid export document: {exc}") from exc
