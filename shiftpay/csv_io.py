from __future__ import annotations
import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from .models import Shift, ShiftType


CSV_HEADERS = [
    "id",
    "job_id",
    "date",
    "start_time",
    "end_time",
    "break_duration",
    "shift_type",
    "is_paid",
    "hourly_rate_override",
    "notes",
    "parent_shift_id",
]


def export_shifts(path: Path, shifts: Iterable[Shift]) -> None:
    with path.open("w", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_HEADERS)
        writer.writeheader()
        for shift in shifts:
            writer.writerow(
                {
                    "id": shift.id,
                    "job_id": shift.job_id,
                    "date": shift.date.isoformat(),
                    "start_time": shift.start_time.isoformat(),
                    "end_time": shift.end_time.isoformat(),
                    "break_duration": shift.break_duration,
                    "shift_type": shift.shift_type.value,
                    "is_paid": shift.is_paid,
                    "hourly_rate_override": "" if shift.hourly_rate_override is None else shift.hourly_rate_override,
                    "notes": shift.notes,
                    "parent_shift_id": shift.parent_shift_id or "",
                }
            )


def import_shifts(path: Path) -> list[Shift]:
    shifts: list[Shift] = []
    with path.open() as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            override = row.get("hourly_rate_override")
            shifts.append(
                Shift(
                    id=row["id"],
                    job_id=row["job_id"],
                    date=date.fromisoformat(row["date"]),
                    start_time=datetime.fromisoformat(row["start_time"]),
                    end_time=datetime.fromisoformat(row["end_time"]),
                    break_duration=float(row.get("break_duration") or 0.0),
                    shift_type=ShiftType(row.get("shift_type") or ShiftType.REGULAR.value),
                    is_paid=row.get("is_paid", "False") in ("True", "true"),
                    hourly_rate_override=float(override) if override else None,
                    notes=row.get("notes") or "",
                    parent_shift_id=row.get("parent_shift_id") or None,
                )
            )
    return shifts
