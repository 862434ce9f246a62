from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import get_settings
from ..earnings import index_jobs
from ..filters import TimeWindow, filter_shifts, window_range
from ..models import ShiftType
from ..storage import DataStore
from .deps import get_store
from .schemas import ShiftOut

router = APIRouter(prefix="/shifts", tags=["shifts"])


@router.get("", response_model=list[ShiftOut])
def list_shifts(
    job_id: Optional[list[str]] = Query(default=None),
    shift_type: Optional[list[ShiftType]] = Query(default=None),
    is_paid: Optional[bool] = None,
    min_earnings: Optional[float] = None,
    max_earnings: Optional[float] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    window: Optional[TimeWindow] = None,
    offset: int = 0,
    today: Optional[date] = None,
    store: DataStore = Depends(get_store),
):
    if window is not None:
        start, end = window_range(window, today or date.today(), offset)
    if start and end and end < start:
        raise HTTPException(status_code=422, detail="end must not be before start")
    multipliers = get_settings().multipliers
    jobs = index_jobs(store.jobs.values())
    shifts = filter_shifts(
        store.find_shifts(),
        jobs.values(),
        job_ids=job_id,
        shift_types=shift_type,
        is_paid=is_paid,
        min_earnings=min_earnings,
        max_earnings=max_earnings,
        start=start,
        end=end,
        multipliers=multipliers,
    )
    return [ShiftOut.from_shift(s, jobs.get(s.job_id), multipliers) for s in shifts]
