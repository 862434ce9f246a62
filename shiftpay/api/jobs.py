from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import payroll
from ..config import get_settings
from ..storage import DataStore
from .deps import get_store
from .schemas import JobOut, NextPayDateOut, PayPeriodOut, PayslipOut

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _require_job(store: DataStore, job_id: str) -> None:
    if store.get_job(job_id) is None:
        raise HTTPException(status_code=404, detail="Job not found")


@router.get("", response_model=list[JobOut])
def list_jobs(active: bool = False, store: DataStore = Depends(get_store)):
    jobs = store.list_jobs()
    if active:
        jobs = [j for j in jobs if j.is_active]
    return [JobOut.from_job(j) for j in jobs]


@router.get("/{job_id}/pay-periods", response_model=list[PayPeriodOut])
def list_pay_periods(
    job_id: str,
    start: date = Query(...),
    end: date = Query(...),
    store: DataStore = Depends(get_store),
):
    _require_job(store, job_id)
    if end < start:
        raise HTTPException(status_code=422, detail="end must not be before start")
    periods = payroll.periods_for_job(store, job_id, start, end, max_periods=get_settings().max_schedule_periods)
    return [PayPeriodOut.from_period(p) for p in periods]


@router.get("/{job_id}/next-pay-date", response_model=NextPayDateOut)
def next_pay_date(job_id: str, from_date: Optional[date] = None, store: DataStore = Depends(get_store)):
    _require_job(store, job_id)
    pay_date = payroll.next_pay_date_for_job(store, job_id, from_date, max_periods=get_settings().max_schedule_periods)
    return NextPayDateOut(job_id=job_id, pay_date=pay_date)


@router.get("/{job_id}/upcoming-pay-dates", response_model=list[date])
def upcoming_pay_dates(
    job_id: str,
    today: Optional[date] = None,
    count: Optional[int] = Query(default=None, gt=0),
    store: DataStore = Depends(get_store),
):
    _require_job(store, job_id)
    settings = get_settings()
    return payroll.upcoming_pay_dates_for_job(
        store,
        job_id,
        today or date.today(),
        count=count or settings.upcoming_pay_dates,
        horizon_months=settings.upcoming_horizon_months,
    )


@router.get("/{job_id}/payslip-draft", response_model=PayslipOut)
def payslip_draft(job_id: str, day: date = Query(..., alias="date"), store: DataStore = Depends(get_store)):
    _require_job(store, job_id)
    settings = get_settings()
    period = payroll.pay_period_for(store, job_id, day, max_periods=settings.max_schedule_periods)
    if period is None:
        raise HTTPException(status_code=404, detail="No pay period contains that date")
    payslip = payroll.draft_payslip_for_period(store, period, job_id, multipliers=settings.multipliers)
    return PayslipOut.from_payslip(payslip)
