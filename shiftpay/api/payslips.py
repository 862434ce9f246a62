from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import payroll
from ..config import get_settings
from ..storage import DataStore
from .deps import get_store
from .schemas import ComparisonOut, PayslipOut, SummaryOut

router = APIRouter(tags=["payslips"])


@router.get("/payslips", response_model=list[PayslipOut])
def list_payslips(job_id: str | None = None, store: DataStore = Depends(get_store)):
    return [PayslipOut.from_payslip(p) for p in store.find_payslips(job_id)]


@router.get("/payslips/{payslip_id}/comparison", response_model=ComparisonOut)
def payslip_comparison(payslip_id: str, store: DataStore = Depends(get_store)):
    comparison = payroll.comparison_for_payslip(store, payslip_id, get_settings().multipliers)
    return ComparisonOut.from_comparison(comparison, store.get_job(comparison.payslip.job_id))


@router.get("/summary", response_model=SummaryOut)
def earnings_summary(start: date = Query(...), end: date = Query(...), store: DataStore = Depends(get_store)):
    if end < start:
        raise HTTPException(status_code=422, detail="end must not be before start")
    totals, by_job = payroll.summary(store, start, end, get_settings().multipliers)
    return SummaryOut.from_summary(totals, by_job)
