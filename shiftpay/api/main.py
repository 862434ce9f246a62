from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..errors import DataImportError, InvalidScheduleConfiguration, InvalidShift, RecordNotFound, UnresolvedJobReference
from ..logging import configure_logging, get_logger
from . import data, health, jobs, payslips, shifts

settings = get_settings()
configure_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)

app.include_router(health.router)
app.include_router(jobs.router)
app.include_router(payslips.router)
app.include_router(shifts.router)
app.include_router(data.router)


@app.exception_handler(InvalidScheduleConfiguration)
@app.exception_handler(InvalidShift)
def unprocessable_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(RecordNotFound)
@app.exception_handler(UnresolvedJobReference)
def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DataImportError)
def import_error_handler(request: Request, exc: DataImportError) -> JSONResponse:
    logger.warning("data_import_rejected", error=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "ShiftPay API running", "environment": settings.env}
