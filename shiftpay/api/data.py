from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, Depends

from .. import codec, tracking
from ..errors import DataImportError
from ..storage import DataStore
from .deps import get_store

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
def export_data(store: DataStore = Depends(get_store)) -> dict[str, Any]:
    return codec.encode_export(tracking.export_data(store, datetime.now(timezone.utc)))


@router.post("/import")
def import_data(payload: dict[str, Any] = Body(...), store: DataStore = Depends(get_store)) -> dict[str, int]:
    try:
        export = codec.decode_export(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise DataImportError(f"Invalid export document: {exc}") from exc
    tracking.import_data(store, export)
    return {"jobs": len(export.jobs), "shifts": len(export.shifts)}
