"""REST API for published audit records."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from clawforge.ledger.local import LocalLedger

router = APIRouter(tags=["records"])


@router.get("/records")
async def count_records(request: Request):
    ledger = LocalLedger(request.app.state.db)
    return {"count": await ledger.count()}


@router.get("/records/{record_id}")
async def get_record(record_id: int, request: Request):
    ledger = LocalLedger(request.app.state.db)
    record = await ledger.query(record_id)
    if record is None:
        return JSONResponse(
            status_code=404,
            content={"detail": "Record not found"},
        )
    return record.to_dict()
