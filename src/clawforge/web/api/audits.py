"""REST API for running and browsing audits."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from clawforge.analyzers.ai.client import AIAnalyzer
from clawforge.audit import run_audit
from clawforge.storage.repos import ReportRepo

router = APIRouter(tags=["audits"])


class AuditRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str
    file_name: str = Field("Contract.sol", alias="fileName")
    static_only: bool = Field(False, alias="staticOnly")


@router.post("/audit")
async def create_audit(body: AuditRequest, request: Request):
    if not body.source.strip():
        return JSONResponse(
            status_code=400,
            content={"detail": "No source provided"},
        )

    config = request.app.state.config
    analyzer = None if body.static_only else AIAnalyzer.from_config(config)
    report = await run_in_threadpool(
        run_audit,
        body.source,
        body.file_name,
        analyzer=analyzer,
        ai=not body.static_only,
        disabled=config.disabled_detectors,
    )

    repo = ReportRepo(request.app.state.db)
    report_id = await repo.save(report)
    return {"id": report_id, "report": report.to_dict()}


@router.get("/audits")
async def list_audits(request: Request, limit: int = 50, offset: int = 0):
    repo = ReportRepo(request.app.state.db)
    return await repo.list_all(limit=limit, offset=offset)


@router.get("/audits/{report_id}")
async def get_audit(report_id: str, request: Request):
    repo = ReportRepo(request.app.state.db)
    result = await repo.get(report_id)
    if not result:
        return JSONResponse(
            status_code=404,
            content={"detail": "Audit not found"},
        )
    return result
