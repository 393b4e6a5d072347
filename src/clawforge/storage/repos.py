"""Repository classes for async CRUD operations on SQLite."""

from __future__ import annotations

import json
import time
import uuid

import aiosqlite

from clawforge.ledger.models import AuditRecord, PublishParams
from clawforge.report.generator import AuditReport


class ReportRepo:
    """Stored audit reports, full JSON plus the columns we list by."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def save(self, report: AuditReport) -> str:
        report_id = uuid.uuid4().hex[:12]
        summary = report.summary
        await self._db.execute(
            "INSERT INTO audit_reports "
            "(id, contract_name, contract_hash, report_hash, overall_score, "
            "total_findings, critical, high, report_json, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                report_id,
                summary.contract_name,
                summary.contract_hash,
                summary.report_hash,
                summary.overall_score,
                summary.total_findings,
                summary.critical,
                summary.high,
                report.to_json(indent=None),
                time.time(),
            ),
        )
        await self._db.commit()
        return report_id

    async def get(self, report_id: str) -> dict | None:
        cursor = await self._db.execute(
            "SELECT * FROM audit_reports WHERE id = ?", (report_id,)
        )
        row = await cursor.fetchone()
        if not row:
            return None
        result = dict(row)
        result["report"] = json.loads(result.pop("report_json"))
        return result

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[dict]:
        cursor = await self._db.execute(
            "SELECT id, contract_name, contract_hash, report_hash, overall_score, "
            "total_findings, critical, high, created_at "
            "FROM audit_reports ORDER BY created_at DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [dict(row) async for row in cursor]


class AuditRecordRepo:
    """Append-only published audit records."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create(
        self, params: PublishParams, transaction_id: str, auditor: str = ""
    ) -> int:
        cursor = await self._db.execute(
            "INSERT INTO audit_records "
            "(transaction_id, contract_hash, audited_contract, critical_count, "
            "high_count, medium_count, low_count, info_count, overall_score, "
            "report_hash, report_uri, chain_id, auditor, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                transaction_id,
                params.contract_hash,
                params.audited_contract,
                params.critical_count,
                params.high_count,
                params.medium_count,
                params.low_count,
                params.info_count,
                params.overall_score,
                params.report_hash,
                params.report_uri,
                params.chain_id,
                auditor,
                time.time(),
            ),
        )
        await self._db.commit()
        return cursor.lastrowid

    async def get(self, record_id: int) -> AuditRecord | None:
        cursor = await self._db.execute(
            "SELECT * FROM audit_records WHERE record_id = ?", (record_id,)
        )
        row = await cursor.fetchone()
        return AuditRecord.from_row(dict(row)) if row else None

    async def list_by_contract(self, contract_hash: str) -> list[int]:
        cursor = await self._db.execute(
            "SELECT record_id FROM audit_records WHERE contract_hash = ? "
            "ORDER BY record_id",
            (contract_hash,),
        )
        return [row[0] async for row in cursor]

    async def count(self) -> int:
        cursor = await self._db.execute("SELECT COUNT(*) FROM audit_records")
        row = await cursor.fetchone()
        return row[0] if row else 0
