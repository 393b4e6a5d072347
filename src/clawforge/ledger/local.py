"""SQLite-backed ledger for publishing audit records without a chain."""

from __future__ import annotations

import logging
import secrets

import aiosqlite

from clawforge.ledger.models import AuditRecord, PublishParams, SubmitResult
from clawforge.storage.repos import AuditRecordRepo

logger = logging.getLogger(__name__)


class LocalLedger:
    """Ledger that writes to the local database.

    Record ids increase from 1 in publish order; transaction ids are random
    32-byte hex strings shaped like chain transaction hashes.
    """

    def __init__(self, db: aiosqlite.Connection, auditor: str = "local") -> None:
        self._repo = AuditRecordRepo(db)
        self._auditor = auditor

    async def submit(self, params: PublishParams) -> SubmitResult:
        transaction_id = "0x" + secrets.token_hex(32)
        record_id = await self._repo.create(params, transaction_id, self._auditor)
        logger.info(
            "Published audit record %d for %s (score %d)",
            record_id,
            params.contract_hash,
            params.overall_score,
        )
        return SubmitResult(transaction_id=transaction_id, record_id=record_id)

    async def query(self, record_id: int) -> AuditRecord | None:
        return await self._repo.get(record_id)

    async def count(self) -> int:
        return await self._repo.count()
