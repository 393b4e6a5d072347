"""Abstract ledger interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from clawforge.ledger.models import AuditRecord, PublishParams, SubmitResult


@runtime_checkable
class Ledger(Protocol):
    """Append-only store of published audit records."""

    async def submit(self, params: PublishParams) -> SubmitResult:
        """Record *params* and return the assigned ids."""
        ...

    async def query(self, record_id: int) -> AuditRecord | None:
        """Look up a record, or None if it does not exist."""
        ...

    async def count(self) -> int:
        """Number of records published so far."""
        ...
