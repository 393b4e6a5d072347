"""CLI command: clawforge explore — query published audit records."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console
from rich.table import Table

from clawforge.config import ClawForgeConfig
from clawforge.ledger.local import LocalLedger
from clawforge.ledger.models import AuditRecord
from clawforge.storage.db import get_db

console = Console(stderr=True)


@click.command()
@click.option("--record", "record_id", type=int, default=None, help="Show one record.")
@click.pass_context
def explore(ctx: click.Context, record_id: int | None) -> None:
    """Show the published audit count, or a single record."""
    config: ClawForgeConfig = ctx.obj["config"]

    if record_id is None:
        count = asyncio.run(_count(config))
        console.print(f"ClawForge registry: {count} audit(s) published")
        return

    record = asyncio.run(_query(config, record_id))
    if record is None:
        console.print(f"[red]Record #{record_id} not found.[/red]")
        raise SystemExit(1)

    table = Table(title=f"Audit record #{record.record_id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    for key, value in record.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)


async def _count(config: ClawForgeConfig) -> int:
    db = await get_db(config.db_path)
    try:
        return await LocalLedger(db).count()
    finally:
        await db.close()


async def _query(config: ClawForgeConfig, record_id: int) -> AuditRecord | None:
    db = await get_db(config.db_path)
    try:
        return await LocalLedger(db).query(record_id)
    finally:
        await db.close()
