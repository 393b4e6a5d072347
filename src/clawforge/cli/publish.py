"""CLI command: clawforge publish <report.json> — record an audit on the ledger."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from clawforge.config import ClawForgeConfig
from clawforge.ledger.local import LocalLedger
from clawforge.ledger.models import PublishParams, SubmitResult
from clawforge.report.generator import ReportError, load_report
from clawforge.storage.db import get_db

console = Console(stderr=True)


@click.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False))
@click.option("--chain-id", type=int, default=None, help="Target chain id (default: 97).")
@click.option("--uri", default="", help="Report URI (IPFS or HTTPS).")
@click.option("--audited-contract", default=None, help="Deployed contract address.")
@click.pass_context
def publish(
    ctx: click.Context,
    report: str,
    chain_id: int | None,
    uri: str,
    audited_contract: str | None,
) -> None:
    """Publish an audit report's summary as a ledger record."""
    config: ClawForgeConfig = ctx.obj["config"]

    try:
        audit_report = load_report(report)
        params = PublishParams.from_report(
            audit_report,
            report_uri=uri,
            chain_id=chain_id if chain_id is not None else config.chain_id,
            audited_contract=audited_contract,
        )
    except ReportError as e:
        console.print(f"[red]Cannot publish:[/red] {e}")
        raise SystemExit(1)

    if not audit_report.verify_hash():
        console.print("[yellow]Warning: report hash does not match report contents.[/yellow]")

    s = audit_report.summary
    console.print(f"Publishing audit for [cyan]{s.contract_name}[/cyan]")
    console.print(f"  Contract hash: {s.contract_hash}")
    console.print(f"  Score: {s.overall_score}/100")
    console.print(
        f"  Findings: {s.total_findings} "
        f"({s.critical}C {s.high}H {s.medium}M {s.low}L {s.info}I)"
    )

    result = asyncio.run(_submit(config, params))
    console.print("[green]Audit published.[/green]")
    console.print(f"  Record ID: #{result.record_id}")
    console.print(f"  Transaction: {result.transaction_id}")


async def _submit(config: ClawForgeConfig, params: PublishParams) -> SubmitResult:
    db = await get_db(config.db_path)
    try:
        return await LocalLedger(db).submit(params)
    finally:
        await db.close()
