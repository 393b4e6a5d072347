"""CLI command: clawforge audit <file.sol> — static + AI analysis and report."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from clawforge.analyzers.ai.client import AIAnalyzer
from clawforge.analyzers.models import Severity
from clawforge.audit import run_audit
from clawforge.config import ClawForgeConfig
from clawforge.report.generator import AuditReport, write_report

console = Console(stderr=True)

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
    Severity.INFO: "dim",
}


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the JSON report (default: ./clawforge-reports).",
)
@click.option("--static-only", is_flag=True, help="Skip AI analysis.")
@click.option("--ai-only", is_flag=True, help="Skip static analysis.")
@click.option(
    "--disable",
    "-d",
    multiple=True,
    help="Detector id to skip (repeatable), e.g. CF-010.",
)
@click.option("--no-write", is_flag=True, help="Do not write the report file.")
@click.option("--save", is_flag=True, help="Also store the report in the local database.")
@click.pass_context
def audit(
    ctx: click.Context,
    file: str,
    output: str | None,
    static_only: bool,
    ai_only: bool,
    disable: tuple[str, ...],
    no_write: bool,
    save: bool,
) -> None:
    """Analyze a Solidity contract for security vulnerabilities."""
    config: ClawForgeConfig = ctx.obj["config"]
    path = Path(file)

    if path.suffix.lower() != ".sol":
        console.print("[red]Only .sol (Solidity) files are supported.[/red]")
        raise SystemExit(1)
    if static_only and ai_only:
        console.print("[red]--static-only and --ai-only are mutually exclusive.[/red]")
        raise SystemExit(1)

    source = path.read_text(encoding="utf-8", errors="replace")
    console.print(
        f"[bold]ClawForge[/bold] auditing [cyan]{path.name}[/cyan] "
        f"({len(source.splitlines())} lines)\n"
    )

    report = run_audit(
        source,
        str(path),
        analyzer=AIAnalyzer.from_config(config),
        static=not ai_only,
        ai=not static_only,
        disabled=[*config.disabled_detectors, *disable],
    )

    _print_findings(report)
    _print_summary(report)

    if not no_write:
        out_dir = Path(output) if output else config.report_dir
        report_path = write_report(report, out_dir)
        console.print(f"Report: [cyan]{report_path}[/cyan]")
        console.print(f"  Publish with: clawforge publish {report_path}")

    if save:
        report_id = asyncio.run(_save_report(config, report))
        console.print(f"Saved as [cyan]{report_id}[/cyan]")

    if report.has_critical:
        console.print(f"\n[red]{report.summary.critical} critical finding(s)[/red]")
        sys.exit(1)


def _print_findings(report: AuditReport) -> None:
    if not report.findings:
        console.print("[green]No findings.[/green]")
        return

    table = Table(title="Findings", show_lines=False)
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Line", justify="right")
    table.add_column("Title")
    table.add_column("Source", style="dim")

    for f in report.findings:
        color = SEVERITY_COLORS.get(f.severity, "white")
        table.add_row(
            f.id,
            f"[{color}]{f.severity.value}[/{color}]",
            str(f.location.line) if f.location.line else "-",
            f.title,
            f.detector.value,
        )
    console.print(table)


def _print_summary(report: AuditReport) -> None:
    s = report.summary
    console.print(f"\nScore: {s.overall_score}/100")
    console.print(
        f"Findings: {s.total_findings} "
        f"({s.critical}C {s.high}H {s.medium}M {s.low}L {s.info}I)"
    )
    if report.ai_summary:
        console.print(f"AI: {report.ai_summary}")


async def _save_report(config: ClawForgeConfig, report: AuditReport) -> str:
    from clawforge.storage.db import get_db
    from clawforge.storage.repos import ReportRepo

    db = await get_db(config.db_path)
    try:
        return await ReportRepo(db).save(report)
    finally:
        await db.close()
