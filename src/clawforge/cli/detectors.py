"""CLI command: clawforge detectors — list the static detector catalog."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from clawforge.analyzers.static.engine import list_detectors

console = Console(stderr=True)


@click.command()
@click.pass_context
def detectors(ctx: click.Context) -> None:
    """List the static detectors and whether they are enabled."""
    disabled = {d.upper() for d in ctx.obj["config"].disabled_detectors}

    table = Table(title="Static detectors")
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Name")
    table.add_column("Enabled", no_wrap=True)
    table.add_column("Description")

    for d in list_detectors():
        enabled = "[red]no[/red]" if d.id.upper() in disabled else "[green]yes[/green]"
        table.add_row(d.id, d.name, enabled, d.description)
    console.print(table)
