"""CLI command: clawforge server — serve the audit API on localhost."""

from __future__ import annotations

import asyncio

import click
from rich.console import Console

from clawforge.config import ClawForgeConfig

console = Console(stderr=True)


@click.command()
@click.option("--port", type=int, default=None, help="Port to listen on (default: 8471).")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    show_default=True,
    help="uvicorn log level.",
)
@click.pass_context
def server(ctx: click.Context, port: int | None, log_level: str) -> None:
    """Serve POST /api/audit and the stored audits and records."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]uvicorn is not installed.[/red] "
            "Install the web extra: pip install 'clawforge[web]'"
        )
        raise SystemExit(1)

    from clawforge.web.app import create_app

    config: ClawForgeConfig = ctx.obj["config"]
    if port is not None:
        config.web_port = port

    base = f"http://{config.web_host}:{config.web_port}"
    console.print(f"[bold]ClawForge[/bold] audit API at [cyan]{base}/api[/cyan]")
    console.print(f"  Docs: {base}/api/docs")
    console.print(f"  Database: {config.db_path}\n")

    async def _serve() -> None:
        app = await create_app(config)
        await uvicorn.Server(
            uvicorn.Config(app, host=config.web_host, port=config.web_port, log_level=log_level)
        ).serve()

    asyncio.run(_serve())
