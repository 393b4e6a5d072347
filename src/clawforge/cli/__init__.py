"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from clawforge import __version__
from clawforge.config import ClawForgeConfig


@click.group()
@click.version_option(version=__version__, prog_name="clawforge")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """ClawForge — heuristic security auditor for Solidity smart contracts."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = ClawForgeConfig.load(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid config: {e}") from e
    config.verbose = verbose

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _register_commands() -> None:
    from clawforge.cli.audit import audit  # noqa: F811
    from clawforge.cli.detectors import detectors  # noqa: F811
    from clawforge.cli.explore import explore  # noqa: F811
    from clawforge.cli.publish import publish  # noqa: F811
    from clawforge.cli.server import server  # noqa: F811

    main.add_command(audit)
    main.add_command(publish)
    main.add_command(explore)
    main.add_command(detectors)
    main.add_command(server)


_register_commands()
