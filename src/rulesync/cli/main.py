"""Rulesync CLI: main entry point and shared utilities."""

from __future__ import annotations

import logging

import click
from rich.console import Console

console = Console()

OUTCOME_STYLES = {
    "created": "green",
    "appended": "yellow",
    "unchanged": "dim",
}


def get_outcome_style(outcome: str | None) -> str:
    """Return Rich style string for a sync outcome."""
    if outcome is None:
        return "red"
    return OUTCOME_STYLES.get(outcome, "white")


def setup_logging(verbose: int) -> None:
    """Configure logging based on verbosity (-v count)."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option("-v", "--verbose", count=True, help="Verbosity: -v per-target lines, -vv debug detail")
@click.pass_context
def main(ctx: click.Context, verbose: int):
    """Rulesync: keep IDE agent rule files pointing at one canonical document."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from rulesync.cli.sync_commands import plan, sync, targets  # noqa: E402

main.add_command(sync)
main.add_command(plan)
main.add_command(targets)
