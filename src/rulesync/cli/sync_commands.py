"""Sync, plan, and targets commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich import box
from rich.table import Table

from rulesync.cli.main import console, get_outcome_style

PLAN_LABELS = {
    "created": "would create",
    "appended": "would append",
    "unchanged": "up to date",
}

repo_argument = click.argument(
    "repo",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)


def _load_stats(stats_file: Path | None, overrides: dict[str, int | None]) -> dict:
    """Merge a JSON stats file with per-count command-line overrides."""
    data: dict = {}
    if stats_file is not None:
        try:
            data = json.loads(stats_file.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise click.BadParameter(str(e), param_hint="--stats") from e
        if not isinstance(data, dict):
            raise click.BadParameter("expected a JSON object", param_hint="--stats")
    data.update({k: v for k, v in overrides.items() if v is not None})
    return data


def _canonical_root(repo: Path, storage_dir: str | None) -> Path:
    from rulesync.config import get_settings

    settings = get_settings()
    if storage_dir:
        path = Path(storage_dir)
        return path if path.is_absolute() else repo / path
    return settings.canonical_root(repo)


@click.command()
@repo_argument
@click.option("--storage-dir", default=None, help="Canonical storage directory (default: .gitnexus)")
@click.option("--name", "project_name", default=None, help="Project display name (default: repo directory name)")
@click.option(
    "--stats",
    "stats_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with index statistics",
)
@click.option("--files", type=int, default=None, help="Indexed file count")
@click.option("--nodes", type=int, default=None, help="Symbol count")
@click.option("--edges", type=int, default=None, help="Relationship count")
@click.option("--communities", type=int, default=None, help="Functional cluster count")
@click.option("--processes", type=int, default=None, help="Execution flow count")
@click.option("--best-effort", is_flag=True, default=False, help="Continue after a target fails")
@click.option("--log-dir", default=None, type=click.Path(file_okay=False, path_type=Path), help="Write JSONL event logs here")
@click.pass_context
def sync(
    ctx: click.Context,
    repo: Path,
    storage_dir: str | None,
    project_name: str | None,
    stats_file: Path | None,
    files: int | None,
    nodes: int | None,
    edges: int | None,
    communities: int | None,
    processes: int | None,
    best_effort: bool,
    log_dir: Path | None,
):
    """Regenerate RULES.md and sync the IDE pointer files.

    REPO defaults to the current directory.
    """
    from rulesync.config import get_settings
    from rulesync.core.errors import RulesyncError
    from rulesync.core.logging import SyncLogger, Verbosity
    from rulesync.sync import FileSynchronizer

    settings = get_settings()
    repo = repo.resolve()
    canonical_root = _canonical_root(repo, storage_dir)
    stats = _load_stats(
        stats_file,
        {
            "files": files,
            "nodes": nodes,
            "edges": edges,
            "communities": communities,
            "processes": processes,
        },
    )

    verbose = (ctx.obj or {}).get("verbose", 0)
    sync_logger = SyncLogger(
        verbosity=Verbosity(min(verbose, Verbosity.DEBUG)),
        log_dir=log_dir or settings.log_dir,
    )
    synchronizer = FileSynchronizer(
        best_effort=best_effort or settings.best_effort,
        strict_probe=settings.strict_probe,
        sync_logger=sync_logger,
    )

    try:
        result = synchronizer.synchronize(repo, canonical_root, project_name or repo.name, stats)
    except RulesyncError as e:
        console.print(f"[red]Sync failed:[/red] {e}")
        raise SystemExit(1) from e

    table = Table(title="Sync Results", box=box.ROUNDED)
    table.add_column("Target", style="bold", no_wrap=True)
    table.add_column("Outcome", no_wrap=True)
    for entry in result.results:
        outcome = entry.outcome.value if entry.outcome else None
        style = get_outcome_style(outcome)
        table.add_row(entry.target.name, f"[{style}]{outcome or entry.error}[/{style}]")

    console.print(table)
    console.print(f"[green]Rules:[/green] {result.rules_path}")

    if result.pointer_files:
        console.print(f"Updated: {', '.join(result.pointer_files)}")
    else:
        console.print("[dim]All pointer files already up to date.[/dim]")

    if not result.success:
        console.print(f"[red]Failed:[/red] {', '.join(result.errors)}")
        sys.exit(1)


@click.command()
@repo_argument
def plan(repo: Path):
    """Show what a sync would do to each pointer file, without writing.

    REPO defaults to the current directory.
    """
    from rulesync.config import get_settings
    from rulesync.sync import FileSynchronizer

    settings = get_settings()
    synchronizer = FileSynchronizer(strict_probe=settings.strict_probe)

    table = Table(title="Sync Plan", box=box.ROUNDED)
    table.add_column("Target", style="bold", no_wrap=True)
    table.add_column("Path", style="dim")
    table.add_column("Action", no_wrap=True)

    for entry in synchronizer.plan(repo.resolve()):
        outcome = entry.outcome.value if entry.outcome else None
        style = get_outcome_style(outcome)
        label = PLAN_LABELS.get(outcome, entry.error or "error")
        table.add_row(entry.target.name, str(entry.path), f"[{style}]{label}[/{style}]")

    console.print(table)


@click.command()
def targets():
    """List the pointer files kept in sync."""
    from rulesync.core.models import DEFAULT_TARGETS
    from rulesync.render import POINTER_MARKER

    table = Table(title="Pointer Targets", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("File")

    for target in DEFAULT_TARGETS:
        table.add_row(target.name, target.file)

    console.print(table)
    console.print(f"[dim]Marker:[/dim] {POINTER_MARKER}")
