"""Structured logging and verbosity levels for Rulesync passes."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # Summary table only
    VERBOSE = 1   # + per-target outcome lines
    DEBUG = 2     # + canonical document details, timing


@dataclass
class TargetLog:
    """Per-target sync record."""

    name: str
    path: str = ""
    outcome: str | None = None
    error: str | None = None
    time_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "outcome": self.outcome,
            "error": self.error,
            "time_seconds": self.time_seconds,
        }


@dataclass
class SyncLog:
    """Structured log of a complete sync pass.

    The dict format is::

        {
            "run_id": "20260101T120000Z",
            "project": "Demo",
            "rules_path": "/repo/.gitnexus/RULES.md",
            "targets": {
                "AGENTS.md": {"outcome": "created", ...},
                ...
            },
            "modified": 3,
            "failed": 0,
            "total_time": 0.01,
        }
    """

    run_id: str = ""
    project: str = ""
    rules_path: str = ""
    targets: dict[str, TargetLog] = field(default_factory=dict)
    total_time: float = 0.0

    def get_or_create_target(self, name: str) -> TargetLog:
        """Get existing target log or create a new one."""
        if name not in self.targets:
            self.targets[name] = TargetLog(name=name)
        return self.targets[name]

    @property
    def modified(self) -> int:
        return sum(1 for t in self.targets.values() if t.outcome in ("created", "appended"))

    @property
    def failed(self) -> int:
        return sum(1 for t in self.targets.values() if t.error is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "project": self.project,
            "rules_path": self.rules_path,
            "targets": {name: t.to_dict() for name, t in self.targets.items()},
            "modified": self.modified,
            "failed": self.failed,
            "total_time": self.total_time,
        }


_OUTCOME_MARKS = {
    "created": "[green]+[/green]",
    "appended": "[yellow]~[/yellow]",
    "unchanged": "[cyan]=[/cyan]",
}


class SyncLogger:
    """Structured logger for sync passes.

    Writes JSONL log files to log_dir/ and optionally emits
    console output via Rich based on verbosity level. A logger can be
    reused: each sync_start after a finished pass begins a new SyncLog
    and a new JSONL file.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
    ):
        self.verbosity = verbosity
        self.log_dir = log_dir
        self._log_file = None
        self._log_path: Path | None = None
        self._run_start: float = 0.0
        self._target_start: float = 0.0
        self._finished = False
        self._open_run()

    def _open_run(self) -> None:
        """Start a fresh SyncLog and, with a log_dir, its JSONL file."""
        self.sync_log = SyncLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._finished = False

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._log_path = self.log_dir / f"{self.sync_log.run_id}.jsonl"
            self._log_file = open(self._log_path, "a", encoding="utf-8")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file."""
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            self._log_file.write(json.dumps(event) + "\n")
            self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        """Print to console if verbosity is high enough."""
        if self.verbosity >= min_verbosity:
            from rich.console import Console

            Console().print(message)

    # -- Run lifecycle --

    def sync_start(self, project: str, target_count: int) -> None:
        """Log the start of a sync pass."""
        if self._finished:
            self._open_run()
        self._run_start = time.time()
        self.sync_log.project = project

        self._write_event({
            "event": "sync_start",
            "project": project,
            "target_count": target_count,
        })

    def canonical_written(self, path: Path, size: int) -> None:
        """Log the regeneration of the canonical document."""
        self.sync_log.rules_path = str(path)

        self._write_event({
            "event": "canonical_written",
            "path": str(path),
            "bytes": size,
        })

        self._console_print(
            f"  [bold]Rules:[/bold] {path} [dim]({size} bytes)[/dim]",
            Verbosity.DEBUG,
        )

    # -- Target events --

    def target_start(self, name: str, path: Path) -> None:
        """Log the start of one target."""
        self._target_start = time.time()
        self.sync_log.get_or_create_target(name).path = str(path)

    def target_synced(self, name: str, outcome: str) -> None:
        """Log the outcome of one target."""
        elapsed = time.time() - self._target_start
        target = self.sync_log.get_or_create_target(name)
        target.outcome = outcome
        target.time_seconds = elapsed

        self._write_event({
            "event": "target_synced",
            "target": name,
            "outcome": outcome,
            "time_seconds": round(elapsed, 3),
        })

        mark = _OUTCOME_MARKS.get(outcome, " ")
        self._console_print(f"    {mark} {name} ({outcome})", Verbosity.VERBOSE)

    def target_failed(self, name: str, error: str) -> None:
        """Log that one target could not be synced."""
        elapsed = time.time() - self._target_start
        target = self.sync_log.get_or_create_target(name)
        target.error = error
        target.time_seconds = elapsed

        self._write_event({
            "event": "target_failed",
            "target": name,
            "error": error,
        })

        self._console_print(f"    [red]![/red] {name}: {error}", Verbosity.VERBOSE)

    def sync_finish(self) -> None:
        """Log the end of a sync pass and close its log file."""
        self.sync_log.total_time = time.time() - self._run_start

        self._write_event({
            "event": "sync_finish",
            "modified": self.sync_log.modified,
            "failed": self.sync_log.failed,
            "total_time": round(self.sync_log.total_time, 3),
        })

        self._console_print(
            f"  [dim]{self.sync_log.modified} modified, {self.sync_log.failed} failed "
            f"({self.sync_log.total_time:.2f}s)[/dim]",
            Verbosity.DEBUG,
        )
        self.close()
        self._finished = True

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None
