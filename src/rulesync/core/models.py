"""Core data models for Rulesync."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class StatsRecord:
    """Index statistics rendered into the canonical document.

    Every count is optional; absent (or ``None``) counts render as 0.
    Values are not validated.
    """

    files: int = 0
    nodes: int = 0  # symbols
    edges: int = 0  # relationships
    communities: int = 0  # functional clusters
    processes: int = 0  # execution flows

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> StatsRecord:
        """Build a record from a loose mapping, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SyncTarget:
    """One shadow file kept pointing at the canonical document."""

    file: str  # relative to the repo root
    name: str = ""

    def __post_init__(self) -> None:
        if not self.file:
            msg = "file is required"
            raise ValueError(msg)
        if not self.name:
            object.__setattr__(self, "name", self.file)

    def resolve(self, repo_root: Path | str) -> Path:
        """Absolute path of this target under ``repo_root``."""
        return Path(repo_root) / self.file


DEFAULT_TARGETS: tuple[SyncTarget, ...] = (
    SyncTarget(file="AGENTS.md", name="AGENTS.md"),
    SyncTarget(file=".cursorrules", name=".cursorrules"),
    SyncTarget(file=".windsurfrules", name=".windsurfrules"),
)


class SyncOutcome(str, Enum):
    """Result of applying the write policy to one shadow file."""

    CREATED = "created"
    APPENDED = "appended"
    UNCHANGED = "unchanged"

    @property
    def modified(self) -> bool:
        return self is not SyncOutcome.UNCHANGED


@dataclass
class TargetResult:
    """Outcome for one target in a sync pass."""

    target: SyncTarget
    path: Path
    outcome: SyncOutcome | None = None
    error: str | None = None

    @property
    def modified(self) -> bool:
        return self.outcome is not None and self.outcome.modified

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.target.name,
            "path": str(self.path),
            "outcome": self.outcome.value if self.outcome else None,
            "error": self.error,
        }


@dataclass
class SyncResult:
    """Result of a full sync pass."""

    rules_path: Path
    pointer_files: list[str] = field(default_factory=list)  # display names modified this run
    results: list[TargetResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)  # display names that failed (best-effort only)

    @property
    def success(self) -> bool:
        return not self.errors

    def outcome_for(self, name: str) -> SyncOutcome | None:
        """Outcome recorded for the target with display name ``name``."""
        for result in self.results:
            if result.target.name == name:
                return result.outcome
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rules_path": str(self.rules_path),
            "pointer_files": list(self.pointer_files),
            "results": [r.to_dict() for r in self.results],
            "errors": list(self.errors),
        }
