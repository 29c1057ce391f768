"""Shared test fixtures for Rulesync."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from rulesync.core.errors import ProbeError, ProbeFailure, StorageError
from rulesync.storage.base import Storage


@dataclass
class MemoryStorage(Storage):
    """In-memory whole-file storage with injectable failures."""

    files: dict[Path, str] = field(default_factory=dict)
    inaccessible: set[Path] = field(default_factory=set)
    fail_reads: set[Path] = field(default_factory=set)
    fail_writes: set[Path] = field(default_factory=set)
    writes: list[Path] = field(default_factory=list)

    def probe(self, path: Path) -> None:
        if path in self.inaccessible:
            raise ProbeError(path, ProbeFailure.INACCESSIBLE, "permission denied")
        if path not in self.files:
            raise ProbeError(path, ProbeFailure.ABSENT)

    def read_text(self, path: Path) -> str:
        if path in self.fail_reads or path not in self.files:
            raise StorageError(path, "read", "simulated failure")
        return self.files[path]

    def write_text(self, path: Path, content: str) -> None:
        if path in self.fail_writes:
            raise StorageError(path, "write", "simulated failure")
        self.files[path] = content
        self.writes.append(path)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Provide an empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Empty repository directory on disk."""
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    from rulesync.config import reset_settings

    for name in ("RULESYNC_STORAGE_DIR", "RULESYNC_BEST_EFFORT", "RULESYNC_STRICT_PROBE", "RULESYNC_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()
