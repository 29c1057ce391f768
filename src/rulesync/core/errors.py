"""Rulesync error types and utilities."""

from __future__ import annotations

import os
import stat
import tempfile
from enum import Enum
from pathlib import Path


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file next to the real target, fsyncs it,
    then atomically replaces the target. Symlinks are followed so the
    link itself survives, and the target's permission bits are kept
    (new files get the usual ``0o666 & ~umask``).
    """
    real = Path(path).resolve()
    try:
        mode = stat.S_IMODE(os.stat(real).st_mode)
    except FileNotFoundError:
        mode = 0o666 & ~_current_umask()

    fd, tmp = tempfile.mkstemp(dir=real.parent, prefix=f".{real.name}.", suffix=".tmp")
    try:
        os.chmod(tmp, mode)
        os.write(fd, content.encode("utf-8"))
        os.fsync(fd)
        os.close(fd)
        os.replace(tmp, str(real))
    except BaseException:
        try:
            os.close(fd)
        except OSError:
            pass
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class ProbeFailure(str, Enum):
    """Why an existence probe failed."""

    ABSENT = "absent"
    INACCESSIBLE = "inaccessible"


class RulesyncError(Exception):
    """Base exception for Rulesync."""

    pass


class ProbeError(RulesyncError):
    """An existence probe could not confirm the path."""

    def __init__(self, path: Path | str, failure: ProbeFailure, reason: str = "") -> None:
        self.path = Path(path)
        self.failure = failure
        self.reason = reason
        msg = f"{self.path}: {failure.value}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class StorageError(RulesyncError):
    """Reading or writing a file failed."""

    def __init__(self, path: Path | str, operation: str, reason: str = "") -> None:
        self.path = Path(path)
        self.operation = operation
        super().__init__(f"Cannot {operation} {self.path}: {reason}" if reason else f"Cannot {operation} {self.path}")


class SyncError(RulesyncError):
    """A sync pass could not complete."""

    pass


class TargetSyncError(SyncError):
    """A single shadow target failed to sync."""

    def __init__(self, target: str, path: Path | str, cause: Exception) -> None:
        self.target = target
        self.path = Path(path)
        super().__init__(f"Failed to sync {target}: {cause}")
