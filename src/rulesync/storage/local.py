"""Local filesystem storage."""

from __future__ import annotations

from pathlib import Path

from rulesync.core.errors import ProbeError, ProbeFailure, StorageError, atomic_write
from rulesync.storage.base import Storage


class LocalStorage(Storage):
    """Read and atomically replace files on the local filesystem."""

    def probe(self, path: Path) -> None:
        try:
            Path(path).stat()
        except FileNotFoundError as e:
            raise ProbeError(path, ProbeFailure.ABSENT, e.strerror or "") from e
        except OSError as e:
            # permission denied, NotADirectoryError on a parent, name too long...
            raise ProbeError(path, ProbeFailure.INACCESSIBLE, e.strerror or str(e)) from e

    def read_text(self, path: Path) -> str:
        try:
            # newline="" keeps CRLF files byte-for-byte when appended to
            with open(path, encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(path, "read", str(e)) from e

    def write_text(self, path: Path, content: str) -> None:
        path = Path(path)
        try:
            # follow symlinks so a dangling link still gets its target directory
            path.resolve().parent.mkdir(parents=True, exist_ok=True)
            atomic_write(path, content)
        except OSError as e:
            raise StorageError(path, "write", str(e)) from e
