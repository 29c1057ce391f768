"""Base class for the storage capability used by the synchronizer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class Storage(ABC):
    """Whole-file text storage.

    The synchronizer only ever probes, reads, and replaces complete files, so
    this is all an implementation has to provide. Tests inject an in-memory
    implementation; production uses LocalStorage.
    """

    @abstractmethod
    def probe(self, path: Path) -> None:
        """Check that ``path`` exists.

        Raises:
            ProbeError: With ``failure`` set to ABSENT or INACCESSIBLE.
        """
        ...

    @abstractmethod
    def read_text(self, path: Path) -> str:
        """Return the full text of ``path``.

        Raises:
            StorageError: If the file cannot be read.
        """
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        """Replace the full contents of ``path``.

        Must be all-or-nothing: on failure the previous contents survive.

        Raises:
            StorageError: If the file cannot be written.
        """
        ...
