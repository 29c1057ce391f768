"""Idempotent sync of the canonical rules document and its shadow pointer files.

Each pass regenerates ``<canonical_root>/RULES.md`` and then, for every shadow
target under the repo root:

- creates the file with the pointer text if it does not exist,
- leaves it alone if it already mentions the canonical document,
- otherwise appends the pointer text after the existing content.

Shadow files are never truncated. Targets are processed one at a time in
their configured order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from rulesync.core.errors import (
    ProbeError,
    ProbeFailure,
    RulesyncError,
    StorageError,
    SyncError,
    TargetSyncError,
)
from rulesync.core.logging import SyncLogger
from rulesync.core.models import (
    DEFAULT_TARGETS,
    StatsRecord,
    SyncOutcome,
    SyncResult,
    SyncTarget,
    TargetResult,
)
from rulesync.render import (
    CANONICAL_FILENAME,
    POINTER_MARKER,
    render_pointer_content,
    render_rules_content,
)
from rulesync.storage import LocalStorage, Storage

logger = logging.getLogger(__name__)


class FileSynchronizer:
    """Applies the create / append / leave-alone policy to shadow files.

    Args:
        storage: Whole-file storage backend. Defaults to LocalStorage.
        targets: Ordered shadow targets. Defaults to DEFAULT_TARGETS.
        best_effort: Keep going after a target fails, recording the error
            in the result instead of raising.
        strict_probe: Raise when a path exists but cannot be inspected,
            instead of treating it as absent.
        sync_logger: Structured logger receiving pass events. A fresh
            SyncLogger is used per pass when omitted.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        *,
        targets: Sequence[SyncTarget] = DEFAULT_TARGETS,
        best_effort: bool = False,
        strict_probe: bool = False,
        sync_logger: SyncLogger | None = None,
    ):
        self.storage = storage if storage is not None else LocalStorage()
        self.targets = tuple(targets)
        self.best_effort = best_effort
        self.strict_probe = strict_probe
        self.sync_logger = sync_logger

    def path_exists(self, path: Path | str) -> bool:
        """Return True if ``path`` can be confirmed to exist.

        A path that is present but cannot be probed (permission denied, a
        parent that is a regular file...) counts as absent unless
        ``strict_probe`` is set. The later write then fails on its own.
        """
        try:
            self.storage.probe(Path(path))
        except ProbeError as e:
            if e.failure is ProbeFailure.INACCESSIBLE:
                if self.strict_probe:
                    raise
                logger.debug("Treating inaccessible path as absent: %s", e)
            return False
        return True

    def _inspect(self, path: Path, marker: str) -> tuple[SyncOutcome, str | None]:
        """Decide the outcome for ``path`` and return any existing text."""
        if not self.path_exists(path):
            return SyncOutcome.CREATED, None
        existing = self.storage.read_text(path)
        if marker in existing:
            return SyncOutcome.UNCHANGED, existing
        return SyncOutcome.APPENDED, existing

    def sync_file(self, path: Path | str, content: str, marker: str) -> SyncOutcome:
        """Create, append to, or leave ``path`` alone.

        Args:
            path: Shadow file to sync.
            content: Pointer text to write or append.
            marker: Substring proving the file is already synced.

        Returns:
            The outcome applied to the file.

        Raises:
            StorageError: If reading or writing the file fails.
        """
        path = Path(path)
        outcome, existing = self._inspect(path, marker)

        if outcome is SyncOutcome.CREATED:
            self.storage.write_text(path, content)
        elif outcome is SyncOutcome.APPENDED:
            logger.debug("Appending pointer to %s", path)
            self.storage.write_text(path, existing.strip() + "\n\n" + content)

        return outcome

    def plan(self, repo_root: Path | str, marker: str = POINTER_MARKER) -> list[TargetResult]:
        """Report what a sync would do to each target without writing."""
        results: list[TargetResult] = []
        for target in self.targets:
            path = target.resolve(repo_root)
            entry = TargetResult(target=target, path=path)
            try:
                entry.outcome, _ = self._inspect(path, marker)
            except RulesyncError as e:
                entry.error = str(e)
            results.append(entry)
        return results

    def synchronize(
        self,
        repo_root: Path | str,
        canonical_root: Path | str,
        project_name: str,
        stats: StatsRecord | Mapping[str, Any] | None = None,
    ) -> SyncResult:
        """Regenerate the canonical document and sync every shadow target.

        Args:
            repo_root: Directory holding the shadow files.
            canonical_root: Directory receiving RULES.md.
            project_name: Display name rendered into the document.
            stats: Index statistics; missing counts render as 0.

        Returns:
            SyncResult with the canonical path and the display names of the
            shadow files modified this run.

        Raises:
            SyncError: If the canonical document cannot be written.
            TargetSyncError: If a target fails and ``best_effort`` is off.
        """
        rules_path = Path(canonical_root) / CANONICAL_FILENAME
        sync_logger = self.sync_logger or SyncLogger()
        sync_logger.sync_start(project_name, len(self.targets))

        try:
            rules = render_rules_content(project_name, stats)
            try:
                self.storage.write_text(rules_path, rules)
            except StorageError as e:
                raise SyncError(f"Failed to write canonical document: {e}") from e
            sync_logger.canonical_written(rules_path, len(rules.encode("utf-8")))

            pointer = render_pointer_content()
            result = SyncResult(rules_path=rules_path)

            for target in self.targets:
                path = target.resolve(repo_root)
                entry = TargetResult(target=target, path=path)
                result.results.append(entry)
                sync_logger.target_start(target.name, path)

                try:
                    entry.outcome = self.sync_file(path, pointer, POINTER_MARKER)
                except RulesyncError as e:
                    entry.error = str(e)
                    sync_logger.target_failed(target.name, str(e))
                    if not self.best_effort:
                        raise TargetSyncError(target.name, path, e) from e
                    logger.warning("Skipping %s: %s", target.name, e)
                    result.errors.append(target.name)
                    continue

                sync_logger.target_synced(target.name, entry.outcome.value)
                if entry.outcome.modified:
                    result.pointer_files.append(target.name)

            return result
        finally:
            sync_logger.sync_finish()


def generate_ai_context_files(
    repo_root: Path | str,
    storage_root: Path | str,
    project_name: str,
    stats: StatsRecord | Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> SyncResult:
    """Sync AI context files on the local filesystem after an indexing pass.

    Extra keyword arguments are passed to FileSynchronizer.
    """
    return FileSynchronizer(LocalStorage(), **kwargs).synchronize(
        repo_root, storage_root, project_name, stats
    )
