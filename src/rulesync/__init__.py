"""Rulesync - keep IDE agent rule files pointing at one canonical document.

Usage:
    from rulesync import generate_ai_context_files

    result = generate_ai_context_files(
        "/path/to/repo",
        "/path/to/repo/.gitnexus",
        "my-project",
        {"files": 120, "nodes": 940},
    )
    print(result.rules_path, result.pointer_files)
"""

from rulesync.core.errors import (
    ProbeError,
    ProbeFailure,
    RulesyncError,
    StorageError,
    SyncError,
    TargetSyncError,
)
from rulesync.core.models import (
    DEFAULT_TARGETS,
    StatsRecord,
    SyncOutcome,
    SyncResult,
    SyncTarget,
    TargetResult,
)
from rulesync.render import POINTER_MARKER, render_pointer_content, render_rules_content
from rulesync.storage import LocalStorage, Storage
from rulesync.sync import FileSynchronizer, generate_ai_context_files

__all__ = [
    "DEFAULT_TARGETS",
    "FileSynchronizer",
    "LocalStorage",
    "POINTER_MARKER",
    "ProbeError",
    "ProbeFailure",
    "RulesyncError",
    "StatsRecord",
    "Storage",
    "StorageError",
    "SyncError",
    "SyncOutcome",
    "SyncResult",
    "SyncTarget",
    "TargetResult",
    "TargetSyncError",
    "generate_ai_context_files",
    "render_pointer_content",
    "render_rules_content",
]

__version__ = "0.1.0"
