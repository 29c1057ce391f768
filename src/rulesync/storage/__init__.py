"""Storage backends for the synchronizer."""

from rulesync.storage.base import Storage
from rulesync.storage.local import LocalStorage

__all__ = [
    "LocalStorage",
    "Storage",
]
