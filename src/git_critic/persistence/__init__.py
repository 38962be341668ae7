"""Snapshot persistence: SQLite store of per-file, per-commit analysis results."""

from .database import CriticDB
from .models import SaveResult, SaveStatus, Snapshot, StoredViolation, duplicate_snapshot
from .store import SnapshotStore

__all__ = [
    "CriticDB",
    "SaveResult",
    "SaveStatus",
    "Snapshot",
    "SnapshotStore",
    "StoredViolation",
    "duplicate_snapshot",
]
