"""SnapshotStore: commit-addressed record of per-file analysis results."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ..exceptions import StoreUnavailableError
from ..logging_config import get_logger
from ..models import FileStatistics, Violation, ViolationSet
from .database import CriticDB
from .models import SaveResult, Snapshot, StoredViolation
from .reader import count_snapshots, find_by_commit_and_file, find_history, find_violations
from .writer import delete_snapshot, save_snapshot

logger = get_logger(__name__)


class SnapshotStore:
    """Facade over :class:`CriticDB` and the reader/writer functions.

    SQLite failures surface as :class:`StoreUnavailableError`.

    Usage::

        with SnapshotStore("git-critic.db") as store:
            result = store.save(stats, violations, commit, commit_time)
    """

    def __init__(self, db_path: str) -> None:
        self.db = CriticDB(db_path)

    def __enter__(self) -> "SnapshotStore":
        self.db.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.db.close()

    def open(self) -> "SnapshotStore":
        self.db.connect()
        return self

    def close(self) -> None:
        self.db.close()

    def create_schema(self, force: bool = False) -> None:
        self.db.create_schema(force=force)

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as e:
            raise StoreUnavailableError(
                f"snapshot store {self.db.db_path} failed to {action}: {e}",
                context={"database": str(self.db.db_path), "action": action},
                recovery_hint="recreate the store with 'git-critic init --force'",
            ) from e

    def find_by_commit_and_file(self, commit: str, filename: str) -> Optional[Snapshot]:
        with self._guard("read"):
            return find_by_commit_and_file(self.db.conn, commit, filename)

    def find_history(self, filename: str) -> list[Snapshot]:
        with self._guard("read"):
            return find_history(self.db.conn, filename)

    def find_violations(self, snapshot_id: int) -> list[StoredViolation]:
        with self._guard("read"):
            return find_violations(self.db.conn, snapshot_id)

    def count(self, commit: Optional[str] = None) -> int:
        with self._guard("read"):
            return count_snapshots(self.db.conn, commit)

    def violation_set(self, commit: str, filename: str) -> Optional[ViolationSet]:
        """Rebuild the violation set recorded for *filename* at *commit*."""
        snapshot = self.find_by_commit_and_file(commit, filename)
        if snapshot is None:
            return None
        return ViolationSet(
            v.to_violation(filename) for v in self.find_violations(snapshot.id)
        )

    def save(
        self,
        statistics: FileStatistics,
        violations: Sequence[Violation],
        commit: str,
        commit_time: Optional[int],
        force: bool = False,
    ) -> SaveResult:
        with self._guard("save"):
            result = save_snapshot(
                self.db.conn, statistics, violations, commit, commit_time, force=force
            )
        if result.replaced_id is not None:
            logger.info(
                "Replaced snapshot %d of %s on %s", result.replaced_id, result.filename, commit[:8]
            )
        return result

    def delete_snapshot(self, snapshot_id: int) -> None:
        with self._guard("delete"):
            delete_snapshot(self.db.conn, snapshot_id)
