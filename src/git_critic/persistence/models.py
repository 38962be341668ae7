"""Persisted row models for the snapshot store."""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from ..exceptions import DuplicateSnapshotError
from ..models import Violation


@dataclass
class Snapshot:
    """One tStats row: a file's analysis summary at a commit."""

    id: int
    filename: str
    sev_1: int = 0
    sev_2: int = 0
    sev_3: int = 0
    sev_4: int = 0
    sev_5: int = 0
    lines: int = 0
    avg_mccabe: float = 0.0
    sub_count: int = 0
    violations: int = 0
    git_commit: str = ""
    git_commit_time: Optional[int] = None
    date_inserted: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Snapshot":
        return cls(**{k: row[k] for k in row.keys()})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class StoredViolation:
    """One tCritic row, owned by a :class:`Snapshot` via ``file_id``."""

    file_id: int
    line_number: int
    description: str
    explanation: str
    severity: int
    policy: str
    source: str
    git_commit: str
    git_commit_time: Optional[int] = None
    date_inserted: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "StoredViolation":
        return cls(**{k: row[k] for k in row.keys()})

    def to_violation(self, filename: Optional[str] = None) -> Violation:
        return Violation(
            policy=self.policy,
            severity=self.severity,
            line=self.line_number,
            description=self.description,
            explanation=self.explanation or "",
            source=self.source or "",
            filename=filename,
        )


def duplicate_snapshot(filename: str, commit: str) -> DuplicateSnapshotError:
    """The warning value for a (file, commit) pair that is already stored."""
    return DuplicateSnapshotError(
        "Skipping %s stats on commit %s already exists. Use --force to re-analyze"
        % (filename, commit[:5] + "..."),
        context={"file": filename, "commit": commit},
    )


class SaveStatus(Enum):
    SAVED = "saved"
    DUPLICATE = "duplicate"


@dataclass
class SaveResult:
    """Outcome of saving one file's analysis.

    ``DUPLICATE`` means a snapshot for (file, commit) already existed and
    nothing was written; ``replaced_id`` is set when ``force`` removed one.
    """

    status: SaveStatus
    filename: str
    commit: str
    row_id: Optional[int] = None
    replaced_id: Optional[int] = None
    existing: Optional[Snapshot] = field(default=None, repr=False)

    @property
    def saved(self) -> bool:
        return self.status is SaveStatus.SAVED

    @property
    def error(self) -> Optional[DuplicateSnapshotError]:
        """The recoverable error a ``DUPLICATE`` result stands for, else ``None``."""
        if self.status is SaveStatus.DUPLICATE:
            return duplicate_snapshot(self.filename, self.commit)
        return None
