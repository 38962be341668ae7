"""Read snapshots and stored violations back from the store."""

import sqlite3
from typing import Optional

from .models import Snapshot, StoredViolation


def find_by_commit_and_file(
    conn: sqlite3.Connection, commit: str, filename: str
) -> Optional[Snapshot]:
    """The snapshot of *filename* at *commit*, or ``None``."""
    row = conn.execute(
        """
        SELECT *
          FROM tStats
         WHERE git_commit = ? AND filename = ?
         ORDER BY id DESC
        """,
        (commit, filename),
    ).fetchone()
    return Snapshot.from_row(row) if row is not None else None


def find_history(conn: sqlite3.Connection, filename: str) -> list[Snapshot]:
    """Every snapshot of *filename*, newest insertion first."""
    rows = conn.execute(
        """
        SELECT *
          FROM tStats
         WHERE filename = ?
         ORDER BY date_inserted DESC, id DESC
        """,
        (filename,),
    ).fetchall()
    return [Snapshot.from_row(r) for r in rows]


def find_violations(conn: sqlite3.Connection, snapshot_id: int) -> list[StoredViolation]:
    """Violations recorded for one snapshot, in line order."""
    rows = conn.execute(
        """
        SELECT *
          FROM tCritic
         WHERE file_id = ?
         ORDER BY line_number, rowid
        """,
        (snapshot_id,),
    ).fetchall()
    return [StoredViolation.from_row(r) for r in rows]


def count_snapshots(conn: sqlite3.Connection, commit: Optional[str] = None) -> int:
    """Number of tStats rows, optionally restricted to one commit."""
    if commit is None:
        row = conn.execute("SELECT COUNT(*) FROM tStats").fetchone()
    else:
        row = conn.execute("SELECT COUNT(*) FROM tStats WHERE git_commit = ?", (commit,)).fetchone()
    return int(row[0])
