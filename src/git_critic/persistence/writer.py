"""Write one file's analysis into the store in a single transaction."""

import sqlite3
from typing import Optional, Sequence

from ..models import FileStatistics, Violation
from .models import SaveResult, SaveStatus
from .reader import find_by_commit_and_file


def _delete_snapshot(cur: sqlite3.Cursor, snapshot_id: int) -> None:
    # children first so no tCritic row is ever left without its tStats row
    cur.execute("DELETE FROM tCritic WHERE file_id = ?", (snapshot_id,))
    cur.execute("DELETE FROM tStats WHERE id = ?", (snapshot_id,))


def delete_snapshot(conn: sqlite3.Connection, snapshot_id: int) -> None:
    """Remove a snapshot and its violations."""
    cur = conn.cursor()
    try:
        cur.execute("BEGIN")
        _delete_snapshot(cur, snapshot_id)
        conn.commit()
    except Exception:
        conn.rollback()
        raise


def save_snapshot(
    conn: sqlite3.Connection,
    statistics: FileStatistics,
    violations: Sequence[Violation],
    commit: str,
    commit_time: Optional[int],
    force: bool = False,
) -> SaveResult:
    """Persist a file's statistics and violations for *commit*.

    The duplicate check, the optional removal of the previous snapshot and
    the inserts share one transaction: a file is either fully recorded or
    not at all.

    Parameters
    ----------
    conn:
        An open connection (from ``CriticDB.connect()``).
    statistics:
        Summary row; ``statistics.filename`` is the snapshot key.
    violations:
        Individual findings, stored as tCritic rows.
    commit, commit_time:
        Commit id and its timestamp.
    force:
        Replace an existing snapshot of the same file and commit.

    Returns
    -------
    SaveResult
        ``DUPLICATE`` without writing anything if a snapshot exists and
        *force* is false, otherwise ``SAVED`` with the new row id.
    """
    filename = statistics.filename
    cur = conn.cursor()
    try:
        cur.execute("BEGIN")

        existing = find_by_commit_and_file(conn, commit, filename)
        if existing is not None and not force:
            conn.rollback()
            return SaveResult(
                status=SaveStatus.DUPLICATE,
                filename=filename,
                commit=commit,
                existing=existing,
            )

        replaced_id = None
        if existing is not None:
            _delete_snapshot(cur, existing.id)
            replaced_id = existing.id

        cur.execute(
            """
            INSERT INTO tStats (
                filename, sev_1, sev_2, sev_3, sev_4, sev_5,
                lines, avg_mccabe, sub_count, violations,
                git_commit, git_commit_time
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                filename,
                *(statistics.sev(level) for level in range(1, 6)),
                statistics.lines,
                round(statistics.avg_mccabe, 2),
                statistics.subs,
                statistics.violations,
                commit,
                commit_time,
            ),
        )
        row_id = cur.lastrowid
        assert row_id is not None

        violation_rows = [
            (
                row_id,
                v.line,
                v.description,
                v.explanation,
                v.severity,
                v.policy,
                v.source,
                commit,
                commit_time,
            )
            for v in violations
        ]
        if violation_rows:
            cur.executemany(
                """
                INSERT INTO tCritic (
                    file_id, line_number, description, explanation,
                    severity, policy, source, git_commit, git_commit_time
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                violation_rows,
            )

        conn.commit()
        return SaveResult(
            status=SaveStatus.SAVED,
            filename=filename,
            commit=commit,
            row_id=row_id,
            replaced_id=replaced_id,
        )

    except Exception:
        conn.rollback()
        raise
