"""SQLite snapshot store (``git-critic.db`` in the working directory by default)."""

import sqlite3
from pathlib import Path
from typing import Optional

from ..exceptions import StoreExistsError, StoreUnavailableError
from ..logging_config import get_logger

logger = get_logger(__name__)

_SCHEMA = (
    """
    CREATE TABLE tStats (
        id              INTEGER PRIMARY KEY AUTOINCREMENT,
        filename        TEXT    NOT NULL,
        sev_1           INTEGER NOT NULL DEFAULT 0,
        sev_2           INTEGER NOT NULL DEFAULT 0,
        sev_3           INTEGER NOT NULL DEFAULT 0,
        sev_4           INTEGER NOT NULL DEFAULT 0,
        sev_5           INTEGER NOT NULL DEFAULT 0,
        lines           INTEGER NOT NULL DEFAULT 0,
        avg_mccabe      NUMERIC NOT NULL DEFAULT 0,
        sub_count       INTEGER NOT NULL DEFAULT 0,
        violations      INTEGER NOT NULL DEFAULT 0,
        git_commit      TEXT    NOT NULL,
        git_commit_time INTEGER,
        date_inserted   TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE tCritic (
        file_id         INTEGER NOT NULL REFERENCES tStats(id),
        line_number     INTEGER,
        description     TEXT,
        explanation     TEXT,
        severity        INTEGER,
        policy          TEXT,
        source          TEXT,
        git_commit      TEXT,
        git_commit_time INTEGER,
        date_inserted   TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    "CREATE INDEX idx_stats_commit_file ON tStats(git_commit, filename)",
    "CREATE INDEX idx_stats_filename ON tStats(filename, date_inserted)",
    "CREATE INDEX idx_critic_file_id ON tCritic(file_id)",
)

# columns every statement in reader/writer relies on
_COLUMNS = {
    "tStats": {
        "id", "filename", "sev_1", "sev_2", "sev_3", "sev_4", "sev_5", "lines",
        "avg_mccabe", "sub_count", "violations", "git_commit", "git_commit_time",
        "date_inserted",
    },
    "tCritic": {
        "file_id", "line_number", "description", "explanation", "severity", "policy",
        "source", "git_commit", "git_commit_time", "date_inserted",
    },
}


class CriticDB:
    """Manages the SQLite database holding tStats/tCritic.

    Unlike an auto-migrating history file, the store is created explicitly
    with :meth:`create_schema`; :meth:`connect` refuses to open a missing
    file.

    Usage::

        with CriticDB("git-critic.db") as db:
            find_history(db.conn, "lib/Foo.pm")
    """

    def __init__(self, db_path: str) -> None:
        self.db_path: Path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active connection. Raises if not connected."""
        if self._conn is None:
            raise RuntimeError("CriticDB is not connected. Use as context manager or call connect().")
        return self._conn

    def exists(self) -> bool:
        return self.db_path.exists()

    # ── lifecycle ─────────────────────────────────────────────────

    def _open(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self.db_path))
            conn.execute("PRAGMA foreign_keys=ON")
        except sqlite3.Error as e:
            raise StoreUnavailableError(
                f"cannot open snapshot store {self.db_path}: {e}",
                context={"database": str(self.db_path)},
            )
        conn.row_factory = sqlite3.Row
        return conn

    def connect(self) -> sqlite3.Connection:
        """Open an existing store and check that its tables have the expected columns."""
        if not self.exists():
            raise StoreUnavailableError(
                f"snapshot store {self.db_path} does not exist",
                context={"database": str(self.db_path)},
            )
        conn = self._open()
        try:
            self._check_schema(conn)
        except sqlite3.DatabaseError as e:
            conn.close()
            raise StoreUnavailableError(
                f"{self.db_path} is not a git-critic store: {e}",
                context={"database": str(self.db_path)},
            )
        except StoreUnavailableError:
            conn.close()
            raise
        self._conn = conn
        logger.debug("Snapshot store connected at %s", self.db_path)
        return conn

    def _check_schema(self, conn: sqlite3.Connection) -> None:
        for table, expected in _COLUMNS.items():
            columns = {row["name"] for row in conn.execute(f"PRAGMA table_info({table})")}
            if not columns:
                raise StoreUnavailableError(
                    f"{self.db_path} has no {table} table",
                    context={"database": str(self.db_path), "table": table},
                )
            missing = sorted(expected - columns)
            if missing:
                raise StoreUnavailableError(
                    f"{self.db_path} has an incompatible {table} table "
                    f"(missing columns: {', '.join(missing)})",
                    context={"database": str(self.db_path), "table": table, "missing": missing},
                    recovery_hint="recreate the store with 'git-critic init --force'",
                )

    def close(self) -> None:
        """Close the connection if open."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "CriticDB":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── schema ────────────────────────────────────────────────────

    def create_schema(self, force: bool = False) -> None:
        """Create an empty store.

        Raises:
            StoreExistsError: the file exists and *force* is false; the
                existing store is left untouched
        """
        if self.exists():
            if not force:
                raise StoreExistsError(
                    f"database {self.db_path} exists. Use --force",
                    context={"database": str(self.db_path)},
                )
            self.close()
            self.db_path.unlink()
            logger.info("Removed existing store %s", self.db_path)

        conn = self._open()
        try:
            for statement in _SCHEMA:
                conn.execute(statement)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(
                f"cannot initialise snapshot store {self.db_path}: {e}",
                context={"database": str(self.db_path)},
            )
        finally:
            conn.close()
        logger.info("Created snapshot store %s", self.db_path)
