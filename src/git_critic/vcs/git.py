"""Git access via subprocess.

One :class:`GitRepository` is created per run and handed to every component
that needs version-control access.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..exceptions import VcsError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TreeEntry:
    """One line of ``git ls-tree``: a blob, a sub-tree or a submodule commit."""

    mode: str
    kind: str  # "blob" | "tree" | "commit"
    oid: str
    name: str


class GitTree:
    """Handle on a git tree object; entries are listed lazily."""

    def __init__(self, repo: "GitRepository", oid: str) -> None:
        self.repo = repo
        self.oid = oid

    def __repr__(self) -> str:
        return f"GitTree({self.oid[:12]})"

    def entries(self) -> Iterator[TreeEntry]:
        """Entries in the order git stores them."""
        out = self.repo.run("ls-tree", "-z", self.oid)
        for record in out.split("\0"):
            if not record:
                continue
            meta, name = record.split("\t", 1)
            mode, kind, oid = meta.split()
            yield TreeEntry(mode=mode, kind=kind, oid=oid, name=name)

    def subtree(self, entry: TreeEntry) -> "GitTree":
        return GitTree(self.repo, entry.oid)


class GitRepository:
    """Minimal git accessor for one working copy."""

    def __init__(self, repo_path: Optional[str] = None) -> None:
        self.repo_path = str(Path(repo_path or ".").resolve())

    def __repr__(self) -> str:
        return f"GitRepository({self.repo_path!r})"

    def run(self, *args: str) -> str:
        """Run a git command in the repository and return stdout.

        Raises:
            VcsError: git is missing or the command exits non-zero
        """
        cmd = ["git", "-C", self.repo_path, *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            raise VcsError(
                "git executable not found",
                recovery_hint="install git or add it to PATH",
            )
        if result.returncode != 0:
            raise VcsError(
                f"git {args[0]} failed: {result.stderr.strip()}",
                context={"repo": self.repo_path, "args": list(args)},
            )
        return result.stdout

    def is_repository(self) -> bool:
        try:
            self.run("rev-parse", "--git-dir")
        except VcsError:
            return False
        return True

    def resolve(self, rev: str) -> str:
        """Resolve a revision expression to a full commit id."""
        return self.run("rev-parse", "--verify", f"{rev}^{{commit}}").strip()

    def head(self, back: int = 0) -> str:
        """Commit id of ``HEAD`` or ``HEAD~back``."""
        return self.resolve(f"HEAD~{back}" if back else "HEAD")

    def parent(self, rev: str, index: int = 0) -> str:
        """Commit id of the *index*-th parent of *rev*."""
        return self.resolve(f"{rev}^{index + 1}")

    def commit_time(self, rev: str) -> int:
        """Committer timestamp (seconds since the epoch) of *rev*."""
        return int(self.run("show", "-s", "--format=%ct", self.resolve(rev)).strip())

    def tree(self, rev: str) -> GitTree:
        """Root tree of the commit *rev*."""
        oid = self.run("rev-parse", "--verify", f"{rev}^{{tree}}").strip()
        return GitTree(self, oid)

    def read_file(self, path: str, rev: str) -> str:
        """Content of *path* as stored at commit *rev*."""
        return self.run("show", f"{rev}:{path}")

    def changed_files(self, old: str, new: Optional[str] = None) -> list[str]:
        """Paths that differ between *old* and *new* (working tree when None)."""
        args = ["diff", "--name-only", "-z", old]
        if new is not None:
            args.append(new)
        return [p for p in self.run(*args).split("\0") if p]

    def modified_files(self) -> list[str]:
        """Tracked files modified in the working tree."""
        modified = []
        records = iter(self.run("status", "--porcelain", "-z").split("\0"))
        for record in records:
            if len(record) < 4:
                continue
            # XY <path>; Y is the working-tree status
            if record[1] == "M":
                modified.append(record[3:])
            if record[0] in "RC":
                next(records, None)  # source path of a rename/copy
        return modified
