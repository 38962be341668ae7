"""File queues for analysis runs.

A queue is filled eagerly from one source (a single ``--input`` file, a
manifest, line-delimited stdin, or a commit's tree) and then consumed once.
Files missing on disk are returned as data so the caller decides how to
fail.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .exceptions import FatalInputError
from .vcs import GitRepository, iter_files


class FileQueue:
    """Single-pass iterator over file paths with a known total.

    ``revision`` is set when the files must be read from a commit rather
    than the working copy.
    """

    def __init__(self, paths: Iterable[str], revision: Optional[str] = None) -> None:
        self._pending = deque(paths)
        self.total = len(self._pending)
        self.revision = revision

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if not self._pending:
            raise StopIteration
        return self._pending.popleft()

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def completed(self) -> int:
        return self.total - len(self._pending)


@dataclass
class QueueLoad:
    """Result of building a queue: the queue plus any paths not found."""

    queue: FileQueue
    missing: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing

    def require(self) -> FileQueue:
        """Return the queue, raising :class:`FatalInputError` if files are missing."""
        if self.missing:
            raise FatalInputError(
                f"file {self.missing[0]} not found",
                context={"missing": self.missing},
            )
        return self.queue


def _check(paths: list[str]) -> QueueLoad:
    missing = [p for p in paths if not Path(p).exists()]
    return QueueLoad(FileQueue(paths), missing)


def from_input(path: str) -> QueueLoad:
    """Queue holding a single file."""
    return _check([path])


def from_lines(lines: Iterable[str]) -> QueueLoad:
    """Queue from line-delimited paths (stdin or a manifest); blank lines skipped."""
    return _check([s for s in (line.strip() for line in lines) if s])


def from_manifest(manifest: str) -> QueueLoad:
    """Queue from a manifest file listing one path per line."""
    path = Path(manifest)
    if not path.is_file():
        raise FatalInputError(f"manifest {manifest} not found", context={"manifest": manifest})
    with open(path, encoding="utf-8") as fh:
        return from_lines(fh)


def from_tree(repo: GitRepository, rev: str, pattern: Optional[str] = None) -> QueueLoad:
    """Queue of the files in *rev*'s tree, optionally filtered by regex.

    Paths come from the commit itself, so nothing can be missing.
    """
    regex = re.compile(pattern) if pattern else None
    paths = [p for p in iter_files(repo.tree(rev)) if regex is None or regex.search(p)]
    return QueueLoad(FileQueue(paths, revision=rev))
