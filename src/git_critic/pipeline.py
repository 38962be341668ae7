"""Run pipeline: feed queued files through the engine, then save, render or compare.

Everything a run needs travels in a :class:`RunContext` built once by the
CLI; nothing here keeps module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .config import CriticConfig
from .diff import FileComparison, ViolationDiffer
from .engine import AnalysisEngine
from .exceptions import AnalysisEngineError, FatalInputError, GitCriticError, VcsError
from .file_queue import FileQueue
from .logging_config import get_logger
from .models import AnalysisResult, ViolationSet
from .persistence import SnapshotStore, duplicate_snapshot
from .vcs import GitRepository

logger = get_logger(__name__)


@dataclass
class RunContext:
    """Collaborators shared by every step of one run."""

    config: CriticConfig
    engine: AnalysisEngine
    store: Optional[SnapshotStore] = None
    repo: Optional[GitRepository] = None


class FileOutcome(Enum):
    SAVED = "saved"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SaveReport:
    """Per-run tally of what happened to each queued file."""

    saved: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.saved) + len(self.skipped) + len(self.failed)

    def record(self, filename: str, outcome: FileOutcome) -> None:
        {
            FileOutcome.SAVED: self.saved,
            FileOutcome.SKIPPED: self.skipped,
            FileOutcome.FAILED: self.failed,
        }[outcome].append(filename)


def analyze(ctx: RunContext, filename: str, revision: Optional[str] = None) -> AnalysisResult:
    """Run the engine on a working-copy file, or on its content at *revision*."""
    if revision is None:
        result = ctx.engine.critique_file(filename)
    else:
        if ctx.repo is None:
            raise FatalInputError("reading files at a commit needs a repository")
        result = ctx.engine.critique(ctx.repo.read_file(filename, revision), filename)

    for v in result.violations:
        logger.debug("%s (%d)", v.to_string(ctx.config.verbose).rstrip(), v.severity)
    logger.debug("stats for %s: %s", filename, result.statistics)
    return result


def save_files(
    ctx: RunContext,
    queue: FileQueue,
    commit: str,
    commit_time: Optional[int],
    force: bool = False,
    on_file: Optional[Callable[[str, FileOutcome], None]] = None,
) -> SaveReport:
    """Analyze and persist every queued file for *commit*.

    A file already recorded for the commit is skipped with a warning (unless
    *force*) before the engine runs, so an interrupted run can simply be
    restarted. Engine failures abort only the file they occur on.
    """
    if ctx.store is None:
        raise FatalInputError("save needs an open snapshot store")
    report = SaveReport()

    for filename in queue:
        outcome = _save_one(ctx, queue, filename, commit, commit_time, force)
        report.record(filename, outcome)
        if on_file is not None:
            on_file(filename, outcome)

    return report


def _warn(notice: GitCriticError) -> None:
    logger.warning("%s", notice)
    logger.debug("%s", notice.to_json())


def _save_one(
    ctx: RunContext,
    queue: FileQueue,
    filename: str,
    commit: str,
    commit_time: Optional[int],
    force: bool,
) -> FileOutcome:
    store = ctx.store
    assert store is not None

    if not force and store.find_by_commit_and_file(commit, filename) is not None:
        _warn(duplicate_snapshot(filename, commit))
        return FileOutcome.SKIPPED

    try:
        result = analyze(ctx, filename, queue.revision)
    except (AnalysisEngineError, VcsError) as e:
        logger.error("analysis of %s failed: %s", filename, e)
        return FileOutcome.FAILED

    result.statistics.commit = commit
    saved = store.save(result.statistics, result.violations, commit, commit_time, force=force)
    if saved.error is not None:
        _warn(saved.error)
        return FileOutcome.SKIPPED
    return FileOutcome.SAVED


def collect_violations(ctx: RunContext, queue: FileQueue, commit: str = "") -> list[tuple]:
    """Detail rows (see ``DETAIL_HEADER``) for every queued file."""
    rows: list[tuple] = []
    for filename in queue:
        result = analyze(ctx, filename, queue.revision)
        rows.extend(v.detail_row(commit) for v in result.violations)
    return rows


def collect_statistics(ctx: RunContext, queue: FileQueue, commit: str = "") -> list[tuple]:
    """Summary rows (see ``SUMMARY_HEADER``) for every queued file."""
    rows: list[tuple] = []
    for filename in queue:
        stats = analyze(ctx, filename, queue.revision).statistics
        stats.commit = commit
        rows.append(stats.as_row())
    return rows


def compare_working_copy(ctx: RunContext, commit: str) -> list[FileComparison]:
    """Compare modified working-copy files against their content at *commit*.

    Only files matching ``config.include_pattern`` are considered. A file
    absent at *commit* is compared against an empty baseline.
    """
    if ctx.repo is None:
        raise FatalInputError("compare needs a git repository")
    repo = ctx.repo
    regex = ctx.config.file_regex
    differ = ViolationDiffer()
    comparisons = []

    for filename in repo.modified_files():
        if not regex.search(filename):
            continue

        try:
            baseline = ctx.engine.critique(repo.read_file(filename, commit), filename)
            baseline_set = baseline.violation_set()
        except VcsError:
            logger.info("%s not present at %s, comparing against nothing", filename, commit[:8])
            baseline_set = ViolationSet()

        current = ctx.engine.critique_file(str(Path(repo.repo_path) / filename))
        current_set = ViolationSet(replace(v, filename=filename) for v in current.violations)
        comparisons.append(FileComparison.build(filename, baseline_set, current_set, differ))

    return comparisons


def compare_stored(
    store: SnapshotStore, filename: str, old_commit: str, new_commit: str
) -> FileComparison:
    """Compare the violations stored for *filename* at two commits."""
    sets = []
    for commit in (old_commit, new_commit):
        vs = store.violation_set(commit, filename)
        if vs is None:
            raise FatalInputError(
                f"no snapshot of {filename} on commit {commit}",
                context={"file": filename, "commit": commit},
                recovery_hint="run 'git-critic save' for that commit first",
            )
        sets.append(vs)
    return FileComparison.build(filename, sets[0], sets[1])


def history_rows(store: SnapshotStore, filename: str) -> list[dict]:
    """Stored history of *filename* as plain dicts, newest first."""
    return [s.to_dict() for s in store.find_history(filename)]
