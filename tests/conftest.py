"""Shared fixtures for git-critic tests."""

import os
import shutil
import sqlite3
import subprocess

import pytest

from git_critic.engine import AnalysisEngine
from git_critic.exceptions import AnalysisEngineError
from git_critic.models import AnalysisResult, FileStatistics, Violation
from git_critic.persistence import SnapshotStore


class FakeEngine(AnalysisEngine):
    """Deterministic stand-in for perlcritic.

    Every source line of the form ``Category::Policy <severity>`` yields one
    violation at that line; ``sub`` lines count as subroutines; a line
    containing ``BOOM`` makes the engine fail.
    """

    def __init__(self):
        self.calls = []

    def critique(self, source, filename):
        self.calls.append(filename)
        if "BOOM" in source:
            raise AnalysisEngineError(f"perlcritic failed on {filename}")

        lines = source.splitlines()
        violations = []
        for number, line in enumerate(lines, 1):
            parts = line.split()
            if len(parts) == 2 and "::" in parts[0] and parts[1].isdigit():
                violations.append(
                    Violation(
                        policy=parts[0],
                        severity=int(parts[1]),
                        line=number,
                        description=f"{parts[0].rsplit('::', 1)[-1]} violated",
                        explanation="See page 1 of PBP",
                        source=line,
                        filename=filename,
                    )
                )

        counts = {}
        for v in violations:
            counts[v.severity] = counts.get(v.severity, 0) + 1

        stats = FileStatistics(
            filename=filename,
            severity_counts=counts,
            lines=len(lines),
            avg_mccabe=1.5 if any(l.startswith("sub ") for l in lines) else 0.0,
            subs=sum(1 for l in lines if l.startswith("sub ")),
            violations=len(violations),
        )
        return AnalysisResult(violations=tuple(violations), statistics=stats)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def make_violation():
    def _make(policy="TestingAndDebugging::RequireUseStrict", severity=5, line=1, **kwargs):
        kwargs.setdefault("description", "Code before strictures are enabled")
        kwargs.setdefault("explanation", "See page 429 of PBP")
        kwargs.setdefault("source", "print 1;")
        return Violation(policy=policy, severity=severity, line=line, **kwargs)

    return _make


@pytest.fixture
def store_path(tmp_path):
    path = tmp_path / "git-critic.db"
    SnapshotStore(str(path)).create_schema()
    return path


@pytest.fixture
def legacy_store_path(tmp_path):
    """An older store layout that names the subroutine column ``sub``."""
    path = tmp_path / "legacy.db"
    conn = sqlite3.connect(str(path))
    conn.executescript(
        """
        CREATE TABLE tStats (
            id integer primary key autoincrement, filename text,
            sev_1 integer, sev_2 integer, sev_3 integer, sev_4 integer, sev_5 integer,
            lines integer, avg_mccabe numeric, sub integer, violations integer,
            git_commit text, git_commit_time integer,
            date_inserted timestamp default current_timestamp
        );
        CREATE TABLE tCritic (
            file_id integer, line_number integer, description text, explanation text,
            severity integer, policy text, source text, git_commit text,
            git_commit_time integer, date_inserted timestamp default current_timestamp
        );
        """
    )
    conn.close()
    return path


@pytest.fixture
def store(store_path):
    with SnapshotStore(str(store_path)) as s:
        yield s


def _git(repo, *args):
    env = dict(
        os.environ,
        GIT_AUTHOR_NAME="Test",
        GIT_AUTHOR_EMAIL="test@example.com",
        GIT_COMMITTER_NAME="Test",
        GIT_COMMITTER_EMAIL="test@example.com",
    )
    return subprocess.run(
        ["git", "-C", str(repo), *args], check=True, capture_output=True, text=True, env=env
    ).stdout


@pytest.fixture
def git_repo(tmp_path):
    """A repository with one commit: lib/Foo.pm, lib/Bar/Baz.pm, bin/run.pl, README."""
    if shutil.which("git") is None:
        pytest.skip("git not available")

    repo = tmp_path / "repo"
    (repo / "lib" / "Bar").mkdir(parents=True)
    (repo / "bin").mkdir()
    (repo / "lib" / "Foo.pm").write_text(
        "package Foo;\nsub new {}\nSubroutines::RequireFinalReturn 4\nValues::ProhibitMagicNumbers 2\n"
    )
    (repo / "lib" / "Bar" / "Baz.pm").write_text("package Bar::Baz;\n")
    (repo / "bin" / "run.pl").write_text("Modules::RequireVersionVar 2\n")
    (repo / "README").write_text("readme\n")

    _git(repo, "init", "-q")
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "initial")
    return repo


@pytest.fixture
def git():
    return _git
