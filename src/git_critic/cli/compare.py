"""compare command: working copy vs. a reference commit."""

import sys
from pathlib import Path
from typing import Optional

import typer

from ..exceptions import GitCriticError
from ..formatters import CompareReportFormatter
from ..pipeline import RunContext, compare_working_copy
from ..vcs import GitRepository
from . import _common, app
from ._common import fail, resolve_config


@app.command()
def compare(
    ctx: typer.Context,
    severity: Optional[int] = typer.Option(
        None, "--severity", "-s", help="Minimum severity, 1-5 (default: 1)", min=1, max=5
    ),
    verbose: Optional[int] = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Perl::Critic verbosity level, 1-11 (default: 11)",
        min=1,
        max=11,
    ),
    repo: Optional[Path] = typer.Option(
        None, "--repo", "-r", help="Repository (default: current directory)"
    ),
    commit_id: Optional[str] = typer.Option(
        None, "--id", "-i", help="Commit to compare against (default: HEAD)"
    ),
    profile: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Perl::Critic profile (default: ~/.perlcriticrc)"
    ),
):
    """
    Compare Perl::Critic results of modified files against a commit.

    For every modified file matching the include pattern, lists all current
    violations, those of policies that gained violations [+], and the ones
    that disappeared [-].

    [bold cyan]Examples:[/bold cyan]

      git-critic compare

      git-critic compare --id HEAD~3 --severity 3 --verbose 9
    """
    try:
        config = resolve_config(
            ctx, severity=severity, verbose=verbose, repo_path=repo, profile=profile
        )
        git = GitRepository(config.repo_path)
        commit = git.resolve(commit_id or "HEAD")
        run = RunContext(config=config, engine=_common.build_engine(config), repo=git)
        comparisons = compare_working_copy(run, commit)
    except GitCriticError as e:
        fail(e)

    CompareReportFormatter(verbose=config.verbose).render(comparisons, sys.stdout)
