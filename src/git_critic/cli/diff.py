"""diff command: compare a file's stored results at two commits."""

import sys
from typing import Optional

import typer

from ..exceptions import GitCriticError, VcsError
from ..formatters import CompareReportFormatter
from ..persistence import SnapshotStore
from ..pipeline import compare_stored
from ..vcs import GitRepository
from . import app
from ._common import fail, resolve_config


def _resolve(repo: GitRepository, rev: str) -> str:
    # stored commits are full ids; expand abbreviations when git can
    try:
        return repo.resolve(rev)
    except VcsError:
        return rev


@app.command()
def diff(
    ctx: typer.Context,
    filename: str = typer.Argument(..., help="File name as it was saved"),
    old: str = typer.Option(..., "--from", help="Baseline commit"),
    new: str = typer.Option(..., "--to", help="Commit compared against the baseline"),
    verbose: Optional[int] = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Perl::Critic verbosity level, 1-11 (default: 11)",
        min=1,
        max=11,
    ),
):
    """
    Compare the violations saved for a file at two commits.

    [bold cyan]Examples:[/bold cyan]

      git-critic diff lib/Foo.pm --from v1.0 --to v1.1
    """
    try:
        config = resolve_config(ctx, verbose=verbose)
        repo = GitRepository(config.repo_path)
        with SnapshotStore(config.database) as store:
            comparison = compare_stored(store, filename, _resolve(repo, old), _resolve(repo, new))
    except GitCriticError as e:
        fail(e)

    CompareReportFormatter(verbose=config.verbose).render([comparison], sys.stdout)
