"""save command: analyze files and record the results for a commit."""

from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from ..exceptions import FatalInputError, GitCriticError
from ..persistence import SnapshotStore
from ..pipeline import FileOutcome, RunContext, save_files
from ..progress import ProgressEstimator
from ..vcs import GitRepository
from . import _common, app
from ._common import err_console, fail, resolve_config


@app.command()
def save(
    ctx: typer.Context,
    commit: Optional[str] = typer.Option(
        None,
        "--commit",
        "-c",
        help="Commit the results belong to (any revision git understands)",
    ),
    progress: bool = typer.Option(
        False,
        "--progress",
        "-P",
        help="Show a progress bar with time estimates",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-F",
        help="Re-analyze files already saved for this commit",
    ),
    input_file: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Single file to analyze (default: read file names from stdin)",
    ),
    manifest: Optional[Path] = typer.Option(
        None,
        "--manifest",
        "-m",
        help="File listing the files to analyze, one per line",
    ),
    tree: bool = typer.Option(
        False,
        "--tree",
        help="Analyze every matching file in the commit's tree, as stored in git",
    ),
    repo_path: Optional[Path] = typer.Option(
        None,
        "--repo-path",
        help="Repository root (default: current directory)",
    ),
    profile: Optional[Path] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Perl::Critic profile (default: ~/.perlcriticrc)",
    ),
):
    """
    Analyze files and save the results for a commit.

    Files already saved for the commit are skipped with a warning, so an
    interrupted run can be restarted. Use --force to replace them.

    [bold cyan]Examples:[/bold cyan]

      git ls-files '*.pm' | git-critic save --commit HEAD --progress

      git-critic save --commit v1.2 --tree
    """
    try:
        if not commit:
            raise FatalInputError("commit is a required option when saving")

        config = resolve_config(ctx, profile=profile, repo_path=repo_path)
        repo = GitRepository(config.repo_path)
        commit_id = repo.resolve(commit)
        commit_time = repo.commit_time(commit_id)

        queue = _common.build_queue(
            input_file, manifest, tree, repo, commit_id, config.include_pattern
        )
        engine = _common.build_engine(config)

        estimator = ProgressEstimator(queue.total)
        estimator.start()

        with SnapshotStore(config.database) as store:
            run = RunContext(config=config, engine=engine, store=store, repo=repo)
            if progress:
                report = _save_with_progress(run, queue, commit_id, commit_time, force, estimator)
            else:
                report = save_files(run, queue, commit_id, commit_time, force=force)

    except GitCriticError as e:
        fail(e)

    err_console.print(
        f"completed in {int(estimator.elapsed())}s "
        f"(saved: {len(report.saved)}, skipped: {len(report.skipped)}, "
        f"failed: {len(report.failed)})",
        highlight=False,
    )
    if report.failed:
        raise typer.Exit(1)


def _save_with_progress(run, queue, commit_id, commit_time, force, estimator):
    bar = Progress(
        TextColumn("[bold]Saving"),
        BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=err_console,
    )

    with bar:
        task = bar.add_task("save", total=queue.total)

        def on_file(filename: str, outcome: FileOutcome) -> None:
            took = estimator.lap()
            bar.advance(task)
            if outcome is FileOutcome.SAVED:
                bar.console.print(
                    estimator.message(queue.completed, filename, took),
                    markup=False,
                    highlight=False,
                )

        return save_files(run, queue, commit_id, commit_time, force=force, on_file=on_file)
