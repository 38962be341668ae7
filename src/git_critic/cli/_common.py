"""Shared CLI helpers."""

import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import file_queue
from ..config import CriticConfig, load_config
from ..engine import AnalysisEngine, PerlCriticEngine
from ..exceptions import FatalInputError, GitCriticError
from ..file_queue import FileQueue
from ..logging_config import get_logger
from ..vcs import GitRepository

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)


def fail(error: GitCriticError) -> NoReturn:
    """Print a fatal error to stderr and exit 1."""
    logger.debug("%s", error.to_json())
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    if error.recovery_hint:
        err_console.print(f"[dim]{escape(error.recovery_hint)}[/dim]")
    raise typer.Exit(1)


def resolve_config(ctx: typer.Context, **overrides) -> CriticConfig:
    """Build the run configuration from the global options plus command overrides."""
    obj = ctx.obj or {}
    database = obj.get("database")
    return load_config(
        config_file=obj.get("config_file"),
        database=str(database) if database else None,
        **{k: (str(v) if isinstance(v, Path) else v) for k, v in overrides.items()},
    )


def build_engine(config: CriticConfig) -> AnalysisEngine:
    return PerlCriticEngine(
        executable=config.perlcritic,
        profile=config.profile,
        severity=config.severity,
    )


def build_queue(
    input_file: Optional[Path] = None,
    manifest: Optional[Path] = None,
    tree: bool = False,
    repo: Optional[GitRepository] = None,
    rev: Optional[str] = None,
    pattern: Optional[str] = None,
) -> FileQueue:
    """Fill the file queue from exactly one source; stdin is the fallback.

    Raises:
        FatalInputError: conflicting sources or a queued file is missing
    """
    if sum(bool(s) for s in (input_file, manifest, tree)) > 1:
        raise FatalInputError("use only one of --input, --manifest and --tree")

    if input_file:
        load = file_queue.from_input(str(input_file))
    elif manifest:
        load = file_queue.from_manifest(str(manifest))
    elif tree:
        if repo is None or rev is None:
            raise FatalInputError("--tree needs a repository and a commit")
        load = file_queue.from_tree(repo, rev, pattern)
    else:
        if sys.stdin.isatty():
            logger.warning("reading the list of files to analyze from stdin")
        load = file_queue.from_lines(sys.stdin)

    return load.require()
