"""CLI entry point: registers all subcommands."""

from pathlib import Path
from typing import Optional

import typer

from .. import __version__
from ..logging_config import setup_logging

app = typer.Typer(
    name="git-critic",
    help="git-critic - Perl::Critic history for git repositories",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-critic {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    database: Optional[Path] = typer.Option(
        None,
        "--database",
        "-d",
        help="Snapshot store (default: ./git-critic.db)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also log to this file"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
):
    """Record Perl::Critic results per commit and compare them over time."""
    setup_logging(verbose=debug, quiet=quiet, log_file=str(log_file) if log_file else None)
    ctx.obj = {"database": database, "config_file": config}


def main() -> None:
    app()


# Import subcommands to register them
from .init import init as _init  # noqa: F401, E402
from .save import save as _save  # noqa: F401, E402
from .report import detail as _detail, summary as _summary  # noqa: F401, E402
from .find import find as _find  # noqa: F401, E402
from .compare import compare as _compare  # noqa: F401, E402
from .diff import diff as _diff  # noqa: F401, E402
