"""init command: create or reset the snapshot store."""

import typer
from rich.markup import escape

from ..exceptions import GitCriticError
from ..persistence import CriticDB
from . import app
from ._common import console, fail, resolve_config


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-F",
        help="Discard an existing store",
    ),
):
    """
    Create an empty snapshot store.

    Refuses to touch an existing store unless --force is given.

    [bold cyan]Examples:[/bold cyan]

      git-critic init

      git-critic --database history.db init --force
    """
    try:
        config = resolve_config(ctx)
        CriticDB(config.database).create_schema(force=force)
    except GitCriticError as e:
        fail(e)

    console.print(f"[green]Created snapshot store {escape(config.database)}[/green]")
