"""find command: stored history of one file."""

import typer

from ..exceptions import GitCriticError
from ..formatters import StructuredFormatter
from ..persistence import SnapshotStore
from ..pipeline import history_rows
from . import app
from ._common import fail, resolve_config


@app.command()
def find(
    ctx: typer.Context,
    filename: str = typer.Argument(..., help="File name as it was saved"),
):
    """
    Print every stored snapshot of a file as JSON, newest first.

    [bold cyan]Examples:[/bold cyan]

      git-critic find lib/Foo.pm
    """
    try:
        config = resolve_config(ctx)
        with SnapshotStore(config.database) as store:
            rows = history_rows(store, filename)
    except GitCriticError as e:
        fail(e)

    print(StructuredFormatter.format_records(rows), end="")
