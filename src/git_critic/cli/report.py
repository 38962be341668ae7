"""detail and summary commands: analyze files and print the results."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import GitCriticError
from ..formatters import get_formatter, open_output
from ..models import DETAIL_HEADER, SUMMARY_HEADER
from ..pipeline import RunContext, collect_statistics, collect_violations
from . import _common, app
from ._common import fail, resolve_config

_FORMAT_HELP = "Output format: csv or json (default: json)"


def _run(ctx, collect, header, output_format, output, input_file, manifest, commit, profile):
    try:
        config = resolve_config(ctx, profile=profile)
        formatter = get_formatter(output_format or config.output_format)
        queue = _common.build_queue(input_file, manifest)
        run = RunContext(config=config, engine=_common.build_engine(config))
        rows = collect(run, queue, commit or "")
        with open_output(str(output) if output else None) as fh:
            formatter.render(rows, header, fh)
    except GitCriticError as e:
        fail(e)


@app.command()
def detail(
    ctx: typer.Context,
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help=_FORMAT_HELP),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Single file to analyze (default: read file names from stdin)"
    ),
    manifest: Optional[Path] = typer.Option(
        None, "--manifest", "-m", help="File listing the files to analyze"
    ),
    commit: Optional[str] = typer.Option(
        None, "--commit", "-c", help="Commit label written into each row"
    ),
    profile: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Perl::Critic profile (default: ~/.perlcriticrc)"
    ),
):
    """
    Print every violation of the analyzed files.

    [bold cyan]Examples:[/bold cyan]

      git ls-files '*.pm' | git-critic detail --format csv -o violations.csv
    """
    _run(
        ctx, collect_violations, DETAIL_HEADER,
        output_format, output, input_file, manifest, commit, profile,
    )


@app.command()
def summary(
    ctx: typer.Context,
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help=_FORMAT_HELP),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="Single file to analyze (default: read file names from stdin)"
    ),
    manifest: Optional[Path] = typer.Option(
        None, "--manifest", "-m", help="File listing the files to analyze"
    ),
    commit: Optional[str] = typer.Option(
        None, "--commit", "-c", help="Commit label written into each row"
    ),
    profile: Optional[Path] = typer.Option(
        None, "--profile", "-p", help="Perl::Critic profile (default: ~/.perlcriticrc)"
    ),
):
    """
    Print per-file statistics: violations by severity, lines, McCabe, subs.

    [bold cyan]Examples:[/bold cyan]

      git ls-files | grep '\\.p[ml]$' | git-critic summary -f csv -o results.csv
    """
    _run(
        ctx, collect_statistics, SUMMARY_HEADER,
        output_format, output, input_file, manifest, commit, profile,
    )
