"""Main Typer application — entry point for the ``loadstats`` CLI."""

from __future__ import annotations

import typer

from loadstats import __version__
from loadstats.cli.aggregate import aggregate_cmd
from loadstats.cli.report import report_cmd

app = typer.Typer(
    name="loadstats",
    help="Aggregate load-test samples into summary tables.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("report", help="Summarize errors of a results file.")(report_cmd)
app.command("aggregate", help="Per-label statistics of a results file.")(aggregate_cmd)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"loadstats {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """loadstats — aggregate load-test samples into summary tables."""
