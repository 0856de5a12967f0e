"""``loadstats report`` — summarize a results file into error tables."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from loadstats._internal.config import load_config
from loadstats._internal.errors import LoadStatsError
from loadstats._internal.logging import setup_logging
from loadstats.cli.render import result_table
from loadstats.report.consumers import available_summaries, create_pipeline, get_registration
from loadstats.report.export import write_csv, write_json
from loadstats.report.results_file import read_samples

console = Console()
err_console = Console(stderr=True)

_FORMATS = ("table", "csv", "json")


def report_cmd(
    results_file: Path = typer.Argument(
        ...,
        help="CSV results file with a header row.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    summaries: list[str] | None = typer.Option(
        None,
        "--summary",
        "-s",
        help="Summary to compute (repeatable). Default: all registered summaries.",
    ),
    fmt: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table, csv, or json.",
    ),
    output: Path = typer.Option(
        Path("./report"),
        "--output",
        "-o",
        help="Output directory for csv/json files.",
    ),
    delimiter: str = typer.Option(
        ",",
        "--delimiter",
        help="Field separator of the results file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
) -> None:
    """Replay a results file through the error summaries."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if fmt not in _FORMATS:
        msg = f"Unknown format: {fmt}. Choose from: {', '.join(_FORMATS)}"
        raise typer.BadParameter(msg)

    names = summaries or available_summaries()
    try:
        config = load_config()
        for name in names:
            registration = get_registration(name)
            pipeline = create_pipeline(name, config)
            table = pipeline.run(read_samples(results_file, delimiter=delimiter))

            if fmt == "table":
                console.print(result_table(table, title=registration.description or name))
            elif fmt == "csv":
                path = write_csv(table, output / f"{name}.csv")
                err_console.print(f"[green]Wrote[/green] {path}")
            else:
                path = write_json(table, output / f"{name}.json")
                err_console.print(f"[green]Wrote[/green] {path}")
    except LoadStatsError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
