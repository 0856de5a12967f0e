"""``loadstats aggregate`` — per-label statistics from a results file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import cast

import typer
from rich.console import Console

from loadstats._internal.config import load_config
from loadstats._internal.errors import LoadStatsError
from loadstats._internal.logging import setup_logging
from loadstats.cli.render import aggregate_table
from loadstats.live.registry import StatsRegistry
from loadstats.metrics.accumulator import LatencyAccumulator
from loadstats.metrics.models import SampleStatistics
from loadstats.report.results_file import read_samples

console = Console()
err_console = Console(stderr=True)


def aggregate_cmd(
    results_file: Path = typer.Argument(
        ...,
        help="CSV results file with a header row.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    group_name: bool | None = typer.Option(
        None,
        "--group-name/--no-group-name",
        help="Prefix labels with their thread group name.",
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
    """Print the aggregate report: one line per label plus TOTAL."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        config = load_config()
        registry = StatsRegistry(
            LatencyAccumulator,
            use_group_name=config.use_group_name if group_name is None else group_name,
        )
        for sample in read_samples(results_file, delimiter=delimiter):
            registry.add_sample(sample)
    except LoadStatsError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    rows = [(key, cast(SampleStatistics, stats)) for key, stats in registry.snapshot()]
    console.print(aggregate_table(rows, title="Aggregate Report"))
