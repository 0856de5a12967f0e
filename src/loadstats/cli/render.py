"""Rich rendering of result tables."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from rich.table import Table

if TYPE_CHECKING:
    from loadstats._internal.types import Cell
    from loadstats.metrics.models import SampleStatistics
    from loadstats.report.table import ResultTable

AGGREGATE_COLUMNS = (
    "Label",
    "# Samples",
    "Average",
    "Median",
    "90% Line",
    "95% Line",
    "99% Line",
    "Min",
    "Max",
    "Error %",
    "Throughput",
    "Received KB/sec",
)


def format_cell(cell: Cell) -> str:
    if cell is None:
        return ""
    if isinstance(cell, float):
        if math.isnan(cell):
            return "NaN"
        return f"{cell:.2f}"
    return str(cell)


def result_table(table: ResultTable, title: str | None = None) -> Table:
    """Build a Rich table from a :class:`ResultTable`.

    The last row is styled bold, since every summary ends with its total.
    """
    rich_table = Table(title=title, show_header=True, header_style="bold cyan", expand=True)
    for index, name in enumerate(table.titles):
        rich_table.add_column(name, justify="left" if index == 0 else "right")

    for index, row in enumerate(table.rows):
        style = "bold" if index == len(table.rows) - 1 else None
        rich_table.add_row(*(format_cell(cell) for cell in row), style=style)
    return rich_table


def aggregate_table(rows: list[tuple[str, SampleStatistics]], title: str | None = None) -> Table:
    """Build the aggregate-report table from registry snapshot rows."""
    rich_table = Table(title=title, show_header=True, header_style="bold cyan", expand=True)
    for index, name in enumerate(AGGREGATE_COLUMNS):
        rich_table.add_column(name, justify="left" if index == 0 else "right")

    for index, (key, stats) in enumerate(rows):
        style = "bold" if index == len(rows) - 1 else None
        rich_table.add_row(
            key,
            str(stats.sample_count),
            f"{stats.latency_avg:.0f}",
            f"{stats.latency_p50:.0f}",
            f"{stats.latency_p90:.0f}",
            f"{stats.latency_p95:.0f}",
            f"{stats.latency_p99:.0f}",
            str(stats.latency_min),
            str(stats.latency_max),
            f"{format_cell(stats.error_percent)}%",
            f"{stats.throughput:.1f}/sec",
            f"{stats.received_kb_per_sec:.2f}",
            style=style,
        )
    return rich_table
