"""Write result tables to CSV and JSON."""

from __future__ import annotations

import csv
import json
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from loadstats._internal.types import Cell
    from loadstats.report.table import ResultTable


def _csv_cell(cell: Cell) -> str:
    if cell is None:
        return ""
    if isinstance(cell, float):
        if math.isnan(cell):
            return "NaN"
        return f"{cell:.2f}"
    return str(cell)


def write_csv(table: ResultTable, path: Path) -> Path:
    """Write *table* with a header row; NaN cells are written as ``NaN``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(table.titles)
        for row in table:
            writer.writerow([_csv_cell(cell) for cell in row])
    return path


def _json_cell(cell: Cell) -> Cell:
    if isinstance(cell, float) and math.isnan(cell):
        return None
    return cell


def to_json(table: ResultTable) -> str:
    """Serialize *table* as ``{"titles": [...], "items": [[...], ...]}``.

    NaN cells become ``null`` so the output stays valid JSON.
    """
    payload = {
        "titles": table.titles,
        "items": [[_json_cell(cell) for cell in row] for row in table],
    }
    return json.dumps(payload, indent=2)


def write_json(table: ResultTable, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(table), encoding="utf-8")
    return path
