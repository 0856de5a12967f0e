"""Tabular result model shared by every summary.

A ``ResultTable`` is the only shape the engine produces: named columns and
rows of scalar cells. Rendering and export happen elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loadstats._internal.errors import ReportError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from loadstats._internal.types import Cell, Row


@dataclass
class ResultTable:
    """Ordered columns and rows of a summary.

    Attributes:
        titles: Column names.
        rows: Rows in emission order; each row has one cell per title.
    """

    titles: list[str]
    rows: list[Row] = field(default_factory=list)

    def add_row(self, row: Row) -> None:
        """Append *row*.

        Raises:
            ReportError: If the row width does not match the titles.
        """
        if len(row) != len(self.titles):
            msg = f"Row has {len(row)} cells, table has {len(self.titles)} columns"
            raise ReportError(msg)
        self.rows.append(list(row))

    def column(self, index: int) -> list[Cell]:
        """Return every cell of the column at *index*."""
        return [row[index] for row in self.rows]

    def to_records(self) -> list[dict[str, Cell]]:
        """Return rows as dicts keyed by title.

        Repeated titles (the top errors table has five "Error" columns) get
        a ``_2``, ``_3``... suffix from their second occurrence on.
        """
        keys: list[str] = []
        seen: dict[str, int] = {}
        for title in self.titles:
            seen[title] = seen.get(title, 0) + 1
            keys.append(title if seen[title] == 1 else f"{title}_{seen[title]}")
        return [dict(zip(keys, row, strict=True)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)
