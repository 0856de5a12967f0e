"""Shared type aliases for loadstats."""

from __future__ import annotations

# One scalar value in a result table row. NaN floats are legal values.
Cell = str | int | float | None

# One result table row, ordered like the table titles.
Row = list[Cell]

# A ranked (classification, occurrences) pair from a top errors tracker.
RankedError = tuple[str, int]
