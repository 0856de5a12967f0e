"""Stream samples out of a CSV results file.

The file needs a header row. Recognised columns are ``timeStamp``,
``elapsed``, ``label``, ``responseCode``, ``responseMessage``,
``threadName``, ``success``, ``failureMessage`` and ``bytes``; only
``label`` and ``success`` are required. Samples are yielded in file order.
"""

from __future__ import annotations

import csv
import re
from typing import TYPE_CHECKING

from loadstats._internal.errors import ResultsFileError
from loadstats._internal.logging import get_logger
from loadstats.sample import EMPTY_GROUP_MESSAGE_PREFIX, GROUP_MESSAGE_PREFIX, Sample

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = get_logger("report.results_file")

_REQUIRED_COLUMNS = ("label", "success")

# "Thread Group 1-3" -> "Thread Group"
_THREAD_COUNTER = re.compile(r"\s+\d+-\d+$")


def _int_cell(row: dict[str, str], column: str, line: int) -> int:
    raw = row.get(column) or ""
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        logger.warning("Line %d: %s is not an integer (%r), using 0", line, column, raw)
        return 0


def thread_group_name(thread_name: str) -> str:
    """Strip the ``N-M`` thread counter from a thread name."""
    return _THREAD_COUNTER.sub("", thread_name)


def parse_row(row: dict[str, str], line: int = 0) -> Sample:
    """Build a :class:`Sample` from one CSV record."""
    message = row.get("responseMessage") or ""
    failure = row.get("failureMessage") or None
    return Sample(
        name=row.get("label") or "",
        success=(row.get("success") or "").strip().lower() == "true",
        response_code=row.get("responseCode") or "",
        response_message=message,
        failure_message=failure,
        is_group=message.startswith(GROUP_MESSAGE_PREFIX),
        is_empty_group=message.startswith(EMPTY_GROUP_MESSAGE_PREFIX),
        elapsed_ms=_int_cell(row, "elapsed", line),
        timestamp_ms=_int_cell(row, "timeStamp", line),
        bytes_received=_int_cell(row, "bytes", line),
        thread_group=thread_group_name(row.get("threadName") or ""),
    )


def read_samples(path: Path, *, delimiter: str = ",") -> Iterator[Sample]:
    """Yield every sample of the results file at *path*, in file order.

    Args:
        path: CSV results file with a header row.
        delimiter: Field separator.

    Yields:
        One Sample per data row.

    Raises:
        ResultsFileError: If the file cannot be opened or lacks a required
            column.
    """
    try:
        handle = path.open(newline="", encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot open results file {path}: {exc}"
        raise ResultsFileError(msg) from exc

    with handle:
        reader = csv.DictReader(handle, delimiter=delimiter)
        columns = reader.fieldnames or []
        missing = [c for c in _REQUIRED_COLUMNS if c not in columns]
        if missing:
            msg = f"{path} is missing required column(s): {', '.join(missing)}"
            raise ResultsFileError(msg)

        count = 0
        for row in reader:
            count += 1
            yield parse_row(row, line=reader.line_num)
        logger.debug("Read %d samples from %s", count, path)
