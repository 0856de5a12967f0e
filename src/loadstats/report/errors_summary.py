"""Error statistics by error signature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loadstats.metrics.aggregators import percentage
from loadstats.sample import error_signature

if TYPE_CHECKING:
    from loadstats._internal.types import Row
    from loadstats.report.pipeline import SummaryInfo
    from loadstats.sample import Sample

TOTAL_LABEL = "Total"

TITLES = ["Type of error", "Number of errors", "% in errors", "% in all samples"]


class ErrorsSummary:
    """Counts failures per error signature.

    The overall payload counts every sample, keyed payloads count failed
    samples only, and the strategy keeps the total number of failures so
    each row can report its share of all errors and of all samples.

    A successful sample still registers its key (the key is computed
    before the outcome is looked at) but a key that never failed emits no
    row. The Total row applies the same formula to the overall payload, so
    it shows the sample count with shares of errors and of all samples
    (the latter always 100).
    """

    def __init__(self, *, use_assertion_message: bool = True) -> None:
        self.use_assertion_message = use_assertion_message
        self.error_count = 0

    def reset(self) -> None:
        self.error_count = 0

    def extract_key(self, sample: Sample) -> str:
        return error_signature(sample, use_assertion_message=self.use_assertion_message)

    def create_data(self) -> int:
        return 0

    def update_data(self, info: SummaryInfo[int], sample: Sample) -> None:
        if info.is_overall:
            info.data += 1
        elif not sample.success:
            info.data += 1
            self.error_count += 1

    def create_result_titles(self) -> list[str]:
        return list(TITLES)

    def create_data_result(self, key: str | None, data: int, overall: int) -> Row | None:
        if key is not None and data == 0:
            return None
        return [
            key if key is not None else TOTAL_LABEL,
            data,
            percentage(data, self.error_count),
            percentage(data, overall),
        ]
