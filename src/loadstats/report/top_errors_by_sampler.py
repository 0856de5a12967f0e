"""Top 5 error signatures for every sampler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loadstats.metrics.top_errors import MAX_ERRORS_IN_TOP, TopErrorsTracker
from loadstats.sample import error_signature

if TYPE_CHECKING:
    from loadstats._internal.types import Row
    from loadstats.report.pipeline import SummaryInfo
    from loadstats.sample import Sample

TOTAL_LABEL = "Total"


class TopErrorsBySampler:
    """Groups samples by name and ranks each name's error signatures.

    Group samples (transaction controllers) never count toward the overall
    row, since their children are already counted there. They count toward
    their own row unless ``ignore_transaction_controllers`` is set.

    Rows are ``[name, #samples, #errors, error1, count1, ... error5,
    count5]``; missing ranks are padded with empty strings. Samplers without
    errors emit no row, the overall row is always emitted.
    """

    def __init__(
        self,
        *,
        ignore_transaction_controllers: bool = False,
        use_assertion_message: bool = True,
    ) -> None:
        self.ignore_transaction_controllers = ignore_transaction_controllers
        self.use_assertion_message = use_assertion_message

    def reset(self) -> None:
        """Nothing to reset: all state lives in the payloads."""

    def extract_key(self, sample: Sample) -> str:
        return sample.name

    def create_data(self) -> TopErrorsTracker:
        return TopErrorsTracker()

    def update_data(self, info: SummaryInfo[TopErrorsTracker], sample: Sample) -> None:
        if sample.is_group and (info.is_overall or self.ignore_transaction_controllers):
            return

        tracker = info.data
        if not sample.success:
            tracker.register_error(
                error_signature(sample, use_assertion_message=self.use_assertion_message)
            )
            tracker.inc_errors()
        tracker.inc_total()

    def create_result_titles(self) -> list[str]:
        titles = ["Sample", "#Samples", "#Errors"]
        for _ in range(MAX_ERRORS_IN_TOP):
            titles.extend(["Error", "#Errors"])
        return titles

    def create_data_result(
        self,
        key: str | None,
        data: TopErrorsTracker,
        overall: TopErrorsTracker,
    ) -> Row | None:
        if key is not None and data.errors == 0:
            return None

        row: Row = [key if key is not None else TOTAL_LABEL, data.total, data.errors]
        top = data.top(MAX_ERRORS_IN_TOP)
        for signature, count in top:
            row.extend([signature, count])
        for _ in range(MAX_ERRORS_IN_TOP - len(top)):
            row.extend(["", ""])
        return row
