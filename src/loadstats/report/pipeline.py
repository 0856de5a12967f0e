"""Single-pass summary pipeline over an ordered sample stream.

A ``SummaryPipeline`` consumes samples once, in the caller's order, keeping
one :class:`SummaryInfo` per distinct key plus one overall info. What a key
is, what the payload holds and how rows look is decided by the
:class:`SummaryStrategy` given at construction.

Lifecycle::

    pipeline = SummaryPipeline(ErrorsSummary())
    pipeline.start()
    for sample in samples:
        pipeline.consume(sample)
    pipeline.finish()
    table = pipeline.build_table()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from loadstats._internal.errors import KeyExtractionError, PipelineStateError
from loadstats._internal.logging import get_logger
from loadstats.report.table import ResultTable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from loadstats._internal.types import Row
    from loadstats.sample import Sample

logger = get_logger("report.pipeline")

D = TypeVar("D")


class PipelineState(Enum):
    IDLE = auto()
    RUNNING = auto()
    FINISHED = auto()


@dataclass
class SummaryInfo(Generic[D]):
    """Payload of one summary row.

    Attributes:
        key: Grouping key, or None for the overall info.
        data: Strategy-defined payload.
    """

    key: str | None
    data: D

    @property
    def is_overall(self) -> bool:
        return self.key is None


class SummaryStrategy(Protocol[D]):
    """What a summary groups by, accumulates and emits."""

    def reset(self) -> None:
        """Forget state kept outside the infos; called by ``start()``."""

    def extract_key(self, sample: Sample) -> str:
        """Return the grouping key of *sample*."""

    def create_data(self) -> D:
        """Return a fresh payload for a new info."""

    def update_data(self, info: SummaryInfo[D], sample: Sample) -> None:
        """Fold *sample* into *info* (keyed or overall)."""

    def create_result_titles(self) -> list[str]:
        """Return the column titles."""

    def create_data_result(self, key: str | None, data: D, overall: D) -> Row | None:
        """Return the row for *key* (None for overall), or None to omit it."""


class SummaryPipeline(Generic[D]):
    """Drives a :class:`SummaryStrategy` through one pass of samples.

    Attributes:
        strategy: The summary being computed.
        suppress_empty_overall: Leave the overall row out when no keyed row
            was emitted.
    """

    def __init__(
        self,
        strategy: SummaryStrategy[D],
        *,
        suppress_empty_overall: bool = False,
    ) -> None:
        self.strategy = strategy
        self.suppress_empty_overall = suppress_empty_overall
        self._state = PipelineState.IDLE
        self._infos: dict[str, SummaryInfo[D]] = {}
        self._overall: SummaryInfo[D] | None = None
        self._skipped = 0

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def keys(self) -> list[str]:
        """Keys seen so far, in first-appearance order."""
        return list(self._infos)

    def start(self) -> None:
        """Begin a new pass, discarding state from any previous one.

        Raises:
            PipelineStateError: If a pass is already running.
        """
        if self._state is PipelineState.RUNNING:
            msg = "Pipeline is already running"
            raise PipelineStateError(msg)
        self._infos = {}
        self._overall = None
        self._skipped = 0
        self.strategy.reset()
        self._state = PipelineState.RUNNING
        logger.debug("Pipeline started", extra={"strategy": type(self.strategy).__name__})

    def _overall_info(self) -> SummaryInfo[D]:
        if self._overall is None:
            self._overall = SummaryInfo(key=None, data=self.strategy.create_data())
        return self._overall

    def consume(self, sample: Sample) -> None:
        """Fold one sample into its keyed info and into the overall info.

        Empty group markers are skipped without touching any counter.

        Raises:
            PipelineStateError: If the pipeline is not running.
            KeyExtractionError: If the strategy returns a non-string key.
        """
        if self._state is not PipelineState.RUNNING:
            msg = f"Cannot consume a sample in state {self._state.name}"
            raise PipelineStateError(msg)

        if sample.is_empty_group:
            self._skipped += 1
            return

        key = self.strategy.extract_key(sample)
        if not isinstance(key, str):
            msg = f"{type(self.strategy).__name__}.extract_key returned {key!r}, expected str"
            raise KeyExtractionError(msg)

        info = self._infos.get(key)
        if info is None:
            info = SummaryInfo(key=key, data=self.strategy.create_data())
            self._infos[key] = info
        overall = self._overall_info()

        self.strategy.update_data(info, sample)
        self.strategy.update_data(overall, sample)

    def consume_all(self, samples: Iterable[Sample]) -> None:
        for sample in samples:
            self.consume(sample)

    def finish(self) -> None:
        """End the pass.

        Raises:
            PipelineStateError: If the pipeline is not running.
        """
        if self._state is not PipelineState.RUNNING:
            msg = f"Cannot finish a pipeline in state {self._state.name}"
            raise PipelineStateError(msg)
        self._state = PipelineState.FINISHED
        logger.debug(
            "Pipeline finished: %d keys, %d empty groups skipped",
            len(self._infos),
            self._skipped,
        )

    def build_table(self) -> ResultTable:
        """Emit titles, keyed rows in first-appearance order, then overall.

        Raises:
            PipelineStateError: If the pipeline has not finished.
        """
        if self._state is not PipelineState.FINISHED:
            msg = f"Cannot build a table in state {self._state.name}"
            raise PipelineStateError(msg)

        overall = self._overall_info()
        table = ResultTable(titles=self.strategy.create_result_titles())
        for info in self._infos.values():
            row = self.strategy.create_data_result(info.key, info.data, overall.data)
            if row is not None:
                table.add_row(row)

        if not (self.suppress_empty_overall and len(table) == 0):
            row = self.strategy.create_data_result(None, overall.data, overall.data)
            if row is not None:
                table.add_row(row)
        return table

    def run(self, samples: Iterable[Sample]) -> ResultTable:
        """Run a whole pass over *samples* and return the table."""
        self.start()
        self.consume_all(samples)
        self.finish()
        return self.build_table()
