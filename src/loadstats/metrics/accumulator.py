"""Per-key accumulators updated by the live registry.

An accumulator owns arbitrary per-key state; the registry only needs to
feed it samples and read it back, always under the entry's lock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

from loadstats.metrics.aggregators import TimeRateAggregator, percentage
from loadstats.metrics.histogram import LatencyHistogram
from loadstats.metrics.models import SampleStatistics

if TYPE_CHECKING:
    from loadstats.sample import Sample

R_co = TypeVar("R_co", covariant=True)


class Accumulator(Protocol[R_co]):
    """Anything that can absorb samples and produce a readout."""

    def add_sample(self, sample: Sample) -> None: ...

    def snapshot(self) -> R_co: ...


class LatencyAccumulator:
    """Response time, error and throughput statistics for one label.

    Throughput spans from the earliest sample start to the latest sample
    end seen so far, so it stays meaningful when samples arrive out of
    timestamp order from several threads.

    Attributes:
        label: Grouping key this accumulator belongs to.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self._histogram = LatencyHistogram()
        self._errors = 0
        self._bytes = 0
        self._first_start: int | None = None
        self._last_end: int | None = None

    @property
    def count(self) -> int:
        return self._histogram.count

    def add_sample(self, sample: Sample) -> None:
        self._histogram.record(sample.elapsed_ms)
        self._bytes += sample.bytes_received
        if not sample.success:
            self._errors += 1

        end = sample.timestamp_ms + sample.elapsed_ms
        if self._first_start is None or sample.timestamp_ms < self._first_start:
            self._first_start = sample.timestamp_ms
        if self._last_end is None or end > self._last_end:
            self._last_end = end

    def merge(self, other: LatencyAccumulator) -> None:
        """Fold *other* into this accumulator, keeping this label."""
        self._histogram.merge(other._histogram)
        self._errors += other._errors
        self._bytes += other._bytes
        if other._first_start is not None:
            if self._first_start is None or other._first_start < self._first_start:
                self._first_start = other._first_start
        if other._last_end is not None:
            if self._last_end is None or other._last_end > self._last_end:
                self._last_end = other._last_end

    def _rate(self, amount: float) -> float:
        """Per-second rate of *amount* over the observed span, 0.0 if no span."""
        if self._first_start is None or self._last_end is None:
            return 0.0
        span = self._last_end - self._first_start
        if span <= 0:
            return 0.0
        rate = TimeRateAggregator(granularity=span)
        rate.add_value(amount)
        return rate.result

    def snapshot(self) -> SampleStatistics:
        hist = self._histogram
        return SampleStatistics(
            label=self.label,
            sample_count=hist.count,
            error_count=self._errors,
            error_percent=percentage(self._errors, hist.count),
            latency_avg=hist.mean,
            latency_min=hist.min,
            latency_max=hist.max,
            latency_p50=hist.percentile(50.0),
            latency_p90=hist.percentile(90.0),
            latency_p95=hist.percentile(95.0),
            latency_p99=hist.percentile(99.0),
            throughput=self._rate(hist.count),
            received_kb_per_sec=self._rate(self._bytes / 1024),
        )
