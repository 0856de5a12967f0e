"""Readout dataclasses produced by accumulators."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["SampleStatistics"]


@dataclass(frozen=True)
class SampleStatistics:
    """Aggregate-report line for one label (or the TOTAL line).

    Attributes:
        label: Grouping key the statistics belong to.
        sample_count: Number of samples recorded.
        error_count: Number of failed samples.
        error_percent: Failed samples as a percentage, NaN when empty.
        latency_avg: Mean response time in milliseconds.
        latency_min: Minimum response time in milliseconds.
        latency_max: Maximum response time in milliseconds.
        latency_p50: Median response time in milliseconds.
        latency_p90: 90th percentile response time in milliseconds.
        latency_p95: 95th percentile response time in milliseconds.
        latency_p99: 99th percentile response time in milliseconds.
        throughput: Samples per second over the observed time span.
        received_kb_per_sec: Response kilobytes per second over the span.
    """

    label: str
    sample_count: int = 0
    error_count: int = 0
    error_percent: float = 0.0
    latency_avg: float = 0.0
    latency_min: int = 0
    latency_max: int = 0
    latency_p50: float = 0.0
    latency_p90: float = 0.0
    latency_p95: float = 0.0
    latency_p99: float = 0.0
    throughput: float = 0.0
    received_kb_per_sec: float = 0.0
