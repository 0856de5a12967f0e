"""loadstats — Aggregate load-test samples into live and batch statistics."""

from __future__ import annotations

from loadstats.live.registry import StatsRegistry
from loadstats.metrics.accumulator import LatencyAccumulator
from loadstats.metrics.aggregators import TimeRateAggregator, create_aggregator
from loadstats.metrics.top_errors import TopErrorsTracker
from loadstats.report.consumers import create_pipeline, register_summary
from loadstats.report.errors_summary import ErrorsSummary
from loadstats.report.pipeline import SummaryPipeline
from loadstats.report.table import ResultTable
from loadstats.report.top_errors_by_sampler import TopErrorsBySampler
from loadstats.sample import Sample

__version__ = "0.1.0"

__all__ = [
    "ErrorsSummary",
    "LatencyAccumulator",
    "ResultTable",
    "Sample",
    "StatsRegistry",
    "SummaryPipeline",
    "TimeRateAggregator",
    "TopErrorsBySampler",
    "TopErrorsTracker",
    "create_aggregator",
    "create_pipeline",
    "register_summary",
]
