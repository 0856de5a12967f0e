"""HDR histogram of sample response times.

Wraps ``hdrh.histogram.HdrHistogram`` for percentile queries and tracks
exact count, sum, min and max next to it, since samples report integer
milliseconds and the histogram only keeps 3 significant digits.
"""

from __future__ import annotations

from hdrh.histogram import HdrHistogram  # type: ignore[import-untyped]

from loadstats._internal.logging import get_logger

logger = get_logger("metrics.histogram")

# Integer milliseconds, up to one hour. Zero is a valid value.
_LOWEST_DISCERNIBLE_MS = 1
_HIGHEST_TRACKABLE_MS = 3_600_000
_SIGNIFICANT_DIGITS = 3


class LatencyHistogram:
    """Response time distribution in milliseconds.

    Attributes:
        count: Number of recorded samples.
    """

    def __init__(self, significant_digits: int = _SIGNIFICANT_DIGITS) -> None:
        self._histogram: HdrHistogram = HdrHistogram(  # type: ignore[no-any-unimported]
            _LOWEST_DISCERNIBLE_MS, _HIGHEST_TRACKABLE_MS, significant_digits
        )
        self.count = 0
        self._sum_ms = 0
        self._min_ms: int | None = None
        self._max_ms: int | None = None

    def record(self, elapsed_ms: int) -> None:
        """Record one response time.

        Values outside the trackable range are clamped for the percentile
        histogram; count, sum, min and max stay exact.
        """
        clamped = max(0, min(elapsed_ms, _HIGHEST_TRACKABLE_MS))
        if not self._histogram.record_value(clamped):
            logger.debug("Histogram rejected %d ms", elapsed_ms)
        self.count += 1
        self._sum_ms += elapsed_ms
        if self._min_ms is None or elapsed_ms < self._min_ms:
            self._min_ms = elapsed_ms
        if self._max_ms is None or elapsed_ms > self._max_ms:
            self._max_ms = elapsed_ms

    @property
    def min(self) -> int:
        return 0 if self._min_ms is None else self._min_ms

    @property
    def max(self) -> int:
        return 0 if self._max_ms is None else self._max_ms

    @property
    def mean(self) -> float:
        if self.count == 0:
            return 0.0
        return self._sum_ms / self.count

    def percentile(self, percentile: float) -> float:
        """Return the response time at *percentile* (0-100), 0.0 when empty."""
        if self.count == 0:
            return 0.0
        return float(self._histogram.get_value_at_percentile(percentile))

    def merge(self, other: LatencyHistogram) -> None:
        """Fold every value recorded in *other* into this histogram."""
        if other.count == 0:
            return
        self._histogram.add(other._histogram)
        self.count += other.count
        self._sum_ms += other._sum_ms
        self._min_ms = other.min if self._min_ms is None else min(self._min_ms, other.min)
        self._max_ms = other.max if self._max_ms is None else max(self._max_ms, other.max)

    def reset(self) -> None:
        self._histogram.reset()
        self.count = 0
        self._sum_ms = 0
        self._min_ms = None
        self._max_ms = None
