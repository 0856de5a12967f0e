"""Numeric aggregators turning accumulated values into rates and statistics.

Every aggregator follows the same small lifecycle: feed values with
:meth:`Aggregator.add_value`, read :attr:`Aggregator.result` whenever
needed, and :meth:`Aggregator.reset` between buckets. Aggregators are not
thread-safe; the owner serializes access (see ``live.registry``).
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import numpy as np

from loadstats._internal.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable


def percentage(part: float, whole: float) -> float:
    """Return ``part * 100 / whole``, or NaN when *whole* is zero.

    Empty reports are a normal input, so a zero denominator yields the NaN
    sentinel instead of raising.
    """
    if whole == 0:
        return math.nan
    return part * 100.0 / whole


class Aggregator(ABC):
    """Abstract base for value aggregators."""

    @abstractmethod
    def add_value(self, value: float) -> None:
        """Feed one value into the aggregator."""

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of values fed since the last reset."""

    @property
    @abstractmethod
    def result(self) -> float:
        """Aggregated result for the values fed so far."""

    @abstractmethod
    def reset(self) -> None:
        """Forget every value fed so far, keeping configuration."""


class TimeRateAggregator(Aggregator):
    """Convert a quantity accumulated over one bucket into a per-second rate.

    ``result`` is ``accumulated * 1000 / granularity`` where ``granularity``
    is the bucket width in milliseconds.

    Example::

        rate = TimeRateAggregator(granularity=1000)
        for _ in range(5):
            rate.add_value(1)
        rate.result  # 5.0 samples per second
    """

    def __init__(self, granularity: int = 1) -> None:
        self._count = 0
        self._value = 0.0
        self._granularity = 1
        self.granularity = granularity

    @property
    def granularity(self) -> int:
        """Bucket width in milliseconds."""
        return self._granularity

    @granularity.setter
    def granularity(self, value: int) -> None:
        if value < 1:
            msg = f"granularity must be >= 1 ms, got: {value}"
            raise ConfigError(msg)
        self._granularity = value

    @property
    def count(self) -> int:
        return self._count

    @property
    def result(self) -> float:
        return self._value * 1000 / self._granularity

    def add_value(self, value: float) -> None:
        self._count += 1
        self._value += value

    def reset(self) -> None:
        self._count = 0
        self._value = 0.0


class SumAggregator(Aggregator):
    """Sum of all values."""

    def __init__(self) -> None:
        self._count = 0
        self._sum = 0.0

    @property
    def count(self) -> int:
        return self._count

    @property
    def result(self) -> float:
        return self._sum

    def add_value(self, value: float) -> None:
        self._count += 1
        self._sum += value

    def reset(self) -> None:
        self._count = 0
        self._sum = 0.0


class MeanAggregator(SumAggregator):
    """Arithmetic mean of all values, 0.0 when empty."""

    @property
    def result(self) -> float:
        if self._count == 0:
            return 0.0
        return self._sum / self._count


class _ExtremumAggregator(Aggregator):
    """Shared state for min/max aggregators."""

    def __init__(self) -> None:
        self._count = 0
        self._extremum: float | None = None

    @property
    def count(self) -> int:
        return self._count

    @property
    def result(self) -> float:
        return 0.0 if self._extremum is None else self._extremum

    def add_value(self, value: float) -> None:
        self._count += 1
        if self._extremum is None or self._better(value, self._extremum):
            self._extremum = value

    def reset(self) -> None:
        self._count = 0
        self._extremum = None

    @staticmethod
    @abstractmethod
    def _better(candidate: float, current: float) -> bool: ...


class MinAggregator(_ExtremumAggregator):
    """Smallest value, 0.0 when empty."""

    @staticmethod
    def _better(candidate: float, current: float) -> bool:
        return candidate < current


class MaxAggregator(_ExtremumAggregator):
    """Largest value, 0.0 when empty."""

    @staticmethod
    def _better(candidate: float, current: float) -> bool:
        return candidate > current


class PercentileAggregator(Aggregator):
    """Exact percentile over every value of the bucket.

    Values are kept until :meth:`reset`, so this aggregator suits
    per-interval buckets rather than whole-test accumulation (use
    ``LatencyHistogram`` for that).
    """

    def __init__(self, percentile: float = 90.0) -> None:
        if not 0.0 <= percentile <= 100.0:
            msg = f"percentile must be within [0, 100], got: {percentile}"
            raise ConfigError(msg)
        self.percentile = percentile
        self._values: list[float] = []

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def result(self) -> float:
        if not self._values:
            return 0.0
        arr = np.array(self._values, dtype=np.float64)
        return float(np.percentile(arr, self.percentile))

    def add_value(self, value: float) -> None:
        self._values.append(value)

    def reset(self) -> None:
        self._values.clear()


_AGGREGATORS: dict[str, Callable[..., Aggregator]] = {
    "time_rate": TimeRateAggregator,
    "sum": SumAggregator,
    "mean": MeanAggregator,
    "min": MinAggregator,
    "max": MaxAggregator,
    "percentile": PercentileAggregator,
}


def create_aggregator(name: str, **kwargs: Any) -> Aggregator:
    """Build an aggregator by name.

    Args:
        name: One of ``time_rate``, ``sum``, ``mean``, ``min``, ``max``
            or ``percentile``.
        **kwargs: Forwarded to the aggregator constructor (e.g.
            ``granularity=1000`` or ``percentile=95.0``).

    Returns:
        A fresh aggregator.

    Raises:
        ConfigError: If *name* is unknown.
    """
    try:
        factory = _AGGREGATORS[name]
    except KeyError:
        choices = ", ".join(sorted(_AGGREGATORS))
        msg = f"Unknown aggregator: {name!r}. Choose from: {choices}"
        raise ConfigError(msg) from None
    return factory(**kwargs)
