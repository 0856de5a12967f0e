"""Custom exception hierarchy for loadstats."""

from __future__ import annotations


class LoadStatsError(Exception):
    """Base exception for all loadstats errors.

    Every error raised by the aggregation engine inherits from this class,
    so callers can catch any loadstats-specific failure with a single
    except clause.
    """


class ConfigError(LoadStatsError):
    """Raised when configuration is invalid or missing.

    Examples:
        - An environment variable has a value of the wrong type.
        - A rate granularity lower than one millisecond.
        - An aggregator name that is not registered.
    """


class PipelineStateError(LoadStatsError):
    """Raised when a summary pipeline is driven out of order.

    Examples:
        - ``consume()`` before ``start()`` or after ``finish()``.
        - ``build_table()`` on a pipeline that has not finished.
        - ``start()`` on a pipeline that is already running.
    """


class KeyExtractionError(LoadStatsError):
    """Raised when a summary strategy's key function returns something other than a string."""


class PollerError(LoadStatsError):
    """Raised when a snapshot poller is started while its thread is still running."""


class ReportError(LoadStatsError):
    """Raised when a result table or summary registry is misused.

    Examples:
        - A row whose width does not match the table titles.
        - Registering a summary name twice without ``force=True``.
        - Asking for a summary name that was never registered.
    """


class ResultsFileError(LoadStatsError):
    """Raised when a results file cannot be read as a sample stream."""
