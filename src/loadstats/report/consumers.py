"""Registry of named summaries.

Summaries are registered explicitly by name with a factory building their
strategy from a :class:`ReportConfig`; nothing is discovered at runtime.

Example::

    pipeline = create_pipeline("errors", load_config())
    table = pipeline.run(read_samples("results.csv"))

    register_summary("by_code", lambda config: ByCodeSummary())
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loadstats._internal.config import ReportConfig
from loadstats._internal.errors import ReportError
from loadstats._internal.logging import get_logger
from loadstats.report.errors_summary import ErrorsSummary
from loadstats.report.pipeline import SummaryPipeline
from loadstats.report.top_errors_by_sampler import TopErrorsBySampler

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadstats.report.pipeline import SummaryStrategy

logger = get_logger("report.consumers")


@dataclass(frozen=True)
class SummaryRegistration:
    """Registration entry for a named summary.

    Attributes:
        name: Summary name used on the command line and in exports.
        factory: Builds the strategy from the active configuration.
        suppress_empty_overall: Passed to the pipeline.
        description: Human-readable description.
    """

    name: str
    factory: Callable[[ReportConfig], SummaryStrategy[Any]]
    suppress_empty_overall: bool = False
    description: str = ""


_registry: dict[str, SummaryRegistration] = {}
_lock = threading.Lock()


def register_summary(
    name: str,
    factory: Callable[[ReportConfig], SummaryStrategy[Any]],
    *,
    suppress_empty_overall: bool = False,
    description: str = "",
    force: bool = False,
) -> SummaryRegistration:
    """Register a summary strategy factory under *name*.

    Raises:
        ReportError: If *name* is taken and *force* is False.
    """
    registration = SummaryRegistration(
        name=name,
        factory=factory,
        suppress_empty_overall=suppress_empty_overall,
        description=description,
    )
    with _lock:
        if name in _registry and not force:
            msg = f"Summary {name!r} is already registered. Use force=True to override."
            raise ReportError(msg)
        _registry[name] = registration
    logger.debug("Registered summary %r", name)
    return registration


def unregister_summary(name: str) -> None:
    """Remove *name* from the registry; unknown names are ignored."""
    with _lock:
        _registry.pop(name, None)


def available_summaries() -> list[str]:
    """Return registered summary names in registration order."""
    with _lock:
        return list(_registry)


def get_registration(name: str) -> SummaryRegistration:
    """Return the registration for *name*.

    Raises:
        ReportError: If *name* is not registered.
    """
    with _lock:
        registration = _registry.get(name)
        choices = ", ".join(_registry)
    if registration is None:
        msg = f"Unknown summary: {name!r}. Choose from: {choices}"
        raise ReportError(msg)
    return registration


def create_pipeline(name: str, config: ReportConfig | None = None) -> SummaryPipeline[Any]:
    """Build a fresh pipeline for the summary registered as *name*."""
    registration = get_registration(name)
    strategy = registration.factory(config or ReportConfig())
    return SummaryPipeline(
        strategy,
        suppress_empty_overall=registration.suppress_empty_overall,
    )


register_summary(
    "errors",
    lambda config: ErrorsSummary(use_assertion_message=config.use_assertion_message),
    suppress_empty_overall=True,
    description="Error count and share per error signature.",
)
register_summary(
    "top5_errors_by_sampler",
    lambda config: TopErrorsBySampler(
        ignore_transaction_controllers=config.ignore_transaction_controllers,
        use_assertion_message=config.use_assertion_message,
    ),
    description="Five most frequent error signatures per sampler.",
)
