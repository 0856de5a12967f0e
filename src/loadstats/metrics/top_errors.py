"""Most frequent error signatures for one grouping key."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from operator import itemgetter
from typing import TYPE_CHECKING

from loadstats.sample import error_signature

if TYPE_CHECKING:
    from loadstats._internal.types import RankedError
    from loadstats.sample import Sample

MAX_ERRORS_IN_TOP = 5


@dataclass(frozen=True)
class TopErrorsReadout:
    """Point-in-time copy of a tracker.

    Attributes:
        total: Number of samples counted.
        errors: Number of failed samples counted.
        top: Most frequent error signatures, highest count first.
    """

    total: int
    errors: int
    top: list[RankedError] = field(default_factory=list)


class TopErrorsTracker:
    """Counts samples, errors and occurrences of every error signature.

    Every distinct signature is kept in the frequency table; only the
    :meth:`top` projection is bounded. The projection is computed on read,
    and equal counts keep the order in which signatures were first seen.
    """

    def __init__(self) -> None:
        self._total = 0
        self._errors = 0
        # dict keeps first-insertion order, which is the tie-break order
        self._frequencies: dict[str, int] = {}

    @property
    def total(self) -> int:
        return self._total

    @property
    def errors(self) -> int:
        return self._errors

    def register_error(self, classification: str) -> None:
        """Count one occurrence of *classification*."""
        self._frequencies[classification] = self._frequencies.get(classification, 0) + 1

    def inc_errors(self) -> None:
        self._errors += 1

    def inc_total(self) -> None:
        self._total += 1

    def top(self, n: int = MAX_ERRORS_IN_TOP) -> list[RankedError]:
        """Return the *n* most frequent signatures as ``(signature, count)``.

        The list is shorter than *n* when fewer signatures were seen; callers
        that need fixed-width rows pad it themselves.
        """
        # nlargest is stable: equal counts keep dict (first-seen) order
        return heapq.nlargest(n, self._frequencies.items(), key=itemgetter(1))

    def add_sample(self, sample: Sample, *, use_assertion_message: bool = True) -> None:
        """Count *sample*, registering its error signature if it failed."""
        if not sample.success:
            self.register_error(
                error_signature(sample, use_assertion_message=use_assertion_message)
            )
            self.inc_errors()
        self.inc_total()

    def snapshot(self) -> TopErrorsReadout:
        return TopErrorsReadout(total=self._total, errors=self._errors, top=self.top())
