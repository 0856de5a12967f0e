"""Concurrent keyed registry of accumulators for live statistics.

Producer threads call :meth:`StatsRegistry.add` while a reader calls
:meth:`StatsRegistry.snapshot` on its own schedule. Locking is split in
two levels:

- a structural lock guarding insertion into the key -> entry mapping
  (and :meth:`StatsRegistry.clear`), never held while an accumulator runs;
- one lock per entry, the overall entry included, held only for the
  duration of a single accumulator update or readout.

Updates of unrelated keys therefore never wait on each other, and the
overall row is still correct under concurrent writers. The keyed update and
the overall update of one ``add`` are not atomic together: a reader may see
one before the other.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from loadstats._internal.logging import get_logger
from loadstats.metrics.accumulator import Accumulator

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadstats.sample import Sample

logger = get_logger("live.registry")

A = TypeVar("A", bound=Accumulator[object])

DEFAULT_TOTAL_LABEL = "TOTAL"


@dataclass
class RegistryEntry(Generic[A]):
    """One statistics bucket of the registry.

    Attributes:
        key: Grouping key of the bucket.
        accumulator: State owned exclusively by this entry.
        index: Creation order, assigned once when the key is first seen.
        lock: Serializes access to ``accumulator``.
    """

    key: str
    accumulator: A
    index: int
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class StatsRegistry(Generic[A]):
    """Thread-safe mapping from key to accumulator plus an overall entry.

    Example::

        registry = StatsRegistry(LatencyAccumulator)
        registry.add("Login", sample)          # from any producer thread
        for key, stats in registry.snapshot():  # from the reader
            ...

    Attributes:
        total_label: Key reported for the overall entry.
        use_group_name: :meth:`add_sample` keys samples by
            ``"<thread group>:<name>"`` instead of the bare name.
    """

    def __init__(
        self,
        accumulator_factory: Callable[[str], A],
        *,
        total_label: str = DEFAULT_TOTAL_LABEL,
        use_group_name: bool = False,
    ) -> None:
        """Create an empty registry with its overall entry.

        Args:
            accumulator_factory: Called with the key to build the accumulator
                of a newly seen key (and of the overall entry).
            total_label: Key reported for the overall entry.
            use_group_name: Prefix keys with the thread group in
                :meth:`add_sample`.
        """
        self._factory = accumulator_factory
        self.total_label = total_label
        self.use_group_name = use_group_name

        self._lock = threading.Lock()
        self._entries: dict[str, RegistryEntry[A]] = {}
        self._next_index = 0
        self._overall: RegistryEntry[A] = self._new_overall()

    def _new_overall(self) -> RegistryEntry[A]:
        return RegistryEntry(
            key=self.total_label,
            accumulator=self._factory(self.total_label),
            index=-1,
        )

    def _get_or_create(self, key: str) -> RegistryEntry[A]:
        entry = self._entries.get(key)
        if entry is not None:
            return entry

        with self._lock:
            # Re-check: another producer may have won the race for this key.
            entry = self._entries.get(key)
            if entry is None:
                entry = RegistryEntry(
                    key=key,
                    accumulator=self._factory(key),
                    index=self._next_index,
                )
                self._next_index += 1
                self._entries[key] = entry
                logger.debug("New key %r at index %d", key, entry.index)
        return entry

    def add(self, key: str, sample: Sample) -> None:
        """Record *sample* under *key* and under the overall entry.

        Empty group markers are ignored: no key is created and no counter
        moves.

        Args:
            key: Grouping key. Created on first use, exactly once even when
                several threads see it at the same time.
            sample: The sample to record.
        """
        if sample.is_empty_group:
            return

        entry = self._get_or_create(key)
        with entry.lock:
            entry.accumulator.add_sample(sample)

        overall = self._overall
        with overall.lock:
            overall.accumulator.add_sample(sample)

    def add_sample(self, sample: Sample) -> None:
        """Record *sample* under its own label."""
        self.add(sample.label(self.use_group_name), sample)

    def snapshot(self) -> list[tuple[str, object]]:
        """Read every entry in creation order, the overall entry last.

        Each readout is taken under its entry's lock only, so writers on
        other keys are not held up.

        Returns:
            ``(key, readout)`` pairs where the readout is whatever the
            accumulator's ``snapshot()`` returns.
        """
        with self._lock:
            entries = sorted(self._entries.values(), key=lambda e: e.index)
            overall = self._overall

        rows: list[tuple[str, object]] = []
        for entry in [*entries, overall]:
            with entry.lock:
                rows.append((entry.key, entry.accumulator.snapshot()))
        return rows

    def clear(self) -> None:
        """Drop every keyed entry and start a fresh overall entry.

        Adds racing with ``clear`` land either in the discarded state or in
        the new one.
        """
        with self._lock:
            self._entries = {}
            self._next_index = 0
            self._overall = self._new_overall()
        logger.debug("Registry cleared")

    def keys(self) -> list[str]:
        """Return keyed entries in creation order (overall excluded)."""
        with self._lock:
            return [e.key for e in sorted(self._entries.values(), key=lambda e: e.index)]

    def __len__(self) -> int:
        """Return the number of keyed entries (overall excluded)."""
        with self._lock:
            return len(self._entries)
