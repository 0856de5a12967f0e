"""Thread-safe in-memory history of registry snapshots."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistrySnapshot:
    """One reading of a ``StatsRegistry``.

    Attributes:
        elapsed_seconds: Seconds since the poller started.
        rows: ``(key, readout)`` pairs, keyed entries first, overall last.
    """

    elapsed_seconds: float
    rows: list[tuple[str, object]] = field(default_factory=list)

    @property
    def overall(self) -> object | None:
        """Readout of the overall entry, None if the snapshot is empty."""
        if not self.rows:
            return None
        return self.rows[-1][1]


class SnapshotStore:
    """Time-series of :class:`RegistrySnapshot` objects.

    The poller thread appends while other threads read; a
    ``threading.Lock`` protects the list.
    """

    def __init__(self) -> None:
        self._snapshots: list[RegistrySnapshot] = []
        self._lock = threading.Lock()

    def append(self, snapshot: RegistrySnapshot) -> None:
        with self._lock:
            self._snapshots.append(snapshot)

    def get_all(self) -> list[RegistrySnapshot]:
        """Return a copy of all stored snapshots, oldest first."""
        with self._lock:
            return list(self._snapshots)

    def get_latest(self) -> RegistrySnapshot | None:
        """Return the most recent snapshot, or None if the store is empty."""
        with self._lock:
            if not self._snapshots:
                return None
            return self._snapshots[-1]

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)
