"""Periodic reader of a live registry via background thread.

The ``SnapshotPoller`` runs a daemon thread that reads a ``StatsRegistry``
at regular intervals and records each reading in a ``SnapshotStore``.
Producers keep writing to the registry meanwhile; a reading only waits on
the short per-entry locks.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from loadstats._internal.errors import PollerError
from loadstats._internal.logging import get_logger
from loadstats.live.store import RegistrySnapshot

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadstats._internal.config import ReportConfig
    from loadstats.live.registry import StatsRegistry
    from loadstats.live.store import SnapshotStore

logger = get_logger("live.poller")


class SnapshotPoller:
    """Reads a registry every ``tick_interval`` seconds.

    Attributes:
        tick_interval: Seconds between readings.
    """

    def __init__(
        self,
        registry: StatsRegistry,  # type: ignore[type-arg]
        store: SnapshotStore,
        *,
        on_snapshot: Callable[[RegistrySnapshot], None] | None = None,
        tick_interval: float = 1.0,
    ) -> None:
        """Initialize the poller.

        Args:
            registry: Registry to read.
            store: Store receiving every reading.
            on_snapshot: Optional callback invoked with each new reading,
                from the poller thread.
            tick_interval: Seconds between readings.
        """
        self._registry = registry
        self._store = store
        self._on_snapshot = on_snapshot
        self.tick_interval = tick_interval

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._start_time: float = 0.0

    @classmethod
    def from_config(
        cls,
        registry: StatsRegistry,  # type: ignore[type-arg]
        store: SnapshotStore,
        config: ReportConfig,
        *,
        on_snapshot: Callable[[RegistrySnapshot], None] | None = None,
    ) -> SnapshotPoller:
        """Build a poller ticking at ``config.tick_interval``."""
        return cls(registry, store, on_snapshot=on_snapshot, tick_interval=config.tick_interval)

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Start the poller thread.

        Raises:
            PollerError: If the poller is already running.
        """
        if self._thread is not None:
            msg = "Snapshot poller is already running"
            raise PollerError(msg)
        self._start_time = time.monotonic()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="loadstats-poller",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Poller thread started (tick=%.3fs)", self.tick_interval)

    def stop(self) -> None:
        """Stop the poller thread, waiting for its final reading."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None
        logger.debug("Poller thread stopped")

    def poll(self) -> RegistrySnapshot:
        """Take one reading now, store it and notify the callback."""
        snapshot = RegistrySnapshot(
            elapsed_seconds=time.monotonic() - self._start_time,
            rows=self._registry.snapshot(),
        )
        self._store.append(snapshot)
        if self._on_snapshot is not None:
            self._on_snapshot(snapshot)
        return snapshot

    def _run_loop(self) -> None:
        while not self._stop_event.wait(timeout=self.tick_interval):
            self.poll()

        # Final reading so the store ends with the state at stop time
        self.poll()
