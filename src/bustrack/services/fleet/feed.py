"""Polling feed that keeps the last known fleet snapshot in memory."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ...data import buses_repository, locations_repository
from ...models.domain import Bus, BusLocation
from ..liveness import Clock, utc_now
from .status import FleetEntry, TrackingSummary, build_entries, history_cutoff, summarize_tracking

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FleetSnapshot:
    buses: tuple[Bus, ...]
    latest: dict[str, BusLocation]
    fetched_at: datetime
    sequence: int


Fetcher = Callable[[], tuple[Sequence[Bus], dict[str, BusLocation]]]


def fetch_tracked_fleet(now: Optional[datetime] = None) -> tuple[list[Bus], dict[str, BusLocation]]:
    """Default fetcher: GPS-equipped buses and their latest locations."""
    buses = buses_repository.list_buses(gps_only=True)
    return buses, locations_repository.get_latest_locations([bus.id for bus in buses], history_cutoff(now))


class FleetFeed:
    """Re-fetches the fleet on a fixed interval.

    A failed refresh keeps the previous snapshot. Refreshes are numbered when
    they start, and a result is only applied if no later refresh has already
    been applied, so a slow response never replaces a newer one.
    Liveness is evaluated on read, so labels age between polls.
    """

    def __init__(self, fetcher: Optional[Fetcher] = None, clock: Clock = utc_now) -> None:
        self._fetcher = fetcher or (lambda: fetch_tracked_fleet(clock()))
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: Optional[FleetSnapshot] = None
        self._issued = 0
        self._last_error: Optional[str] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def snapshot(self) -> Optional[FleetSnapshot]:
        return self._snapshot

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def refresh(self) -> bool:
        """Fetch once. Returns True if the result became the current snapshot."""
        with self._lock:
            self._issued += 1
            sequence = self._issued
        try:
            buses, latest = self._fetcher()
        except Exception as exc:
            logger.warning(f"Fleet refresh #{sequence} failed, keeping last snapshot: {exc}")
            with self._lock:
                # A failure older than the applied snapshot is stale.
                if self._snapshot is None or self._snapshot.sequence < sequence:
                    self._last_error = str(exc)
            return False

        snapshot = FleetSnapshot(
            buses=tuple(buses),
            latest=dict(latest),
            fetched_at=self._clock(),
            sequence=sequence,
        )
        with self._lock:
            if self._snapshot is not None and self._snapshot.sequence > sequence:
                logger.debug(f"Discarding fleet refresh #{sequence}; #{self._snapshot.sequence} is newer")
                return False
            self._snapshot = snapshot
            self._last_error = None
        return True

    def entries(self) -> list[FleetEntry]:
        snapshot = self._snapshot
        if snapshot is None:
            return []
        return build_entries(snapshot.buses, snapshot.latest, self._clock())

    def tracking(self) -> TrackingSummary:
        return summarize_tracking(self.entries())

    def start(self, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("Polling interval must be positive.")
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            args=(interval_seconds,),
            name="fleet-feed",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Fleet feed started (every {interval_seconds}s)")

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info("Fleet feed stopped")

    def _run(self, interval_seconds: float) -> None:
        while not self._stop.is_set():
            self.refresh()
            self._stop.wait(interval_seconds)
