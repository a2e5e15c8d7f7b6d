import time
from datetime import timedelta

import pytest

from bustrack.models.domain import Bus, BusLocation
from bustrack.services.fleet import FleetFeed

from conftest import NOW


class Clock:
    def __init__(self) -> None:
        self.now = NOW

    def __call__(self):
        return self.now


def _bus(bus_id: str) -> Bus:
    return Bus(id=bus_id, school_id="s1", name=f"Bus {bus_id}", bus_number=bus_id, has_gps=True)


def _location(bus_id: str) -> BusLocation:
    return BusLocation(id=f"l-{bus_id}", bus_id=bus_id, latitude=1.0, longitude=2.0, created_at=NOW)


def test_refresh_stores_snapshot():
    clock = Clock()
    feed = FleetFeed(fetcher=lambda: ([_bus("b1")], {"b1": _location("b1")}), clock=clock)

    assert feed.refresh() is True
    assert feed.snapshot.fetched_at == NOW
    assert feed.tracking().online == 1


def test_failed_refresh_keeps_last_snapshot():
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) > 1:
            raise ConnectionError("network down")
        return [_bus("b1")], {"b1": _location("b1")}

    feed = FleetFeed(fetcher=fetcher, clock=Clock())
    feed.refresh()

    assert feed.refresh() is False
    assert feed.last_error == "network down"
    assert [entry.bus.id for entry in feed.entries()] == ["b1"]


def test_slow_refresh_does_not_replace_newer_result():
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) == 1:
            # A second poll starts and completes while the first is still in flight.
            assert feed.refresh() is True
            return [_bus("stale")], {}
        return [_bus("fresh")], {}

    feed = FleetFeed(fetcher=fetcher, clock=Clock())

    assert feed.refresh() is False
    assert [bus.id for bus in feed.snapshot.buses] == ["fresh"]
    assert feed.snapshot.sequence == 2


def test_liveness_ages_between_polls():
    clock = Clock()
    feed = FleetFeed(fetcher=lambda: ([_bus("b1")], {"b1": _location("b1")}), clock=clock)
    feed.refresh()

    assert feed.entries()[0].status.label == "Online"

    clock.now = NOW + timedelta(minutes=7)
    entry = feed.entries()[0]
    assert entry.status.label == "Offline"
    assert entry.status.time_since == "7m ago"


def test_cold_feed_is_empty():
    feed = FleetFeed(fetcher=lambda: ([], {}), clock=Clock())
    assert feed.entries() == []
    assert feed.tracking().total_tracked == 0


def test_start_and_stop_background_polling():
    feed = FleetFeed(fetcher=lambda: ([_bus("b1")], {}), clock=Clock())
    feed.start(0.01)
    try:
        assert feed.running is True
        for _ in range(200):
            if feed.snapshot is not None:
                break
            time.sleep(0.01)
        assert feed.snapshot is not None
    finally:
        feed.stop()
    assert feed.running is False


def test_start_rejects_non_positive_interval():
    feed = FleetFeed(fetcher=lambda: ([], {}), clock=Clock())
    with pytest.raises(ValueError):
        feed.start(0)


def test_slow_failure_does_not_flag_newer_snapshot():
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) == 1:
            assert feed.refresh() is True
            raise TimeoutError("first poll timed out")
        return [_bus("fresh")], {}

    feed = FleetFeed(fetcher=fetcher, clock=Clock())

    assert feed.refresh() is False
    assert feed.last_error is None
    assert [bus.id for bus in feed.snapshot.buses] == ["fresh"]


def test_newer_failure_is_reported_over_older_snapshot():
    calls = []

    def fetcher():
        calls.append(1)
        if len(calls) == 2:
            raise ConnectionError("network down")
        return [_bus("b1")], {}

    feed = FleetFeed(fetcher=fetcher, clock=Clock())
    feed.refresh()
    feed.refresh()

    assert feed.last_error == "network down"
    assert feed.refresh() is True
    assert feed.last_error is None


def test_default_fetcher_reads_history_relative_to_feed_clock(seeded):
    clock = Clock()
    feed = FleetFeed(clock=clock)
    feed.refresh()
    assert sorted(feed.snapshot.latest) == ["b1", "b2"]

    clock.now = NOW + timedelta(days=2)
    feed.refresh()
    assert feed.snapshot.latest == {}
    assert [entry.status.time_since for entry in feed.entries()] == ["No data"] * 3
