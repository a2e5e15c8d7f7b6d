"""Fleet views combining buses, their latest location and liveness."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Literal, Optional, Sequence

from ...config import settings
from ...data import buses_repository, locations_repository, schools_repository, students_repository
from ...models.domain import Bus, BusLocation, School, Student, StudentBusAssignment
from ..liveness import LivenessStatus, evaluate_status, utc_now

logger = logging.getLogger(__name__)

StatusFilter = Literal["all", "active", "online"]


@dataclass(slots=True)
class FleetEntry:
    bus: Bus
    location: Optional[BusLocation]
    status: LivenessStatus


@dataclass(slots=True)
class DashboardStats:
    total_buses: int
    active_buses: int
    online_now: int
    students_tracked: int


@dataclass(slots=True)
class TrackingSummary:
    total_tracked: int
    online: int
    offline: int
    entries: list[FleetEntry] = field(default_factory=list)


@dataclass(slots=True)
class BusDetail:
    entry: FleetEntry
    students: list[tuple[Student, StudentBusAssignment]]

    @property
    def students_onboard(self) -> int:
        return len(self.students)


def build_entries(
    buses: Sequence[Bus],
    latest: dict[str, BusLocation],
    now: Optional[datetime] = None,
) -> list[FleetEntry]:
    """Pair every bus with its latest location and evaluate them against one instant."""
    instant = now or utc_now()
    entries: list[FleetEntry] = []
    for bus in buses:
        location = latest.get(bus.id)
        report = location.to_report() if location else None
        entries.append(
            FleetEntry(
                bus=bus,
                location=location,
                status=evaluate_status(
                    report,
                    bus.location_capable,
                    instant,
                    threshold_minutes=settings.online_threshold_minutes,
                ),
            )
        )
    return entries


def history_cutoff(now: Optional[datetime] = None) -> Optional[datetime]:
    """Oldest location time worth reading, or None when history is unbounded."""
    if settings.location_history_hours is None:
        return None
    return (now or utc_now()) - timedelta(hours=settings.location_history_hours)


def _fetch_latest(buses: Sequence[Bus], now: Optional[datetime] = None) -> dict[str, BusLocation]:
    # A failed location fetch leaves buses without a report rather than failing the whole view.
    try:
        return locations_repository.get_latest_locations([bus.id for bus in buses], history_cutoff(now))
    except Exception as exc:
        logger.warning(f"Failed to fetch bus locations: {exc}")
        return {}


def load_fleet(
    school_id: str | None = None,
    gps_only: bool = False,
    limit: int | None = None,
    now: Optional[datetime] = None,
) -> list[FleetEntry]:
    buses = buses_repository.list_buses(school_id=school_id, gps_only=gps_only, limit=limit)
    return build_entries(buses, _fetch_latest(buses, now), now)


def filter_entries(
    entries: Iterable[FleetEntry],
    search: str | None = None,
    status: StatusFilter = "all",
) -> list[FleetEntry]:
    """Filter by a case-insensitive search on name or number and by status."""
    term = (search or "").strip().lower()
    selected: list[FleetEntry] = []
    for entry in entries:
        if term and term not in entry.bus.name.lower() and term not in entry.bus.bus_number.lower():
            continue
        if status == "active" and entry.bus.status != "active":
            continue
        if status == "online" and not entry.status.is_online:
            continue
        selected.append(entry)
    return selected


def summarize_dashboard(entries: Sequence[FleetEntry], students_tracked: int) -> DashboardStats:
    return DashboardStats(
        total_buses=len(entries),
        active_buses=sum(1 for entry in entries if entry.bus.status == "active"),
        online_now=sum(1 for entry in entries if entry.status.is_online),
        students_tracked=students_tracked,
    )


def summarize_tracking(entries: Sequence[FleetEntry]) -> TrackingSummary:
    online = sum(1 for entry in entries if entry.status.is_online)
    return TrackingSummary(
        total_tracked=len(entries),
        online=online,
        offline=len(entries) - online,
        entries=list(entries),
    )


def compute_dashboard(now: Optional[datetime] = None) -> tuple[DashboardStats, list[FleetEntry]]:
    entries = load_fleet(limit=settings.dashboard_bus_limit, now=now)
    try:
        students_tracked = len({a.student_id for a in students_repository.list_active_assignments()})
    except Exception as exc:
        logger.warning(f"Failed to count tracked students: {exc}")
        students_tracked = 0
    return summarize_dashboard(entries, students_tracked), entries


def compute_tracking(now: Optional[datetime] = None) -> TrackingSummary:
    return summarize_tracking(load_fleet(gps_only=True, now=now))


def get_bus_detail(bus_id: str, now: Optional[datetime] = None) -> BusDetail:
    """Bus with its latest report, liveness and students onboard."""
    bus = buses_repository.get_bus(bus_id)
    try:
        location = locations_repository.get_latest_location(bus_id, history_cutoff(now))
    except Exception as exc:
        logger.warning(f"Failed to fetch location for bus {bus_id}: {exc}")
        location = None
    try:
        students = students_repository.list_students_on_bus(bus_id)
    except Exception as exc:
        logger.warning(f"Failed to fetch students for bus {bus_id}: {exc}")
        students = []
    latest = {bus.id: location} if location else {}
    return BusDetail(entry=build_entries([bus], latest, now)[0], students=students)


def list_portal_schools() -> list[School]:
    return schools_repository.list_schools()


def compute_portal(school_id: str, now: Optional[datetime] = None) -> list[FleetEntry]:
    """Buses serving one school, as shown on the public student portal."""
    return load_fleet(school_id=school_id, now=now)
