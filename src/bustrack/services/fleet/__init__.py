"""Fleet status helpers."""

from .feed import FleetFeed, FleetSnapshot, fetch_tracked_fleet
from .status import (
    BusDetail,
    DashboardStats,
    FleetEntry,
    TrackingSummary,
    build_entries,
    compute_dashboard,
    compute_portal,
    compute_tracking,
    filter_entries,
    get_bus_detail,
    list_portal_schools,
    load_fleet,
    summarize_dashboard,
    summarize_tracking,
)

__all__ = [
    "FleetFeed",
    "FleetSnapshot",
    "fetch_tracked_fleet",
    "BusDetail",
    "DashboardStats",
    "FleetEntry",
    "TrackingSummary",
    "build_entries",
    "compute_dashboard",
    "compute_portal",
    "compute_tracking",
    "filter_entries",
    "get_bus_detail",
    "list_portal_schools",
    "load_fleet",
    "summarize_dashboard",
    "summarize_tracking",
]
