"""Fleet status endpoints backing the dashboard, fleet list, detail and tracking screens."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, Request, status

from ...config import settings
from ...services.fleet import (
    FleetFeed,
    compute_dashboard,
    compute_tracking,
    filter_entries,
    get_bus_detail,
    load_fleet,
)
from ...schemas.fleet import (
    BusDetailResponse,
    DashboardResponse,
    DashboardStatsModel,
    FeedResponse,
    FleetListResponse,
    TrackingResponse,
)
from ...services.outputs.formatter import entries_to_models, entry_to_model, onboard_to_models
from ..errors import to_http_exception

router = APIRouter(prefix="/fleet", tags=["fleet"])


@router.get("/dashboard", response_model=DashboardResponse, status_code=status.HTTP_200_OK)
def get_dashboard() -> DashboardResponse:
    try:
        stats, entries = compute_dashboard()
    except Exception as exc:
        raise to_http_exception(exc, "load dashboard") from exc
    return DashboardResponse(
        stats=DashboardStatsModel(
            totalBuses=stats.total_buses,
            activeBuses=stats.active_buses,
            onlineNow=stats.online_now,
            studentsTracked=stats.students_tracked,
        ),
        buses=entries_to_models(entries),
        refreshSeconds=settings.poll_interval("dashboard"),
    )


@router.get("/buses", response_model=FleetListResponse, status_code=status.HTTP_200_OK)
def list_fleet(
    search: str | None = Query(default=None, description="Match on bus name or number"),
    status_filter: Literal["all", "active", "online"] = Query(default="all", alias="status"),
) -> FleetListResponse:
    try:
        entries = filter_entries(load_fleet(), search=search, status=status_filter)
    except Exception as exc:
        raise to_http_exception(exc, "list fleet") from exc
    return FleetListResponse(
        items=entries_to_models(entries),
        total=len(entries),
        refreshSeconds=settings.poll_interval("fleet"),
    )


@router.get("/buses/{bus_id}", response_model=BusDetailResponse, status_code=status.HTTP_200_OK)
def get_fleet_bus(bus_id: str) -> BusDetailResponse:
    try:
        detail = get_bus_detail(bus_id)
    except Exception as exc:
        raise to_http_exception(exc, "load bus details") from exc
    return BusDetailResponse(
        entry=entry_to_model(detail.entry),
        studentsOnboard=detail.students_onboard,
        capacity=detail.entry.bus.capacity,
        students=onboard_to_models(detail.students),
        refreshSeconds=settings.poll_interval("bus_detail"),
    )


@router.get("/tracking", response_model=TrackingResponse, status_code=status.HTTP_200_OK)
def get_tracking() -> TrackingResponse:
    try:
        summary = compute_tracking()
    except Exception as exc:
        raise to_http_exception(exc, "load tracking data") from exc
    return TrackingResponse(
        totalTracked=summary.total_tracked,
        online=summary.online,
        offline=summary.offline,
        buses=entries_to_models(summary.entries),
        refreshSeconds=settings.poll_interval("tracking"),
    )


@router.get("/feed", response_model=FeedResponse, status_code=status.HTTP_200_OK)
def get_feed(request: Request) -> FeedResponse:
    """Serve the in-memory tracking snapshot, fetching once if the feed is cold."""
    feed: FleetFeed = request.app.state.fleet_feed
    if feed.snapshot is None:
        feed.refresh()
    summary = feed.tracking()
    snapshot = feed.snapshot
    return FeedResponse(
        running=feed.running,
        fetchedAt=snapshot.fetched_at if snapshot else None,
        lastError=feed.last_error,
        totalTracked=summary.total_tracked,
        online=summary.online,
        offline=summary.offline,
        buses=entries_to_models(summary.entries),
    )
