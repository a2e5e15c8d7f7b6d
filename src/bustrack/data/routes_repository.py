"""Bus routes and their stops stored in Supabase."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_supabase_client
from ..models.domain import BusRoute, RouteStop


def _row_to_route(row: dict[str, Any]) -> BusRoute:
    return BusRoute(
        id=str(row["id"]),
        school_id=str(row["school_id"]) if row.get("school_id") else None,
        name=str(row.get("name") or ""),
        route_type=row.get("route_type"),
        is_active=bool(row.get("is_active", True)),
        metadata=row.get("metadata") or {},
    )


def _row_to_stop(row: dict[str, Any]) -> RouteStop:
    return RouteStop(
        id=str(row["id"]),
        route_id=str(row["route_id"]),
        stop_address=row.get("stop_address"),
        latitude=float(row["latitude"]) if row.get("latitude") is not None else None,
        longitude=float(row["longitude"]) if row.get("longitude") is not None else None,
        sequence_order=int(row.get("sequence_order") or 0),
        estimated_arrival_time=row.get("estimated_arrival_time"),
        distance_km=float(row["distance_km"]) if row.get("distance_km") is not None else None,
        is_active=bool(row.get("is_active", True)),
    )


def list_routes(school_id: str | None = None) -> list[BusRoute]:
    supabase = require_supabase_client()
    query = supabase.table("bus_routes").select("*")
    if school_id:
        query = query.eq("school_id", school_id)
    response = query.order("name").execute()
    return [_row_to_route(row) for row in (response.data or [])]


def list_route_stops(route_id: str) -> list[RouteStop]:
    """Return the stops of a route in driving order."""
    supabase = require_supabase_client()
    response = (
        supabase.table("route_stops")
        .select("*")
        .eq("route_id", route_id)
        .order("sequence_order")
        .execute()
    )
    return [_row_to_stop(row) for row in (response.data or [])]
