"""Bus location reports stored in Supabase."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from ..db.supabase import require_supabase_client
from ..models.domain import BusLocation, parse_timestamp

logger = logging.getLogger(__name__)

TABLE = "bus_locations"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _row_to_location(row: dict[str, Any]) -> BusLocation:
    # Coordinates are stored as a {"lat", "lng"} object; flat columns are accepted too.
    point = row.get("location") if isinstance(row.get("location"), dict) else {}
    return BusLocation(
        id=str(row["id"]),
        bus_id=str(row["bus_id"]),
        latitude=_optional_float(point.get("lat", row.get("latitude"))),
        longitude=_optional_float(point.get("lng", row.get("longitude"))),
        speed_kmh=_optional_float(row.get("speed_kmh")),
        heading_degrees=_optional_float(row.get("heading_degrees")),
        accuracy_meters=_optional_float(row.get("accuracy_meters")),
        altitude_meters=_optional_float(row.get("altitude_meters")),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def latest_reports_by_bus(locations: Iterable[BusLocation]) -> dict[str, BusLocation]:
    """Keep the most recently observed location per bus.

    Rows without any timestamp sort last; on ties the first row seen wins.
    """
    latest: dict[str, BusLocation] = {}
    for location in locations:
        current = latest.get(location.bus_id)
        if current is None or (location.observed_at or _EPOCH) > (current.observed_at or _EPOCH):
            latest[location.bus_id] = location
    return latest


def _cutoff_filter(since: datetime) -> str:
    # Rows updated in place keep their creation time, so either column may be recent.
    stamp = since.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return f"created_at.gte.{stamp},updated_at.gte.{stamp}"


def list_locations(bus_ids: Sequence[str], since: datetime | None = None) -> list[BusLocation]:
    """Fetch location rows for the given buses, newest first.

    With ``since``, only rows created or updated at or after that instant are read.
    """
    if not bus_ids:
        return []
    supabase = require_supabase_client()
    query = supabase.table(TABLE).select("*").in_("bus_id", list(bus_ids))
    if since is not None:
        query = query.or_(_cutoff_filter(since))
    response = query.order("created_at", desc=True).execute()
    return [_row_to_location(row) for row in (response.data or [])]


def get_latest_locations(bus_ids: Sequence[str], since: datetime | None = None) -> dict[str, BusLocation]:
    return latest_reports_by_bus(list_locations(bus_ids, since))


def get_latest_location(bus_id: str, since: datetime | None = None) -> BusLocation | None:
    return get_latest_locations([bus_id], since).get(bus_id)


def record_location(
    bus_id: str,
    latitude: float,
    longitude: float,
    speed_kmh: float | None = None,
    heading_degrees: float | None = None,
    accuracy_meters: float | None = None,
    altitude_meters: float | None = None,
) -> BusLocation:
    """Store a new location report sent by a bus device or simulator."""
    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        raise ValueError(f"Coordinates out of range: ({latitude}, {longitude})")
    supabase = require_supabase_client()
    record = {
        "bus_id": bus_id,
        "location": {"lat": latitude, "lng": longitude},
        "speed_kmh": speed_kmh,
        "heading_degrees": heading_degrees,
        "accuracy_meters": accuracy_meters,
        "altitude_meters": altitude_meters,
    }
    response = supabase.table(TABLE).insert(record).execute()
    if not response.data:
        raise ValueError("Failed to record location: the database returned no row.")
    logger.debug(f"Recorded location for bus {bus_id}: ({latitude}, {longitude})")
    return _row_to_location(response.data[0])
