"""Bus records stored in Supabase."""

from __future__ import annotations

import logging
from typing import Any

from ..db.supabase import RecordNotFoundError, require_supabase_client
from ..models.domain import Bus, parse_date, parse_timestamp

logger = logging.getLogger(__name__)

TABLE = "buses"


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _row_to_bus(row: dict[str, Any]) -> Bus:
    return Bus(
        id=str(row["id"]),
        school_id=str(row["school_id"]) if row.get("school_id") else None,
        name=str(row.get("name") or ""),
        bus_number=str(row.get("bus_number") or ""),
        status=str(row.get("status") or "active"),
        has_gps=bool(row.get("has_gps")),
        capacity=_optional_int(row.get("capacity")),
        license_plate=row.get("license_plate"),
        model=row.get("model"),
        manufacturer=row.get("manufacturer"),
        year=_optional_int(row.get("year")),
        vin=row.get("vin"),
        color=row.get("color"),
        has_wheelchair_lift=bool(row.get("has_wheelchair_lift")),
        supervisor_name=row.get("supervisor_name"),
        last_maintenance_date=parse_date(row.get("last_maintenance_date")),
        current_mileage=_optional_int(row.get("current_mileage")),
        metadata=row.get("metadata") or {},
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def list_buses(
    school_id: str | None = None,
    gps_only: bool = False,
    limit: int | None = None,
) -> list[Bus]:
    """Return buses, optionally restricted to one school or to GPS-equipped buses."""
    supabase = require_supabase_client()
    query = supabase.table(TABLE).select("*")
    if school_id:
        query = query.eq("school_id", school_id)
    if gps_only:
        query = query.eq("has_gps", True)
    if limit is not None:
        query = query.limit(limit)
    response = query.execute()
    return [_row_to_bus(row) for row in (response.data or [])]


def get_bus(bus_id: str) -> Bus:
    supabase = require_supabase_client()
    response = supabase.table(TABLE).select("*").eq("id", bus_id).limit(1).execute()
    if not response.data:
        raise RecordNotFoundError(TABLE, bus_id)
    return _row_to_bus(response.data[0])


def create_bus(payload: dict[str, Any]) -> Bus:
    """Insert a bus. At least one school must exist before buses can be added."""
    supabase = require_supabase_client()
    schools = supabase.table("schools").select("id").limit(1).execute()
    if not schools.data:
        raise ValueError("No schools available. Please add a school first before adding buses.")

    record = dict(payload)
    if not record.get("school_id"):
        record["school_id"] = schools.data[0]["id"]

    response = supabase.table(TABLE).insert(record).execute()
    if not response.data:
        raise ValueError("Failed to add bus: the database returned no row.")
    bus = _row_to_bus(response.data[0])
    logger.info(f"Bus '{bus.name}' (#{bus.bus_number}) added ({bus.id})")
    return bus


def update_bus(bus_id: str, changes: dict[str, Any]) -> Bus:
    if not changes:
        return get_bus(bus_id)
    supabase = require_supabase_client()
    response = supabase.table(TABLE).update(changes).eq("id", bus_id).execute()
    if not response.data:
        raise RecordNotFoundError(TABLE, bus_id)
    bus = _row_to_bus(response.data[0])
    logger.info(f"Bus '{bus.name}' updated ({bus.id}): {sorted(changes)}")
    return bus


def delete_bus(bus_id: str) -> None:
    supabase = require_supabase_client()
    response = supabase.table(TABLE).delete().eq("id", bus_id).execute()
    if not response.data:
        raise RecordNotFoundError(TABLE, bus_id)
    logger.info(f"Bus {bus_id} deleted")
