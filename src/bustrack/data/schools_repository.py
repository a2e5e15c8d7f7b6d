"""School records stored in Supabase."""

from __future__ import annotations

import logging
from typing import Any

from ..db.supabase import RecordNotFoundError, require_supabase_client
from ..models.domain import School, parse_timestamp

logger = logging.getLogger(__name__)

TABLE = "schools"


def _row_to_school(row: dict[str, Any]) -> School:
    return School(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        address=row.get("address"),
        city=row.get("city"),
        state=row.get("state"),
        postal_code=row.get("postal_code"),
        country=row.get("country"),
        phone=row.get("phone"),
        email=row.get("email"),
        website=row.get("website"),
        timezone=row.get("timezone"),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def list_schools() -> list[School]:
    """Return every school ordered by name."""
    supabase = require_supabase_client()
    response = supabase.table(TABLE).select("*").order("name").execute()
    return [_row_to_school(row) for row in (response.data or [])]


def get_school(school_id: str) -> School:
    supabase = require_supabase_client()
    response = supabase.table(TABLE).select("*").eq("id", school_id).limit(1).execute()
    if not response.data:
        raise RecordNotFoundError(TABLE, school_id)
    return _row_to_school(response.data[0])


def create_school(payload: dict[str, Any]) -> School:
    if not str(payload.get("name") or "").strip():
        raise ValueError("School name is required.")
    supabase = require_supabase_client()
    response = supabase.table(TABLE).insert(payload).execute()
    if not response.data:
        raise ValueError("Failed to add school: the database returned no row.")
    school = _row_to_school(response.data[0])
    logger.info(f"School '{school.name}' added ({school.id})")
    return school
