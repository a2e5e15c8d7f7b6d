"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check the Supabase connection and the fleet tables."""
    from ...db.supabase import get_supabase_client

    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set BUSTRACK_SUPABASE_URL and BUSTRACK_SUPABASE_KEY environment variables.",
            "buses_count": 0,
        }

    try:
        response = supabase.table("buses").select("id", count="exact").limit(1).execute()
        buses_count = response.count if response.count is not None else len(response.data or [])
        return {
            "configured": True,
            "connected": True,
            "buses_count": buses_count,
            "message": f"Database connected. Found {buses_count} buses.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
