"""Public student portal endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, status

from ...config import settings
from ...schemas.fleet import TrackingResponse
from ...schemas.schools import SchoolModel
from ...services.fleet import compute_portal, list_portal_schools, summarize_tracking
from ...services.outputs.formatter import entries_to_models
from ..errors import to_http_exception

router = APIRouter(prefix="/portal", tags=["portal"])


@router.get("/schools", response_model=List[SchoolModel], status_code=status.HTTP_200_OK)
def portal_schools() -> List[SchoolModel]:
    try:
        return [SchoolModel(**asdict(school)) for school in list_portal_schools()]
    except Exception as exc:
        raise to_http_exception(exc, "list schools") from exc


@router.get("/schools/{school_id}/buses", response_model=TrackingResponse, status_code=status.HTTP_200_OK)
def portal_school_buses(school_id: str) -> TrackingResponse:
    try:
        summary = summarize_tracking(compute_portal(school_id))
    except Exception as exc:
        raise to_http_exception(exc, "load school buses") from exc
    return TrackingResponse(
        totalTracked=summary.total_tracked,
        online=summary.online,
        offline=summary.offline,
        buses=entries_to_models(summary.entries),
        refreshSeconds=settings.poll_interval("portal"),
    )
