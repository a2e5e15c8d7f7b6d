"""Bus route endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Query, status

from ...data import routes_repository
from ...schemas.routes import BusRouteModel, RouteStopModel
from ..errors import to_http_exception

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("", response_model=List[BusRouteModel], status_code=status.HTTP_200_OK)
def list_routes(
    school_id: str | None = Query(default=None, description="Optional school filter"),
    search: str | None = Query(default=None, description="Match on route name"),
) -> List[BusRouteModel]:
    try:
        routes = routes_repository.list_routes(school_id=school_id)
    except Exception as exc:
        raise to_http_exception(exc, "list routes") from exc
    term = (search or "").strip().lower()
    if term:
        routes = [route for route in routes if term in route.name.lower()]
    return [BusRouteModel(**asdict(route)) for route in routes]


@router.get("/{route_id}/stops", response_model=List[RouteStopModel], status_code=status.HTTP_200_OK)
def list_route_stops(route_id: str) -> List[RouteStopModel]:
    try:
        return [RouteStopModel(**asdict(stop)) for stop in routes_repository.list_route_stops(route_id)]
    except Exception as exc:
        raise to_http_exception(exc, "list route stops") from exc
