"""Bus route schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class BusRouteModel(BaseModel):
    id: str
    school_id: Optional[str] = None
    name: str
    route_type: Optional[str] = None
    is_active: bool = True


class RouteStopModel(BaseModel):
    id: str
    route_id: str
    stop_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    sequence_order: int
    estimated_arrival_time: Optional[str] = None
    distance_km: Optional[float] = None
    is_active: bool = True
