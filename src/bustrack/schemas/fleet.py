"""Schemas for the fleet, tracking and portal views."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel

from .buses import BusModel
from .students import StudentModel


class LivenessModel(BaseModel):
    is_online: bool
    label: Literal["Online", "Offline"]
    time_since: str


class LocationModel(BaseModel):
    latitude: float | None = None
    longitude: float | None = None
    speed_kmh: float | None = None
    heading_degrees: float | None = None
    accuracy_meters: float | None = None
    altitude_meters: float | None = None
    observed_at: datetime | None = None


class FleetEntryModel(BaseModel):
    bus: BusModel
    location: LocationModel | None = None
    status: LivenessModel


class DashboardStatsModel(BaseModel):
    totalBuses: int
    activeBuses: int
    onlineNow: int
    studentsTracked: int


class DashboardResponse(BaseModel):
    stats: DashboardStatsModel
    buses: List[FleetEntryModel]
    refreshSeconds: float


class FleetListResponse(BaseModel):
    items: List[FleetEntryModel]
    total: int
    refreshSeconds: float


class TrackingResponse(BaseModel):
    totalTracked: int
    online: int
    offline: int
    buses: List[FleetEntryModel]
    refreshSeconds: float


class StudentOnboardModel(BaseModel):
    student: StudentModel
    assignment_type: str | None = None
    boarding_stop_id: str | None = None
    exit_stop_id: str | None = None


class BusDetailResponse(BaseModel):
    entry: FleetEntryModel
    studentsOnboard: int
    capacity: int | None = None
    students: List[StudentOnboardModel]
    refreshSeconds: float


class FeedResponse(BaseModel):
    running: bool
    fetchedAt: datetime | None = None
    lastError: str | None = None
    totalTracked: int
    online: int
    offline: int
    buses: List[FleetEntryModel]
