"""Bus request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class BusModel(BaseModel):
    id: str
    school_id: Optional[str] = None
    name: str
    bus_number: str
    status: str
    has_gps: bool
    capacity: Optional[int] = None
    license_plate: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    year: Optional[int] = None
    vin: Optional[str] = None
    color: Optional[str] = None
    has_wheelchair_lift: bool = False
    supervisor_name: Optional[str] = None
    last_maintenance_date: Optional[date] = None
    current_mileage: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusCreateRequest(BaseModel):
    school_id: Optional[str] = Field(default=None, description="Defaults to the first school when omitted.")
    name: str = Field(..., min_length=1)
    bus_number: str = Field(..., min_length=1)
    license_plate: Optional[str] = None
    capacity: int = Field(default=40, ge=1)
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    vin: Optional[str] = None
    color: Optional[str] = None
    status: str = "active"
    has_wheelchair_lift: bool = False
    has_gps: bool = False
    supervisor_name: Optional[str] = None
    last_maintenance_date: Optional[date] = None
    current_mileage: int = Field(default=0, ge=0)


class BusUpdateRequest(BaseModel):
    school_id: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1)
    bus_number: Optional[str] = Field(default=None, min_length=1)
    license_plate: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    vin: Optional[str] = None
    color: Optional[str] = None
    status: Optional[str] = None
    has_wheelchair_lift: Optional[bool] = None
    has_gps: Optional[bool] = None
    supervisor_name: Optional[str] = None
    last_maintenance_date: Optional[date] = None
    current_mileage: Optional[int] = Field(default=None, ge=0)


class LocationReportRequest(BaseModel):
    """A position sent by an on-board device or a simulator."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    speed_kmh: Optional[float] = Field(default=None, ge=0)
    heading_degrees: Optional[float] = Field(default=None, ge=0, lt=360)
    accuracy_meters: Optional[float] = Field(default=None, ge=0)
    altitude_meters: Optional[float] = None
