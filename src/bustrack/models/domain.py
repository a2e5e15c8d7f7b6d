"""Domain models for schools, buses, students, routes and location reports."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import TypeAdapter

_DATETIME = TypeAdapter(datetime)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a database timestamp into an aware UTC datetime.

    Naive values are interpreted as UTC. Fractional seconds may have any
    number of digits.
    """
    if value is None or value == "":
        return None
    parsed = _DATETIME.validate_python(value.strip() if isinstance(value, str) else value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(slots=True, frozen=True)
class LocationReport:
    """Latest known position of a bus, as consumed by the liveness evaluator."""

    observed_at: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    speed_kmh: Optional[float] = None
    heading_degrees: Optional[float] = None


@dataclass(slots=True)
class School:
    id: str
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    timezone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class Bus:
    """A tracked school bus. ``has_gps`` is the location capability flag."""

    id: str
    school_id: Optional[str]
    name: str
    bus_number: str
    status: str = "active"
    has_gps: bool = False
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
    metadata: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def location_capable(self) -> bool:
        return self.has_gps


@dataclass(slots=True)
class BusLocation:
    """A raw location row reported by a device or simulator."""

    id: str
    bus_id: str
    latitude: Optional[float]
    longitude: Optional[float]
    speed_kmh: Optional[float] = None
    heading_degrees: Optional[float] = None
    accuracy_meters: Optional[float] = None
    altitude_meters: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def observed_at(self) -> Optional[datetime]:
        return self.updated_at or self.created_at

    def to_report(self) -> Optional[LocationReport]:
        observed_at = self.observed_at
        if observed_at is None:
            return None
        return LocationReport(
            observed_at=observed_at,
            latitude=self.latitude,
            longitude=self.longitude,
            speed_kmh=self.speed_kmh,
            heading_degrees=self.heading_degrees,
        )


@dataclass(slots=True)
class BusRoute:
    id: str
    school_id: Optional[str]
    name: str
    route_type: Optional[str] = None
    is_active: bool = True
    metadata: dict = field(default_factory=dict)


@dataclass(slots=True)
class RouteStop:
    id: str
    route_id: str
    stop_address: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    sequence_order: int
    estimated_arrival_time: Optional[str] = None
    distance_km: Optional[float] = None
    is_active: bool = True


@dataclass(slots=True)
class Student:
    id: str
    school_id: Optional[str]
    student_number: str
    full_name: str
    date_of_birth: Optional[date] = None
    grade_level: Optional[str] = None
    gender: Optional[str] = None
    photo_url: Optional[str] = None
    medical_notes: Optional[str] = None
    special_needs: Optional[str] = None
    is_active: bool = True
    metadata: dict = field(default_factory=dict)


@dataclass(slots=True)
class StudentBusAssignment:
    id: str
    student_id: str
    bus_id: str
    assignment_type: Optional[str] = None
    boarding_stop_id: Optional[str] = None
    exit_stop_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = True
