"""Convert fleet domain objects into API response models."""

from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

from ...models.domain import Bus, BusLocation, Student, StudentBusAssignment
from ...schemas.buses import BusModel
from ...schemas.fleet import FleetEntryModel, LivenessModel, LocationModel, StudentOnboardModel
from ...schemas.students import StudentModel
from ..fleet.status import FleetEntry


def bus_to_model(bus: Bus) -> BusModel:
    return BusModel(**asdict(bus))


def location_to_model(location: BusLocation | None) -> LocationModel | None:
    if location is None:
        return None
    return LocationModel(
        latitude=location.latitude,
        longitude=location.longitude,
        speed_kmh=location.speed_kmh,
        heading_degrees=location.heading_degrees,
        accuracy_meters=location.accuracy_meters,
        altitude_meters=location.altitude_meters,
        observed_at=location.observed_at,
    )


def entry_to_model(entry: FleetEntry) -> FleetEntryModel:
    return FleetEntryModel(
        bus=bus_to_model(entry.bus),
        location=location_to_model(entry.location),
        status=LivenessModel(
            is_online=entry.status.is_online,
            label=entry.status.label,
            time_since=entry.status.time_since,
        ),
    )


def entries_to_models(entries: Sequence[FleetEntry]) -> list[FleetEntryModel]:
    return [entry_to_model(entry) for entry in entries]


def onboard_to_models(students: Sequence[tuple[Student, StudentBusAssignment]]) -> list[StudentOnboardModel]:
    return [
        StudentOnboardModel(
            student=StudentModel(**asdict(student)),
            assignment_type=assignment.assignment_type,
            boarding_stop_id=assignment.boarding_stop_id,
            exit_stop_id=assignment.exit_stop_id,
        )
        for student, assignment in students
    ]
