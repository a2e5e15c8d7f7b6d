"""Bus management endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Response, status

from ...data import buses_repository, locations_repository
from ...schemas.buses import BusCreateRequest, BusModel, BusUpdateRequest, LocationReportRequest
from ...schemas.fleet import LocationModel
from ...services.outputs.formatter import bus_to_model, location_to_model
from ..errors import to_http_exception

router = APIRouter(prefix="/buses", tags=["buses"])


@router.get("", response_model=List[BusModel], status_code=status.HTTP_200_OK)
def list_buses(school_id: str | None = None, gps_only: bool = False) -> List[BusModel]:
    try:
        return [bus_to_model(bus) for bus in buses_repository.list_buses(school_id=school_id, gps_only=gps_only)]
    except Exception as exc:
        raise to_http_exception(exc, "list buses") from exc


@router.get("/{bus_id}", response_model=BusModel, status_code=status.HTTP_200_OK)
def get_bus(bus_id: str) -> BusModel:
    try:
        return bus_to_model(buses_repository.get_bus(bus_id))
    except Exception as exc:
        raise to_http_exception(exc, "load bus") from exc


@router.post("", response_model=BusModel, status_code=status.HTTP_201_CREATED)
def create_bus(payload: BusCreateRequest) -> BusModel:
    try:
        return bus_to_model(buses_repository.create_bus(payload.model_dump(mode="json")))
    except Exception as exc:
        raise to_http_exception(exc, "add bus") from exc


@router.patch("/{bus_id}", response_model=BusModel, status_code=status.HTTP_200_OK)
def update_bus(bus_id: str, payload: BusUpdateRequest) -> BusModel:
    try:
        changes = payload.model_dump(mode="json", exclude_unset=True)
        return bus_to_model(buses_repository.update_bus(bus_id, changes))
    except Exception as exc:
        raise to_http_exception(exc, "update bus") from exc


@router.delete("/{bus_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bus(bus_id: str) -> Response:
    try:
        buses_repository.delete_bus(bus_id)
    except Exception as exc:
        raise to_http_exception(exc, "delete bus") from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{bus_id}/locations", response_model=LocationModel, status_code=status.HTTP_201_CREATED)
def report_location(bus_id: str, payload: LocationReportRequest) -> LocationModel:
    """Ingest a position from an on-board device or simulator."""
    try:
        buses_repository.get_bus(bus_id)
        location = locations_repository.record_location(bus_id, **payload.model_dump())
        return location_to_model(location)
    except Exception as exc:
        raise to_http_exception(exc, "record bus location") from exc
