"""School endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, status

from ...data import schools_repository
from ...schemas.schools import SchoolCreateRequest, SchoolModel
from ..errors import to_http_exception

router = APIRouter(prefix="/schools", tags=["schools"])


@router.get("", response_model=List[SchoolModel], status_code=status.HTTP_200_OK)
def list_schools() -> List[SchoolModel]:
    try:
        return [SchoolModel(**asdict(school)) for school in schools_repository.list_schools()]
    except Exception as exc:
        raise to_http_exception(exc, "list schools") from exc


@router.get("/{school_id}", response_model=SchoolModel, status_code=status.HTTP_200_OK)
def get_school(school_id: str) -> SchoolModel:
    try:
        return SchoolModel(**asdict(schools_repository.get_school(school_id)))
    except Exception as exc:
        raise to_http_exception(exc, "load school") from exc


@router.post("", response_model=SchoolModel, status_code=status.HTTP_201_CREATED)
def create_school(payload: SchoolCreateRequest) -> SchoolModel:
    try:
        school = schools_repository.create_school(payload.model_dump())
        return SchoolModel(**asdict(school))
    except Exception as exc:
        raise to_http_exception(exc, "add school") from exc
