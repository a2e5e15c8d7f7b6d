"""Student endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Query, status

from ...data import students_repository
from ...schemas.students import StudentModel
from ..errors import to_http_exception

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=List[StudentModel], status_code=status.HTTP_200_OK)
def list_students(
    school_id: str | None = Query(default=None, description="Optional school filter"),
    search: str | None = Query(default=None, description="Match on full name or student number"),
) -> List[StudentModel]:
    try:
        students = students_repository.list_students(school_id=school_id)
    except Exception as exc:
        raise to_http_exception(exc, "list students") from exc
    term = (search or "").strip().lower()
    if term:
        students = [
            student
            for student in students
            if term in student.full_name.lower() or term in student.student_number.lower()
        ]
    return [StudentModel(**asdict(student)) for student in students]
