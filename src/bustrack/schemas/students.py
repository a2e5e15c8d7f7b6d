"""Student schemas."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class StudentModel(BaseModel):
    id: str
    school_id: str | None = None
    student_number: str
    full_name: str
    date_of_birth: date | None = None
    grade_level: str | None = None
    gender: str | None = None
    photo_url: str | None = None
    medical_notes: str | None = None
    special_needs: str | None = None
    is_active: bool = True
