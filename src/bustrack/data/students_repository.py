"""Student records and bus assignments stored in Supabase."""

from __future__ import annotations

from typing import Any

from ..db.supabase import require_supabase_client
from ..models.domain import Student, StudentBusAssignment, parse_date


def _row_to_student(row: dict[str, Any]) -> Student:
    return Student(
        id=str(row["id"]),
        school_id=str(row["school_id"]) if row.get("school_id") else None,
        student_number=str(row.get("student_number") or ""),
        full_name=str(row.get("full_name") or ""),
        date_of_birth=parse_date(row.get("date_of_birth")),
        grade_level=row.get("grade_level"),
        gender=row.get("gender"),
        photo_url=row.get("photo_url"),
        medical_notes=row.get("medical_notes"),
        special_needs=row.get("special_needs"),
        is_active=bool(row.get("is_active", True)),
        metadata=row.get("metadata") or {},
    )


def _row_to_assignment(row: dict[str, Any]) -> StudentBusAssignment:
    return StudentBusAssignment(
        id=str(row["id"]),
        student_id=str(row["student_id"]),
        bus_id=str(row["bus_id"]),
        assignment_type=row.get("assignment_type"),
        boarding_stop_id=row.get("boarding_stop_id"),
        exit_stop_id=row.get("exit_stop_id"),
        start_date=parse_date(row.get("start_date")),
        end_date=parse_date(row.get("end_date")),
        is_active=bool(row.get("is_active", True)),
    )


def list_students(school_id: str | None = None) -> list[Student]:
    """Return students ordered by full name."""
    supabase = require_supabase_client()
    query = supabase.table("students").select("*")
    if school_id:
        query = query.eq("school_id", school_id)
    response = query.order("full_name").execute()
    return [_row_to_student(row) for row in (response.data or [])]


def list_active_assignments(bus_id: str | None = None) -> list[StudentBusAssignment]:
    supabase = require_supabase_client()
    query = supabase.table("student_bus_assignments").select("*").eq("is_active", True)
    if bus_id:
        query = query.eq("bus_id", bus_id)
    response = query.execute()
    return [_row_to_assignment(row) for row in (response.data or [])]


def list_students_on_bus(bus_id: str) -> list[tuple[Student, StudentBusAssignment]]:
    """Return the students actively assigned to a bus together with their assignment."""
    assignments = list_active_assignments(bus_id)
    if not assignments:
        return []
    supabase = require_supabase_client()
    response = (
        supabase.table("students")
        .select("*")
        .in_("id", [assignment.student_id for assignment in assignments])
        .execute()
    )
    students = {str(row["id"]): _row_to_student(row) for row in (response.data or [])}
    return [
        (students[assignment.student_id], assignment)
        for assignment in assignments
        if assignment.student_id in students
    ]
