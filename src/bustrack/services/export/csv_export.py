"""Serialize schools, buses and students into spreadsheet-friendly CSV."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from ...models.domain import Bus, School, Student


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _or_na(value: Any) -> Any:
    return value if value not in (None, "") else "N/A"


def rows_to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render rows to CSV using the keys of the first row as the header."""
    if not rows:
        raise ValueError("No data to export")
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()), lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if value is None else value for key, value in row.items()})
    return buffer.getvalue().rstrip("\n")


def export_filename(kind: str, today: date | None = None) -> str:
    day = today or datetime.now(timezone.utc).date()
    return f"{kind}_{day.isoformat()}.csv"


def bus_rows(buses: Iterable[Bus], schools: Iterable[School]) -> list[dict[str, Any]]:
    school_names = {school.id: school.name for school in schools}
    return [
        {
            "Bus Number": bus.bus_number,
            "Bus Name": bus.name,
            "School": school_names.get(bus.school_id or "") or "N/A",
            "Supervisor": _or_na(bus.supervisor_name),
            "Status": bus.status,
            "Model": bus.model,
            "Manufacturer": bus.manufacturer,
            "Year": bus.year,
            "Capacity": bus.capacity,
            "License Plate": bus.license_plate,
            "VIN": bus.vin,
            "Has GPS": _yes_no(bus.has_gps),
            "Has Wheelchair Lift": _yes_no(bus.has_wheelchair_lift),
            "Current Mileage": bus.current_mileage,
            "Last Maintenance": bus.last_maintenance_date.isoformat() if bus.last_maintenance_date else "N/A",
        }
        for bus in buses
    ]


def school_rows(schools: Iterable[School]) -> list[dict[str, Any]]:
    return [
        {
            "School Name": school.name,
            "Address": school.address,
            "City": school.city,
            "State": school.state,
            "Postal Code": school.postal_code,
            "Country": school.country,
            "Phone": school.phone,
            "Email": school.email,
            "Website": school.website,
            "Timezone": school.timezone,
        }
        for school in schools
    ]


def student_rows(students: Iterable[Student]) -> list[dict[str, Any]]:
    return [
        {
            "Student Number": student.student_number,
            "Full Name": student.full_name,
            "Date of Birth": student.date_of_birth.isoformat() if student.date_of_birth else None,
            "Grade Level": student.grade_level,
            "Gender": student.gender,
            "Is Active": _yes_no(student.is_active),
            "Medical Notes": _or_na(student.medical_notes),
            "Special Needs": _or_na(student.special_needs),
        }
        for student in students
    ]


def export_buses(buses: Sequence[Bus], schools: Sequence[School]) -> str:
    return rows_to_csv(bus_rows(buses, schools))


def export_schools(schools: Sequence[School]) -> str:
    return rows_to_csv(school_rows(schools))


def export_students(students: Sequence[Student]) -> str:
    return rows_to_csv(student_rows(students))
