"""CSV export endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, Response, status

from ...data import buses_repository, schools_repository, students_repository
from ...persistence.filesystem import ExportStorage
from ...services.export import export_buses, export_filename, export_schools, export_students
from ..errors import to_http_exception

router = APIRouter(prefix="/exports", tags=["exports"])


def _render(kind: str) -> str:
    if kind == "buses":
        return export_buses(buses_repository.list_buses(), schools_repository.list_schools())
    if kind == "schools":
        return export_schools(schools_repository.list_schools())
    return export_students(students_repository.list_students())


@router.get("/{kind}.csv", status_code=status.HTTP_200_OK)
def download_export(
    kind: Literal["buses", "schools", "students"],
    save: bool = Query(default=False, description="Also keep a copy under the export directory."),
) -> Response:
    filename = export_filename(kind)
    try:
        content = _render(kind)
        if save:
            ExportStorage().write_csv(filename, content)
    except Exception as exc:
        raise to_http_exception(exc, f"export {kind}") from exc
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
