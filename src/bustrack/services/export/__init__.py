"""Export helpers."""

from .csv_export import (
    export_buses,
    export_filename,
    export_schools,
    export_students,
    rows_to_csv,
)

__all__ = [
    "export_buses",
    "export_filename",
    "export_schools",
    "export_students",
    "rows_to_csv",
]
