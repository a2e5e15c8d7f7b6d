"""File-based persistence for CSV exports."""

from __future__ import annotations

from pathlib import Path

from ..config import settings


class ExportStorage:
    """Thin wrapper around the export root for storing CSV downloads."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.export_root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        name = Path(filename).name
        if not name or name != filename:
            raise ValueError(f"Invalid export filename: {filename!r}")
        return self.root / name

    def write_csv(self, filename: str, content: str) -> Path:
        path = self.path_for(filename)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        return path
