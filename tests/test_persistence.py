from pathlib import Path

import pytest

from bustrack.persistence.filesystem import ExportStorage


def test_export_storage_creates_root(tmp_path: Path) -> None:
    storage = ExportStorage(root=tmp_path / "exports")

    assert storage.root.exists()
    assert storage.root.is_dir()


def test_export_storage_writes_csv(tmp_path: Path) -> None:
    storage = ExportStorage(root=tmp_path)

    path = storage.write_csv("buses_2026-03-02.csv", "a,b\n1,2")

    assert path == tmp_path.resolve() / "buses_2026-03-02.csv"
    assert path.read_text(encoding="utf-8") == "a,b\n1,2"


def test_export_storage_rejects_nested_paths(tmp_path: Path) -> None:
    storage = ExportStorage(root=tmp_path)

    with pytest.raises(ValueError):
        storage.write_csv("../escape.csv", "x")
