from __future__ import annotations

import itertools
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from bustrack.models.domain import parse_timestamp

NOW = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)


def iso(moment: datetime) -> str:
    return moment.isoformat()


def minutes_ago(minutes: float) -> str:
    return iso(NOW - timedelta(minutes=minutes))


def _timestamp_gte(value: Any, bound: str) -> bool:
    if value is None:
        return False
    return parse_timestamp(value) >= parse_timestamp(bound)


@dataclass
class FakeResponse:
    data: list[dict[str, Any]]
    count: int | None = None


class FakeQuery:
    """Minimal stand-in for the Supabase query builder over in-memory rows."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.filters: list[tuple[str, str, Any]] = []
        self.ordering: list[tuple[str, bool]] = []
        self.row_limit: int | None = None
        self.action = "select"
        self.payload: Any = None
        self.count: str | None = None

    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.count = count
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column: str, values: list[Any]) -> "FakeQuery":
        self.filters.append(("in", column, list(values)))
        return self

    def or_(self, filters: str) -> "FakeQuery":
        # PostgREST syntax: "col.op.value,col.op.value"; only gte on timestamps is needed.
        clauses = [tuple(clause.split(".", 2)) for clause in filters.split(",")]
        self.filters.append(("or", "", clauses))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.ordering.append((column, desc))
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.row_limit = count
        return self

    def insert(self, payload: Any) -> "FakeQuery":
        self.action = "insert"
        self.payload = payload
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self.action = "update"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.action = "delete"
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        for op, column, value in self.filters:
            if op == "eq" and row.get(column) != value:
                return False
            if op == "in" and row.get(column) not in value:
                return False
            if op == "or" and not any(_timestamp_gte(row.get(col), bound) for col, _, bound in value):
                return False
        return True

    def execute(self) -> FakeResponse:
        if self.table in self.client.failing_tables:
            raise ConnectionError(f"table {self.table} unavailable")
        rows = self.client.tables.setdefault(self.table, [])

        if self.action == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for row in new_rows:
                stored = {
                    "id": f"{self.table}-{next(self.client.ids)}",
                    "created_at": iso(NOW),
                    "updated_at": None,
                    **row,
                }
                rows.append(stored)
                inserted.append(dict(stored))
            return FakeResponse(data=inserted)

        matched = [row for row in rows if self._matches(row)]
        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse(data=[dict(row) for row in matched])
        if self.action == "delete":
            self.client.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse(data=[dict(row) for row in matched])

        for column, desc in reversed(self.ordering):
            present = [row for row in matched if row.get(column) is not None]
            missing = [row for row in matched if row.get(column) is None]
            present.sort(key=lambda row: row[column], reverse=desc)
            matched = present + missing
        total = len(matched)
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return FakeResponse(data=[dict(row) for row in matched], count=total if self.count else None)


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.failing_tables: set[str] = set()
        self.ids = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: dict[str, Any]) -> None:
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    from bustrack.db import supabase as supabase_module

    client = FakeSupabase()
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: client)
    return client


@pytest.fixture
def frozen_now(monkeypatch: pytest.MonkeyPatch) -> datetime:
    from bustrack.services import liveness
    from bustrack.services.fleet import status

    monkeypatch.setattr(liveness, "utc_now", lambda: NOW)
    monkeypatch.setattr(status, "utc_now", lambda: NOW)
    return NOW


@pytest.fixture
def api_client(tmp_path, monkeypatch: pytest.MonkeyPatch, fake_supabase: FakeSupabase, frozen_now) -> TestClient:
    from bustrack.config import settings
    from bustrack.main import create_app
    from bustrack.services.fleet import FleetFeed

    monkeypatch.setattr(settings, "export_root", tmp_path / "exports")
    return TestClient(create_app(feed=FleetFeed(clock=lambda: NOW)))


@pytest.fixture
def seeded(fake_supabase: FakeSupabase) -> FakeSupabase:
    """Two schools, four buses and a handful of location reports."""
    fake_supabase.seed(
        "schools",
        {"id": "s1", "name": "Maple Elementary", "city": "Springfield", "country": "USA"},
        {"id": "s2", "name": "Cedar High", "city": "Shelbyville", "country": "USA"},
    )
    fake_supabase.seed(
        "buses",
        {"id": "b1", "school_id": "s1", "name": "Morning Star", "bus_number": "101", "status": "active",
         "has_gps": True, "capacity": 40, "model": "Vision", "year": 2021, "supervisor_name": "Dana Ortiz"},
        {"id": "b2", "school_id": "s1", "name": "Blue Line", "bus_number": "102", "status": "active",
         "has_gps": True, "capacity": 36},
        {"id": "b3", "school_id": "s2", "name": "Night Owl", "bus_number": "201", "status": "maintenance",
         "has_gps": False, "capacity": 48},
        {"id": "b4", "school_id": "s2", "name": "Red Route", "bus_number": "202", "status": "active",
         "has_gps": True, "capacity": 30},
    )
    fake_supabase.seed(
        "bus_locations",
        {"id": "l1", "bus_id": "b1", "location": {"lat": 39.78, "lng": -89.65}, "speed_kmh": 32.0,
         "created_at": minutes_ago(40), "updated_at": None},
        {"id": "l2", "bus_id": "b1", "location": {"lat": 39.79, "lng": -89.64}, "speed_kmh": 28.0,
         "created_at": minutes_ago(2), "updated_at": None},
        {"id": "l3", "bus_id": "b2", "location": {"lat": 39.70, "lng": -89.60},
         "created_at": minutes_ago(30), "updated_at": minutes_ago(12)},
        {"id": "l4", "bus_id": "b3", "location": {"lat": 39.60, "lng": -89.50},
         "created_at": minutes_ago(0), "updated_at": None},
    )
    fake_supabase.seed(
        "students",
        {"id": "st1", "school_id": "s1", "student_number": "S-001", "full_name": "Avery Brooks", "is_active": True},
        {"id": "st2", "school_id": "s1", "student_number": "S-002", "full_name": "Jordan Lee", "is_active": True},
        {"id": "st3", "school_id": "s2", "student_number": "S-003", "full_name": "Casey Kim", "is_active": True},
    )
    fake_supabase.seed(
        "student_bus_assignments",
        {"id": "a1", "student_id": "st1", "bus_id": "b1", "assignment_type": "both", "is_active": True},
        {"id": "a2", "student_id": "st2", "bus_id": "b1", "assignment_type": "morning", "is_active": True},
        {"id": "a3", "student_id": "st3", "bus_id": "b4", "assignment_type": "both", "is_active": False},
    )
    return fake_supabase
