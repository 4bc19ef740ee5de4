"""Shared fixtures: an in-memory stand-in for the Supabase table API."""

import pytest

from cleansweep.config import AdminConfig, AppConfig, GeminiConfig, SupabaseConfig


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db, table, op, payload=None):
        self.db = db
        self.table = table
        self.op = op
        self.payload = payload
        self.filters = []
        self.orders = []

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def execute(self):
        if self.db.error is not None:
            raise self.db.error

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            self.db.next_id += 1
            row = dict(self.payload)
            row.setdefault("id", f"bk-{self.db.next_id}")
            rows.append(row)
            return FakeResponse([dict(row)])

        matched = [r for r in rows if all(r.get(c) == v for c, v in self.filters)]

        if self.op == "select":
            # apply the last sort key first so earlier keys take precedence
            for column, desc in reversed(self.orders):
                matched.sort(key=lambda r: r.get(column) or "", reverse=desc)
            return FakeResponse([dict(r) for r in matched])

        if self.op == "update":
            for r in matched:
                r.update(self.payload)
            return FakeResponse([dict(r) for r in matched])

        if self.op == "delete":
            for r in matched:
                rows.remove(r)
            return FakeResponse([dict(r) for r in matched])

        raise AssertionError(f"unexpected op {self.op}")


class FakeTable:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def select(self, columns="*"):
        return FakeQuery(self.db, self.name, "select")

    def insert(self, row):
        return FakeQuery(self.db, self.name, "insert", row)

    def update(self, values):
        return FakeQuery(self.db, self.name, "update", values)

    def delete(self):
        return FakeQuery(self.db, self.name, "delete")


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.next_id = 0
        self.error = None

    def table(self, name):
        return FakeTable(self, name)


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def app_config():
    return AppConfig(
        gemini=GeminiConfig(api_key="gemini-test-key", model="gemini-2.0-flash"),
        supabase=SupabaseConfig(
            url="https://demo.supabase.co",
            anon_key="anon-test-key",
            service_key="service-test-key",
        ),
        admin=AdminConfig(email="admin@austincleansweep.com"),
    )


@pytest.fixture
def booking_data():
    return {
        "name": "Jane Doe",
        "email": "jane.doe@gmail.com",
        "service_type": "standard",
        "bedrooms": 2,
        "bathrooms": 2,
        "add_ons": ["fridge", "windows"],
        "service_date": "2026-11-02",
        "service_time": "09:30",
        "quote": 205,
        "status": "pending",
    }
