from __future__ import annotations

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from address_api.main import create_app
from address_api.models.domain import Address, Coordinate


class FakeQuery:
    """Mimics the subset of the PostgREST query builder used by the address store."""

    def __init__(self, table: "FakeTable", action: str, payload: dict | None = None) -> None:
        self.table = table
        self.action = action
        self.payload = payload
        self.filters: list[tuple[str, object]] = []
        self.order_column: str | None = None
        self.descending = False
        self.limit_count: int | None = None

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_column = column
        self.descending = desc
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.table.calls.append(self.action)
        if self.action == "insert":
            row = {**self.payload, "id": self.table.next_id}
            self.table.next_id += 1
            self.table.rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        matched = [row for row in self.table.rows if self._matches(row)]
        if self.action == "select":
            if self.order_column:
                matched = sorted(matched, key=lambda row: row[self.order_column], reverse=self.descending)
            if self.limit_count is not None:
                matched = matched[: self.limit_count]
        elif self.action == "update":
            for row in matched:
                row.update(self.payload)
        elif self.action == "delete":
            self.table.rows = [row for row in self.table.rows if not self._matches(row)]
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeTable:
    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.next_id = 1
        self.calls: list[str] = []

    def select(self, *columns, **kwargs):
        return FakeQuery(self, "select")

    def insert(self, payload):
        return FakeQuery(self, "insert", payload)

    def update(self, payload):
        return FakeQuery(self, "update", payload)

    def delete(self):
        return FakeQuery(self, "delete")


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, FakeTable] = {}

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable())

    @property
    def addresses(self) -> FakeTable:
        return self.table("addresses")


class DummyGeocoder:
    """Returns fixed coordinates per city and records every lookup."""

    def __init__(self, coordinates: dict[str, Coordinate] | None = None) -> None:
        self.coordinates = coordinates or {}
        self.calls: list[Address] = []

    def geocode(self, address: Address) -> Coordinate:
        self.calls.append(address)
        return self.coordinates.get(address.city, Coordinate(latitude=0.0, longitude=0.0))


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    from address_api.persistence import addresses as address_store

    client = FakeSupabase()
    monkeypatch.setattr(address_store, "get_supabase_client", lambda: client)
    return client


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    from address_api.services import distance as distance_service

    pauses: list[float] = []
    monkeypatch.setattr(distance_service.time, "sleep", pauses.append)
    return pauses


@pytest.fixture
def api_client(fake_supabase: FakeSupabase) -> TestClient:
    return TestClient(create_app())


def make_address(
    street: str = "Main St",
    house_number: str = "5",
    postcode: str = "10001",
    city: str = "NYC",
    country: str = "US",
    address_id: int = 0,
) -> Address:
    return Address(
        id=address_id,
        street=street,
        house_number=house_number,
        postcode=postcode,
        city=city,
        country=country,
    )
