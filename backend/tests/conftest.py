"""Fixtures compartidas para las pruebas."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from zionic.core.config import Settings
from zionic.main import app
from zionic.services.supabase import RecordNotFoundError


class FakeStore:
    """Store en memoria que imita a `SupabaseStore` y registra cada llamada.

    ``rows`` mapea tabla → fila devuelta por ``fetch_single``; un valor que sea
    excepción se lanza en lugar de devolverse. ``insert_result``,
    ``update_error`` y ``update_result`` controlan las escrituras.
    """

    def __init__(
        self,
        rows: dict[str, Any] | None = None,
        *,
        insert_result: Any = None,
        update_error: Exception | None = None,
        update_result: list[dict[str, Any]] | None = None,
    ) -> None:
        self.rows = rows or {}
        self.insert_result = insert_result if insert_result is not None else {"id": "msg-1"}
        self.update_error = update_error
        self.update_result = update_result
        self.fetches: list[dict[str, Any]] = []
        self.inserts: list[dict[str, Any]] = []
        self.updates: list[dict[str, Any]] = []

    async def fetch_single(self, table: str, *, select: str, filters: dict[str, Any]) -> dict:
        self.fetches.append({"table": table, "select": select, "filters": dict(filters)})
        row = self.rows.get(table)
        if isinstance(row, Exception):
            raise row
        if row is None:
            raise RecordNotFoundError(f"Sin filas en {table}")
        return row

    async def insert(self, table: str, row: dict[str, Any], *, returning: str = "id") -> dict:
        self.inserts.append({"table": table, "row": dict(row)})
        if isinstance(self.insert_result, Exception):
            raise self.insert_result
        return self.insert_result

    async def update(self, table: str, values: dict[str, Any], *, filters: dict[str, Any]):
        self.updates.append({"table": table, "values": dict(values), "filters": dict(filters)})
        if self.update_error is not None:
            raise self.update_error
        if self.update_result is not None:
            return self.update_result
        return [{"id": filters.get("id")}]


@pytest.fixture(name="config")
def fixture_config() -> Settings:
    """Configuración aislada del entorno y de cualquier `.env` local."""
    return Settings(
        _env_file=None,
        supabase_url="https://project.supabase.co",
        supabase_service_role="service-role",
        evolution_api_url="https://evolution.example.com",
        evolution_api_key="evo-key",
    )


@pytest.fixture(name="async_client")
async def fixture_async_client() -> AsyncClient:
    """Retorna un cliente asíncrono contra la app principal utilizando ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
