"""Cliente mínimo de Supabase REST (PostgREST) para las tablas de conversaciones."""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from zionic.core.config import Settings
from zionic.core.logging import get_logger

logger = get_logger(__name__)


class StorageError(RuntimeError):
    """Errores de red o de respuesta al consultar Supabase."""


class RecordNotFoundError(StorageError):
    """La consulta de una sola fila no devolvió resultados."""


def _eq_filters(filters: Mapping[str, Any]) -> dict[str, str]:
    params: dict[str, str] = {}
    for column, value in filters.items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[column] = f"eq.{value}"
    return params


class SupabaseStore:
    """Acceso a tablas vía `/rest/v1` usando la llave service role.

    Sólo soporta lo que necesitan los servicios: lecturas de una fila con
    filtros de igualdad y proyecciones de tablas relacionadas, inserciones con
    retorno y actualizaciones por filtro.
    """

    def __init__(
        self,
        base_url: str,
        service_role: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_role = service_role
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, config: Settings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> SupabaseStore:
        if not config.supabase_url or not config.supabase_service_role:
            raise StorageError("Supabase no está configurado (SUPABASE_URL/SERVICE_ROLE)")
        return cls(
            config.supabase_url,
            config.supabase_service_role,
            timeout=config.store_timeout_seconds,
            transport=transport,
        )

    async def fetch_single(
        self, table: str, *, select: str, filters: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Devuelve exactamente una fila; falla si hay cero o varias."""
        params = {"select": select, **_eq_filters(filters), "limit": "2"}
        response = await self._request("GET", table, params=params)
        rows = self._json_list(response)
        if not rows:
            raise RecordNotFoundError(f"Sin filas en {table} para {dict(filters)!r}")
        if len(rows) > 1:
            raise StorageError(f"Se esperaba una fila en {table} y se obtuvieron varias")
        return rows[0]

    async def insert(
        self, table: str, row: Mapping[str, Any], *, returning: str = "id"
    ) -> dict[str, Any]:
        response = await self._request(
            "POST",
            table,
            params={"select": returning},
            json=[dict(row)],
            prefer="return=representation",
        )
        rows = self._json_list(response)
        if not rows:
            raise StorageError(f"Supabase no devolvió la fila insertada en {table}")
        return rows[0]

    async def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        response = await self._request(
            "PATCH",
            table,
            params=_eq_filters(filters),
            json=dict(values),
            prefer="return=representation",
        )
        return self._json_list(response)

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        path = f"/rest/v1/{table}"
        headers = self._headers(prefer, has_body=json is not None)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method,
                    f"{self._base_url}{path}",
                    params=params,
                    json=json,
                    headers=headers,
                )
        except httpx.RequestError as exc:
            logger.exception("supabase.request_failed", extra={"path": path, "error": str(exc)})
            raise StorageError(f"Error al conectar a Supabase: {exc}") from exc
        if response.status_code >= 400:
            logger.error(
                "supabase.response_error",
                extra={"path": path, "status": response.status_code, "body": response.text},
            )
            raise StorageError(f"Supabase respondió {response.status_code}: {response.text}")
        return response

    def _headers(self, prefer: str | None, *, has_body: bool) -> dict[str, str]:
        headers = {
            "apikey": self._service_role,
            "Authorization": f"Bearer {self._service_role}",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _json_list(response: httpx.Response) -> list[dict[str, Any]]:
        payload = response.json() if response.content else []
        if not isinstance(payload, list):
            raise StorageError("Respuesta inesperada de Supabase")
        return [row for row in payload if isinstance(row, dict)]
