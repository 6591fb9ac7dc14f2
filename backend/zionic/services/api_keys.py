"""Validación de API keys de empresa contra la tabla `api_keys`."""

from __future__ import annotations

from pydantic import BaseModel

from zionic.core.logging import get_logger
from zionic.core.security import hash_api_key, mask_secret
from zionic.services.result import Result
from zionic.services.supabase import RecordNotFoundError, StorageError, SupabaseStore

logger = get_logger(__name__)

INVALID_API_KEY = "invalid or inactive API key"


class ApiKeyOwner(BaseModel):
    """Empresa dueña de una API key activa."""

    company_id: str
    company_name: str | None = None
    key_name: str | None = None
    created_at: str | None = None
    last_used_at: str | None = None


async def resolve_api_key(token: str, store: SupabaseStore) -> Result[ApiKeyOwner]:
    """Busca la key por su huella SHA-256; sólo las activas son válidas."""
    if not token:
        return Result.failure(INVALID_API_KEY, "unauthorized")
    try:
        row = await store.fetch_single(
            "api_keys",
            select="name,company_id,created_at,last_used_at,companies(id,name)",
            filters={"key_hash": hash_api_key(token), "is_active": True},
        )
    except RecordNotFoundError:
        logger.info("auth.api_key_rejected", extra={"api_key": mask_secret(token)})
        return Result.failure(INVALID_API_KEY, "unauthorized")
    except StorageError as exc:
        logger.error("auth.api_key_lookup_failed", extra={"error": str(exc)})
        return Result.failure("could not validate API key", "storage", details=str(exc))

    company = row.get("companies") or {}
    if isinstance(company, list):
        company = company[0] if company else {}
    return Result.success(
        ApiKeyOwner(
            company_id=str(row["company_id"]),
            company_name=company.get("name"),
            key_name=row.get("name"),
            created_at=row.get("created_at"),
            last_used_at=row.get("last_used_at"),
        )
    )
