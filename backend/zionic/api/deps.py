"""Dependencias reutilizables para las rutas de la API."""

from fastapi import Depends, Header, HTTPException, status

from zionic.core.config import Settings, get_settings
from zionic.core.security import AuthorizationError, extract_bearer_token
from zionic.services.api_keys import ApiKeyOwner, resolve_api_key
from zionic.services.supabase import StorageError, SupabaseStore


def get_store(config: Settings = Depends(get_settings)) -> SupabaseStore:
    """Cliente de Supabase por request; 503 cuando falta configuración."""
    try:
        return SupabaseStore.from_settings(config)
    except StorageError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


async def require_api_key(
    authorization: str | None = Header(default=None),
    store: SupabaseStore = Depends(get_store),
) -> ApiKeyOwner:
    """Valida el ``Authorization: Bearer`` y devuelve la empresa dueña de la key."""
    try:
        token = extract_bearer_token(authorization)
    except AuthorizationError as exc:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    result = await resolve_api_key(token, store)
    if not result.ok:
        code = (
            status.HTTP_401_UNAUTHORIZED
            if result.error_code == "unauthorized"
            else status.HTTP_502_BAD_GATEWAY
        )
        raise HTTPException(code, detail=result.error)
    return result.value
