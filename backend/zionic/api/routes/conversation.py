"""Consulta de datos de conversación para la empresa autenticada."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from zionic.api.deps import get_store, require_api_key
from zionic.core.config import Settings, get_settings
from zionic.services.api_keys import ApiKeyOwner
from zionic.services.conversations import get_conversation_data
from zionic.services.supabase import SupabaseStore

router = APIRouter(prefix="/conversation", tags=["conversation"])

_STATUS_BY_ERROR = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "configuration": status.HTTP_503_SERVICE_UNAVAILABLE,
    "storage": status.HTTP_502_BAD_GATEWAY,
}


@router.get("/{conversation_id}", summary="Obtener datos de la conversación")
async def read_conversation(
    conversation_id: str,
    owner: ApiKeyOwner = Depends(require_api_key),
    store: SupabaseStore = Depends(get_store),
    config: Settings = Depends(get_settings),
) -> JSONResponse:
    """Devuelve conversación, contacto e instancia; la API key del proveedor nunca sale."""
    result = await get_conversation_data(conversation_id, owner.company_id, store, config=config)
    if result.ok:
        return JSONResponse(result.to_payload(exclude={"instance": {"api_key"}}))
    code = _STATUS_BY_ERROR.get(result.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(result.to_payload(), status_code=code)
