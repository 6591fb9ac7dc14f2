"""Prueba de API key."""
from fastapi import APIRouter, Depends

from zionic.api.deps import require_api_key
from zionic.services.api_keys import ApiKeyOwner

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/test", summary="Verifica la API key enviada")
async def test_api_key(owner: ApiKeyOwner = Depends(require_api_key)) -> dict:
    return {
        "message": "Authentication succeeded",
        "company": {"id": owner.company_id, "name": owner.company_name},
        "apiKey": {
            "name": owner.key_name,
            "created_at": owner.created_at,
            "last_used_at": owner.last_used_at,
        },
    }
