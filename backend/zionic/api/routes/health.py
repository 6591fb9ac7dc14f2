"""Endpoint de salud mínimo para validaciones rápidas."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from zionic.core.config import Settings, get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del servicio")
def healthcheck(config: Settings = Depends(get_settings)) -> dict[str, str]:
    """Indica que la API está viva junto con nombre y versión del servicio."""
    return {
        "status": "ok",
        "service": config.service_name,
        "version": config.service_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
