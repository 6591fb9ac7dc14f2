"""Resolución de la configuración de instancias de Evolution API."""

from __future__ import annotations

from typing import Any, Mapping

from zionic.core.config import Settings
from zionic.core.logging import get_logger
from zionic.models.conversation import InstanceConfig
from zionic.services.result import Result

logger = get_logger(__name__)

FALLBACK_INSTANCE_ID = "env-fallback"
MISSING_API_KEY_ERROR = "Evolution API key is not configured"


def _provider_credentials(config: Settings) -> tuple[str, str] | None:
    if not config.evolution_api_key:
        return None
    return config.evolution_api_url, config.evolution_api_key


def get_evolution_config_fallback(
    instance_name: str = "default", *, config: Settings
) -> Result[InstanceConfig]:
    """Instancia sintética construida sólo desde la configuración.

    Se usa cuando no hay una instancia registrada que consultar. No existe una
    API key por defecto: sin ``EVOLUTION_API_KEY`` se devuelve una falla de
    configuración.
    """
    credentials = _provider_credentials(config)
    if credentials is None:
        logger.error("instance.config_missing", extra={"instance_name": instance_name})
        return Result.failure(MISSING_API_KEY_ERROR, "configuration")
    server_url, api_key = credentials
    return Result.success(
        InstanceConfig(
            id=FALLBACK_INSTANCE_ID,
            name=instance_name,
            phone_number="",
            server_url=server_url,
            api_key=api_key,
        )
    )


def build_instance_config(row: Mapping[str, Any], *, config: Settings) -> Result[InstanceConfig]:
    """Combina la fila de `whatsapp_instances` con las credenciales configuradas.

    URL y API key siempre salen de la configuración, aunque la fila traiga
    columnas `server_url` o `api_key`.
    """
    credentials = _provider_credentials(config)
    if credentials is None:
        logger.error("instance.config_missing", extra={"instance_id": row.get("id")})
        return Result.failure(MISSING_API_KEY_ERROR, "configuration")
    server_url, api_key = credentials
    return Result.success(
        InstanceConfig(
            id=str(row["id"]),
            name=row.get("name") or "",
            phone_number=row.get("phone_number") or "",
            server_url=server_url,
            api_key=api_key,
        )
    )
