"""Configuración central basada en variables de entorno."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EVOLUTION_API_URL = "http://localhost:8080"


class Settings(BaseSettings):
    """Valores globales leídos desde `.env` o el entorno."""

    environment: str = "development"
    service_name: str = "Zionic API"
    service_version: str = "3.0.0"
    log_level: str | None = Field(
        default=None,
        description="Nivel de logging global (ej. debug, info, warning). Cuando no se define, usa un valor por ambiente.",
    )
    log_file_path: str | None = Field(
        default=None,
        description="Archivo rotativo opcional para logs; sin valor sólo se escribe a stderr.",
    )
    supabase_url: str | None = None
    supabase_service_role: str | None = None
    store_timeout_seconds: float = 10.0
    evolution_api_url: str = Field(
        default=DEFAULT_EVOLUTION_API_URL,
        validation_alias=AliasChoices("ZIONIC_EVOLUTION_API_URL", "EVOLUTION_API_URL"),
    )
    # Sin valor por defecto: la llave del proveedor siempre debe configurarse
    evolution_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ZIONIC_EVOLUTION_API_KEY", "EVOLUTION_API_KEY"),
    )
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="ZIONIC_", extra="allow", populate_by_name=True
    )


settings = Settings()


def get_settings() -> Settings:
    """Dependencia de FastAPI que expone la configuración global."""
    return settings
