"""Pruebas del resolvedor de configuración de instancias."""

from zionic.core.config import DEFAULT_EVOLUTION_API_URL, Settings
from zionic.services.instances import (
    FALLBACK_INSTANCE_ID,
    build_instance_config,
    get_evolution_config_fallback,
)


def test_fallback_uses_configured_values(config: Settings) -> None:
    result = get_evolution_config_fallback("vendas-sp", config=config)

    assert result.ok
    instance = result.value
    assert instance.id == FALLBACK_INSTANCE_ID
    assert instance.name == "vendas-sp"
    assert instance.phone_number == ""
    assert instance.server_url == "https://evolution.example.com"
    assert instance.api_key == "evo-key"
    assert instance.status == "connected"


def test_fallback_default_name_and_url(monkeypatch) -> None:
    monkeypatch.delenv("EVOLUTION_API_URL", raising=False)
    monkeypatch.delenv("ZIONIC_EVOLUTION_API_URL", raising=False)
    config = Settings(_env_file=None, evolution_api_key="evo-key")

    result = get_evolution_config_fallback(config=config)

    assert result.value.name == "default"
    assert result.value.server_url == DEFAULT_EVOLUTION_API_URL


def test_fallback_without_api_key_is_configuration_error() -> None:
    config = Settings(_env_file=None, evolution_api_key=None)

    result = get_evolution_config_fallback("default", config=config)

    assert not result.ok
    assert result.error_code == "configuration"


def test_fallback_reads_provider_aliases(monkeypatch) -> None:
    monkeypatch.setenv("EVOLUTION_API_URL", "https://evo.internal")
    monkeypatch.setenv("EVOLUTION_API_KEY", "from-env")

    result = get_evolution_config_fallback(config=Settings(_env_file=None))

    assert result.value.server_url == "https://evo.internal"
    assert result.value.api_key == "from-env"


def test_build_instance_config_ignores_stored_credentials(config: Settings) -> None:
    row = {
        "id": "inst-1",
        "name": "principal",
        "phone_number": "5511888888888",
        "server_url": "https://stale.example.com",
        "api_key": "stale-key",
    }

    result = build_instance_config(row, config=config)

    assert result.ok
    assert result.value.id == "inst-1"
    assert result.value.phone_number == "5511888888888"
    assert result.value.server_url == "https://evolution.example.com"
    assert result.value.api_key == "evo-key"
    assert result.value.status == "connected"
