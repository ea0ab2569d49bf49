"""Tests for services.config: environment driven settings."""

import pytest
from pydantic import ValidationError

from schemas import Settings
from services.config import load_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


ENV_VARS = [
    "LISTEN_ADDR", "PORT", "GOOGLE_SHEET_ID", "SHEET_NAME", "CACHE_TTL_SECONDS",
    "PROVIDER_TIMEOUT_SECONDS", "GOOGLE_SHEETS_API_KEY", "GOOGLE_TOKEN_FILE", "LOG_LEVEL", "HEALTH_PATH",
]


def test_defaults(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.listen_addr == "localhost"
    assert settings.port == 8080
    assert settings.google_sheet_id == ""
    assert settings.sheet_name == ""
    assert settings.cache_ttl_seconds == 5.0
    assert settings.provider_timeout_seconds == 10.0
    assert settings.google_sheets_api_key is None
    assert settings.google_token_file == "token.json"
    assert settings.log_level == "INFO"
    assert settings.health_path is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("LISTEN_ADDR", "0.0.0.0")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("GOOGLE_SHEET_ID", "abc")
    monkeypatch.setenv("SHEET_NAME", "Links")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.listen_addr == "0.0.0.0"
    assert settings.port == 9000
    assert settings.google_sheet_id == "abc"
    assert settings.sheet_name == "Links"
    assert settings.cache_ttl_seconds == 30.0
    assert settings.log_level == "DEBUG"


def test_empty_port_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "")
    assert load_settings().port == 8080


def test_negative_ttl_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(cache_ttl_seconds=-1)


def test_health_path_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("HEALTH_PATH", "/_health")
    assert load_settings().health_path == "/_health"
