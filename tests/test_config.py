from __future__ import annotations

import pytest

from shared.config import DEFAULT_DB_PATH, Settings, get_settings

ENV_NAMES = (
    "UPSTREAM_API_KEY", "UPSTREAM_URL", "REWRITE_MODEL", "UPSTREAM_TIMEOUT", "UPSTREAM_RETRIES",
    "ENFORCE_MODEL_CATALOG", "GATEWAY_URL", "GATEWAY_TIMEOUT", "SECRET_KEY", "PROMPTS_DB_PATH",
    "SESSION_LIMIT", "SESSION_TTL", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_come_from_the_model(clean_env: pytest.MonkeyPatch) -> None:
    settings = get_settings()

    assert settings == Settings()
    assert settings.upstream_api_key is None
    assert settings.upstream_timeout == 45.0
    assert settings.upstream_retries == 1
    assert settings.enforce_model_catalog is False
    assert settings.prompts_db_path == DEFAULT_DB_PATH


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("true", True), ("yes", True), ("0", False), ("off", False)])
def test_catalog_flag_accepts_boolean_words(clean_env: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    clean_env.setenv("ENFORCE_MODEL_CATALOG", raw)

    assert get_settings().enforce_model_catalog is expected


def test_environment_overrides(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("GATEWAY_URL", "http://gateway.test:8001/")
    clean_env.setenv("PROMPTS_DB_PATH", "/tmp/other.db")
    clean_env.setenv("UPSTREAM_TIMEOUT", "5")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.gateway_url == "http://gateway.test:8001"
    assert settings.prompts_db_path == "/tmp/other.db"
    assert settings.upstream_timeout == 5.0
    assert settings.log_level == "DEBUG"
