from __future__ import annotations

import pytest

from badge_registry.core.config import AppEnv, Settings, load_settings

_VARS = ("APP_ENV", "LOG_LEVEL", "LOG_JSON", "PORT", "BADGE_ISSUER", "TOKEN_TTL_MIN")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


# ---- valid values ----


def test_load_settings_defaults() -> None:
    settings = load_settings()
    assert settings.app_env == "dev"
    assert settings.log_level == "info"
    assert settings.log_json is False
    assert settings.port == 8000
    assert settings.badge_issuer == "issuer"
    assert settings.token_ttl_min == 15


def test_load_settings_respects_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("BADGE_ISSUER", "academy")
    monkeypatch.setenv("TOKEN_TTL_MIN", "5")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "error"
    assert settings.log_json is True
    assert settings.port == 9000
    assert settings.badge_issuer == "academy"
    assert settings.token_ttl_min == 5


def test_load_settings_normalizes_case(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_JSON", "Yes")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "debug"
    assert settings.log_json is True


def test_badge_issuer_keeps_case_but_strips(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BADGE_ISSUER", "  Academy-Admin  ")
    assert load_settings().badge_issuer == "Academy-Admin"


# ---- invalid values ----


@pytest.mark.parametrize(
    "name,value,match",
    [
        ("APP_ENV", "staging", "APP_ENV must be dev|test|prod"),
        ("APP_ENV", "", "APP_ENV must be dev|test|prod"),
        ("LOG_LEVEL", "verbose", "LOG_LEVEL must be debug|info|warning|error"),
        ("LOG_JSON", "maybe", "LOG_JSON must be a boolean"),
        ("PORT", "eighty", "PORT must be an integer"),
        ("PORT", "0", "PORT must be positive"),
        ("TOKEN_TTL_MIN", "-3", "TOKEN_TTL_MIN must be positive"),
        ("BADGE_ISSUER", "   ", "BADGE_ISSUER must be non-empty"),
    ],
)
def test_load_settings_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str, match: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=match):
        load_settings()


# ---- Settings properties ----


def _make_settings(app_env: AppEnv = "dev") -> Settings:
    return Settings(
        app_env=app_env,
        log_level="info",
        log_json=False,
        port=8000,
        badge_issuer="issuer",
        token_ttl_min=15,
    )


def test_settings_env_flags() -> None:
    assert _make_settings("dev").is_dev is True
    assert _make_settings("test").is_test is True
    assert _make_settings("prod").is_prod is True
    assert _make_settings("prod").is_dev is False


def test_settings_is_frozen() -> None:
    s = _make_settings()
    with pytest.raises(AttributeError):
        s.badge_issuer = "someone-else"  # type: ignore[misc]
