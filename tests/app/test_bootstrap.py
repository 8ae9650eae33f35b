"""Testes do composition root (app.bootstrap)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.bootstrap import create_applet, validate_runtime_settings
from app.infra.channel import HttpChannelAdapter
from app.infra.render import InMemoryRenderHost
from config.settings import AppletSettings, get_applet_settings, get_channel_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    get_applet_settings.cache_clear()
    get_channel_settings.cache_clear()
    yield
    get_applet_settings.cache_clear()
    get_channel_settings.cache_clear()


def test_create_applet_without_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHANNEL_ENDPOINT_URL", raising=False)

    applet = create_applet(InMemoryRenderHost())

    assert applet.channel_adapter is None
    assert applet.card is None


def test_create_applet_uses_http_channel(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHANNEL_ENDPOINT_URL", "https://bot.example.com/invoke")

    applet = create_applet(InMemoryRenderHost(), settings=AppletSettings())

    assert isinstance(applet.channel_adapter, HttpChannelAdapter)


def test_validate_runtime_settings_ok(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHANNEL_ENDPOINT_URL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")

    assert validate_runtime_settings() == []


def test_validate_runtime_settings_lenient_in_development(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("CHANNEL_ENDPOINT_URL", "ftp://bot.example.com")

    errors = validate_runtime_settings()

    assert errors == ["channel: CHANNEL_ENDPOINT_URL inválida: ftp://bot.example.com"]


def test_validate_runtime_settings_strict_in_production(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(RuntimeError, match="production"):
        validate_runtime_settings()
