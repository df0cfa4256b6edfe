"""Unit tests for environment-driven HTTP settings."""

import httpx
import pytest

from mermaid_fragments.store.settings import AtlassianSettings, get_http_client, get_settings


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ATLASSIAN_BASE_URL", "https://acme.atlassian.net")
    monkeypatch.setenv("ATLASSIAN_EMAIL", "dev@acme.test")
    monkeypatch.setenv("ATLASSIAN_API_TOKEN", "secret")
    monkeypatch.setenv("ATLASSIAN_TIMEOUT", "5")

    settings = get_settings()

    assert settings == AtlassianSettings("https://acme.atlassian.net", "dev@acme.test", "secret", 5.0)


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ATLASSIAN_BASE_URL", "ATLASSIAN_EMAIL", "ATLASSIAN_API_TOKEN", "ATLASSIAN_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.email is None
    assert settings.api_token is None
    assert settings.timeout == 30.0


@pytest.mark.asyncio
async def test_client_uses_base_url_and_basic_auth() -> None:
    client = get_http_client(AtlassianSettings("https://acme.atlassian.net", "dev@acme.test", "secret"))
    try:
        assert client.base_url.host == "acme.atlassian.net"
        assert isinstance(client.auth, httpx.BasicAuth)
        assert client.headers["Accept"] == "application/json"
    finally:
        await client.aclose()
