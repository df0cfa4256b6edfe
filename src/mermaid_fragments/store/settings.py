import os
from dataclasses import dataclass

import httpx

_DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class AtlassianSettings:
    base_url: str
    email: str | None = None
    api_token: str | None = None
    timeout: float = _DEFAULT_TIMEOUT


def get_settings() -> AtlassianSettings:
    timeout = os.getenv("ATLASSIAN_TIMEOUT")
    return AtlassianSettings(
        base_url=os.getenv("ATLASSIAN_BASE_URL", "https://your-domain.atlassian.net"),
        email=os.getenv("ATLASSIAN_EMAIL") or None,
        api_token=os.getenv("ATLASSIAN_API_TOKEN") or None,
        timeout=float(timeout) if timeout else _DEFAULT_TIMEOUT,
    )


def get_http_client(settings: AtlassianSettings | None = None) -> httpx.AsyncClient:
    settings = settings or get_settings()
    auth = httpx.BasicAuth(settings.email, settings.api_token) if settings.email and settings.api_token else None
    return httpx.AsyncClient(
        base_url=settings.base_url,
        auth=auth,
        timeout=settings.timeout,
        headers={"Accept": "application/json"},
    )
