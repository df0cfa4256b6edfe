from typing import Any

import httpx

from mermaid_fragments.core.errors import FetchError


def read_json(response: httpx.Response, action: str) -> dict[str, Any]:
    """Decode a successful response body, raising ``FetchError`` unless it is a JSON object."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise FetchError(f"Failed to {action}: invalid JSON response") from exc
    if not isinstance(payload, dict):
        raise FetchError(f"Failed to {action}: unexpected response shape")
    return payload
