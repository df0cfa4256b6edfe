import logging
from typing import Any

import httpx

from mermaid_fragments.core.errors import CommitError, FetchError, VersionConflictError
from mermaid_fragments.models import Document, DocumentBody, PageVersion
from mermaid_fragments.store.helpers import read_json

logger = logging.getLogger(__name__)

_BODY_FORMAT = "atlas_doc_format"


def _document_from_payload(page_id: str, payload: dict[str, Any]) -> Document:
    try:
        body_value = ((payload.get("body") or {}).get(_BODY_FORMAT) or {}).get("value")
        body = DocumentBody.from_adf(body_value)
    except (AttributeError, ValueError) as exc:
        raise FetchError(f"Failed to parse page body: {exc}") from exc
    version = payload.get("version")
    version = version.get("number") if isinstance(version, dict) else None
    if not isinstance(version, int) or version < 0:
        raise FetchError("Failed to fetch page: response carries no version number")
    return Document(id=str(payload.get("id") or page_id), title=payload.get("title") or "", version=version, body=body)


def _page_version_from_payload(payload: Any) -> PageVersion:
    try:
        return PageVersion(
            number=payload["number"],
            message=payload.get("message") or "",
            created_at=payload.get("createdAt"),
            author_id=payload.get("authorId"),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as exc:
        raise FetchError(f"Failed to fetch history: malformed version entry {payload!r}") from exc


class ConfluenceDocumentStore:
    """Confluence Cloud pages (REST v2) holding ADF bodies.

    The server rejects a write whose version number is not the next one with
    ``409 Conflict``; that response is the authoritative concurrency check.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_page(self, page_id: str) -> Document:
        try:
            response = await self._client.get(f"/wiki/api/v2/pages/{page_id}", params={"body-format": _BODY_FORMAT})
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch page: {exc}") from exc
        if not response.is_success:
            raise FetchError(f"Failed to fetch page: {response.status_code}", status_code=response.status_code)
        return _document_from_payload(page_id, read_json(response, "fetch page"))

    async def write_page(self, document: Document, message: str = "") -> int:
        payload = {
            "id": document.id,
            "status": "current",
            "title": document.title,
            "body": {"representation": _BODY_FORMAT, "value": document.body.to_json()},
            "version": {"number": document.version, "message": message},
        }
        try:
            response = await self._client.put(f"/wiki/api/v2/pages/{document.id}", json=payload)
        except httpx.HTTPError as exc:
            raise CommitError(f"Failed to update page: {exc}") from exc

        if response.status_code == httpx.codes.CONFLICT:
            logger.info("Confluence rejected version %d of page %s", document.version, document.id)
            raise VersionConflictError(f"Failed to update page: {response.status_code}", detected_by="store")
        if not response.is_success:
            raise CommitError(
                f"Failed to update page: {response.status_code} - {response.text}",
                status_code=response.status_code,
                detail=response.text,
            )
        return document.version

    async def list_versions(self, page_id: str, limit: int = 10) -> list[PageVersion]:
        try:
            response = await self._client.get(f"/wiki/api/v2/pages/{page_id}/versions", params={"limit": limit})
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch history: {exc}") from exc
        if not response.is_success:
            raise FetchError(f"Failed to fetch history: {response.status_code}", status_code=response.status_code)
        results = read_json(response, "fetch history").get("results") or []
        if not isinstance(results, list):
            raise FetchError("Failed to fetch history: unexpected response shape")
        return [_page_version_from_payload(item) for item in results]

    async def ping(self) -> bool:
        try:
            response = await self._client.get("/wiki/api/v2/spaces", params={"limit": 1})
        except httpx.HTTPError:
            return False
        return response.is_success

    async def dispose(self) -> None:
        await self._client.aclose()
