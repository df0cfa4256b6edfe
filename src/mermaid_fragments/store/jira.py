import httpx

from mermaid_fragments.core.errors import FetchError
from mermaid_fragments.models import DocumentBody, Issue
from mermaid_fragments.store.helpers import read_json


class JiraIssueSource:
    """Jira Cloud issues (REST v3); only the ADF description is read."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_issue(self, issue_key: str) -> Issue:
        try:
            response = await self._client.get(f"/rest/api/3/issue/{issue_key}", params={"fields": "description"})
        except httpx.HTTPError as exc:
            raise FetchError(f"Failed to fetch issue: {exc}") from exc
        if not response.is_success:
            raise FetchError(f"Failed to fetch issue: {response.status_code}", status_code=response.status_code)

        payload = read_json(response, "fetch issue")
        fields = payload.get("fields")
        raw_description = fields.get("description") if isinstance(fields, dict) else None
        try:
            description = DocumentBody.from_adf(raw_description) if isinstance(raw_description, dict) else None
        except ValueError as exc:
            raise FetchError(f"Failed to parse issue description: {exc}") from exc
        return Issue(key=str(payload.get("key") or issue_key), description=description)

    async def dispose(self) -> None:
        await self._client.aclose()
