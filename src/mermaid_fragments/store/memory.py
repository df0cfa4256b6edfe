from datetime import datetime, timezone
from typing import Any

from mermaid_fragments.core.errors import CommitError, FetchError, VersionConflictError
from mermaid_fragments.models import Document, DocumentBody, Issue, PageVersion


class InMemoryDocumentStore:
    """Dict-backed page store.

    Writes are a compare-and-increment: a document is accepted only when its
    version is exactly one past the stored version. There is no ``await``
    between the comparison and the update, so it is atomic on the event loop.
    """

    def __init__(self) -> None:
        self.pages: dict[str, Document] = {}
        self.history: dict[str, list[PageVersion]] = {}
        self.write_count = 0

    def add_page(
        self,
        page_id: str,
        body: DocumentBody | dict[str, Any] | str | None = None,
        title: str = "",
        version: int = 1,
    ) -> Document:
        if not isinstance(body, DocumentBody):
            body = DocumentBody.from_adf(body)
        document = Document(id=page_id, title=title, version=version, body=body)
        self.pages[page_id] = document
        self.history[page_id] = [PageVersion(number=version, created_at=datetime.now(timezone.utc))]
        return document

    async def fetch_page(self, page_id: str) -> Document:
        document = self.pages.get(page_id)
        if document is None:
            raise FetchError("Failed to fetch page: 404", status_code=404)
        return document

    async def write_page(self, document: Document, message: str = "") -> int:
        current = self.pages.get(document.id)
        if current is None:
            raise CommitError("Failed to update page: 404 - page not found", status_code=404)
        if document.version != current.version + 1:
            raise VersionConflictError(
                f"Version {document.version} does not follow stored version {current.version}",
                server_version=current.version,
                detected_by="store",
            )
        self.pages[document.id] = document
        self.history[document.id].append(
            PageVersion(number=document.version, message=message, created_at=datetime.now(timezone.utc))
        )
        self.write_count += 1
        return document.version

    async def list_versions(self, page_id: str, limit: int = 10) -> list[PageVersion]:
        if page_id not in self.history:
            raise FetchError("Failed to fetch history: 404", status_code=404)
        return list(reversed(self.history[page_id]))[:limit]

    async def ping(self) -> bool:
        return True

    async def dispose(self) -> None:
        pass


class InMemoryIssueSource:
    def __init__(self) -> None:
        self.issues: dict[str, Issue] = {}

    def add_issue(self, issue_key: str, description: DocumentBody | dict[str, Any] | None = None) -> Issue:
        if description is not None and not isinstance(description, DocumentBody):
            description = DocumentBody.from_adf(description)
        issue = Issue(key=issue_key, description=description)
        self.issues[issue_key.upper()] = issue
        return issue

    async def fetch_issue(self, issue_key: str) -> Issue:
        issue = self.issues.get(issue_key.upper())
        if issue is None:
            raise FetchError("Failed to fetch issue: 404", status_code=404)
        return issue

    async def dispose(self) -> None:
        pass
