from typing import Protocol

from mermaid_fragments.models import Document, Issue, PageVersion


class DocumentStore(Protocol):
    async def fetch_page(self, page_id: str) -> Document: ...

    async def write_page(self, document: Document, message: str = "") -> int: ...

    async def list_versions(self, page_id: str, limit: int = 10) -> list[PageVersion]: ...

    async def ping(self) -> bool: ...

    async def dispose(self) -> None: ...


class IssueSource(Protocol):
    async def fetch_issue(self, issue_key: str) -> Issue: ...

    async def dispose(self) -> None: ...
