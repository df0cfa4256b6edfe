from __future__ import annotations

from collections.abc import AsyncIterator

from mermaid_fragments.core.ports.store import DocumentStore, IssueSource
from mermaid_fragments.store.confluence import ConfluenceDocumentStore
from mermaid_fragments.store.jira import JiraIssueSource
from mermaid_fragments.store.settings import get_http_client

_store: ConfluenceDocumentStore | None = None
_issues: JiraIssueSource | None = None


async def get_document_store() -> AsyncIterator[DocumentStore]:
    """Yield a ``DocumentStore``, creating it lazily on first call."""
    global _store  # noqa: PLW0603
    if _store is None:
        _store = ConfluenceDocumentStore(get_http_client())
    yield _store


async def get_issue_source() -> AsyncIterator[IssueSource]:
    global _issues  # noqa: PLW0603
    if _issues is None:
        _issues = JiraIssueSource(get_http_client())
    yield _issues


async def shutdown_stores() -> None:
    global _store, _issues  # noqa: PLW0603
    if _store is not None:
        await _store.dispose()
        _store = None
    if _issues is not None:
        await _issues.dispose()
        _issues = None
