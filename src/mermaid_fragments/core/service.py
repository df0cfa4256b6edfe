"""Resolver-style entry points.

Each function validates its input, runs the core and turns every failure into
a tagged result model. Nothing raises past this module.
"""

import logging

from mermaid_fragments.core.commit import commit_fragment, read_fragment
from mermaid_fragments.core.errors import CommitError, FetchError, InputValidationError, VersionConflictError
from mermaid_fragments.core.guard import LOCAL_CONFLICT_MESSAGE
from mermaid_fragments.core.ports.store import DocumentStore, IssueSource
from mermaid_fragments.core.scanner import flatten_description, scan_fenced_fragments
from mermaid_fragments.core.validation import (
    validate_fragment_name,
    validate_issue_key,
    validate_page_id,
    validate_source,
)
from mermaid_fragments.models import (
    ErrorKind,
    FragmentReadResult,
    FragmentWriteResult,
    IssueDescriptionResult,
    IssueFragmentsResult,
    PageContentResult,
    PageHistoryResult,
)

logger = logging.getLogger(__name__)

STORE_CONFLICT_MESSAGE = "Page was modified while saving. Please refresh and try again."

_ERROR_KINDS: tuple[tuple[type[Exception], ErrorKind], ...] = (
    (InputValidationError, ErrorKind.VALIDATION),
    (FetchError, ErrorKind.FETCH),
    (VersionConflictError, ErrorKind.CONFLICT),
    (CommitError, ErrorKind.COMMIT),
)


def error_kind(exc: Exception) -> ErrorKind:
    for exc_type, kind in _ERROR_KINDS:
        if isinstance(exc, exc_type):
            return kind
    return ErrorKind.INTERNAL


def _log_unexpected(exc: Exception, action: str, *args: object) -> None:
    if error_kind(exc) is ErrorKind.INTERNAL:
        logger.exception("Unexpected error " + action, *args)


async def get_page_content(store: DocumentStore, page_id: str) -> PageContentResult:
    try:
        validate_page_id(page_id)
        document = await store.fetch_page(page_id)
    except Exception as exc:
        _log_unexpected(exc, "reading page %s", page_id)
        return PageContentResult(ok=False, error=str(exc), error_kind=error_kind(exc))
    return PageContentResult(ok=True, content=document.body.to_json(), title=document.title, version=document.version)


async def get_fragment_source(store: DocumentStore, page_id: str, name: str | None = None) -> FragmentReadResult:
    """Read a fragment's source; ``source`` is None when the page has no such fragment."""
    try:
        validate_page_id(page_id)
        validate_fragment_name(name)
        source, version = await read_fragment(store, page_id, name)
    except Exception as exc:
        _log_unexpected(exc, "reading fragment %r on page %s", name, page_id)
        return FragmentReadResult(ok=False, error=str(exc), error_kind=error_kind(exc))
    return FragmentReadResult(ok=True, source=source, version=version)


async def update_fragment_source(
    store: DocumentStore,
    page_id: str,
    name: str | None,
    new_source: str,
    current_version: int | None = None,
) -> FragmentWriteResult:
    """Write *new_source* into the named fragment if the page is still at *current_version*.

    On success the returned ``new_version`` replaces the caller's token; the
    old token is stale and a second update with it will conflict. Passing no
    version skips the local check and leaves only the store's own check.
    """
    try:
        validate_page_id(page_id)
        validate_fragment_name(name)
        validate_source(new_source)
        new_version = await commit_fragment(store, page_id, name, new_source, current_version)
    except VersionConflictError as exc:
        logger.info(
            "Version conflict on page %s (detected by %s, server version %s)",
            page_id,
            exc.detected_by,
            exc.server_version,
        )
        message = LOCAL_CONFLICT_MESSAGE if exc.detected_by == "guard" else STORE_CONFLICT_MESSAGE
        return FragmentWriteResult(
            ok=False,
            error=message,
            error_kind=ErrorKind.CONFLICT,
            conflict=True,
            server_version=exc.server_version,
        )
    except Exception as exc:
        _log_unexpected(exc, "updating fragment %r on page %s", name, page_id)
        return FragmentWriteResult(ok=False, error=str(exc), error_kind=error_kind(exc))
    return FragmentWriteResult(ok=True, new_version=new_version)


async def get_page_history(store: DocumentStore, page_id: str, limit: int = 10) -> PageHistoryResult:
    try:
        validate_page_id(page_id)
        versions = await store.list_versions(page_id, limit)
    except Exception as exc:
        _log_unexpected(exc, "reading history of page %s", page_id)
        return PageHistoryResult(ok=False, error=str(exc), error_kind=error_kind(exc))
    return PageHistoryResult(ok=True, versions=versions)


async def get_issue_description(source: IssueSource, issue_key: str) -> IssueDescriptionResult:
    try:
        validate_issue_key(issue_key)
        issue = await source.fetch_issue(issue_key)
    except Exception as exc:
        _log_unexpected(exc, "reading issue %s", issue_key)
        return IssueDescriptionResult(ok=False, error=str(exc), error_kind=error_kind(exc))
    return IssueDescriptionResult(ok=True, key=issue.key, description=flatten_description(issue.description))


async def get_issue_fragments(source: IssueSource, issue_key: str) -> IssueFragmentsResult:
    result = await get_issue_description(source, issue_key)
    if not result.ok:
        return IssueFragmentsResult(ok=False, error=result.error, error_kind=result.error_kind)
    return IssueFragmentsResult(ok=True, key=result.key, fragments=scan_fenced_fragments(result.description))
