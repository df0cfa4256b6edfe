import logging

from mermaid_fragments.core.guard import ensure_version
from mermaid_fragments.core.locator import find_fragment
from mermaid_fragments.core.mutator import replace_fragment
from mermaid_fragments.core.ports.store import DocumentStore
from mermaid_fragments.core.text import extract_text

logger = logging.getLogger(__name__)


def commit_message(name: str | None) -> str:
    return f"Updated Mermaid diagram: {name or 'default'}"


async def read_fragment(
    store: DocumentStore, page_id: str, name: str | None = None, *, recursive: bool = False
) -> tuple[str | None, int]:
    """Return ``(source, version)``; source is None when no fragment matches."""
    document = await store.fetch_page(page_id)
    node = find_fragment(document.body, name, recursive=recursive)
    source = extract_text(node) if node is not None else None
    return source, document.version


async def commit_fragment(
    store: DocumentStore,
    page_id: str,
    name: str | None,
    new_source: str,
    expected_version: int | None = None,
    *,
    recursive: bool = False,
) -> int:
    """Replace one fragment's source and write the page back.

    Steps: fetch, local version check, rewrite, write with the fetched version
    plus one. Returns the new version. Raises ``FetchError``,
    ``VersionConflictError`` or ``CommitError``; nothing is retried.
    """
    document = await store.fetch_page(page_id)
    ensure_version(expected_version, document.version)

    body = replace_fragment(document.body, name, new_source, recursive=recursive)
    if body is document.body:
        logger.warning("No fragment %r on page %s; writing the page unchanged", name or "default", page_id)

    new_version = document.version + 1
    updated = document.model_copy(update={"body": body, "version": new_version})
    await store.write_page(updated, commit_message(name))
    logger.info("Committed fragment %r on page %s at version %d", name or "default", page_id, new_version)
    return new_version
