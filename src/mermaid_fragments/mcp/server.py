"""FastMCP server exposing the Mermaid fragment resolvers as tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from mermaid_fragments.core.ports.store import DocumentStore, IssueSource
from mermaid_fragments.core.service import (
    get_fragment_source,
    get_issue_description,
    get_issue_fragments,
    get_page_content as _get_page_content,
    get_page_history as _get_page_history,
    update_fragment_source,
)


def create_mcp_server(store: DocumentStore, issues: IssueSource) -> FastMCP:
    """Create a FastMCP server wired to the given page store and issue source."""

    mcp = FastMCP(
        "mermaid-fragments",
        instructions="Read and update Mermaid diagrams embedded in Confluence pages and Jira issues.",
    )

    @mcp.tool()
    async def get_page_content(page_id: str) -> dict[str, Any]:
        """Fetch a page's ADF body, title and version."""
        result = await _get_page_content(store, page_id)
        return result.model_dump(mode="json")

    @mcp.tool()
    async def get_mermaid_source(page_id: str, source_name: str | None = None) -> dict[str, Any]:
        """Read a named Mermaid fragment and the page version it was read at."""
        result = await get_fragment_source(store, page_id, source_name)
        return result.model_dump(mode="json")

    @mcp.tool()
    async def update_mermaid_source(
        page_id: str,
        new_source: str,
        source_name: str | None = None,
        current_version: int | None = None,
    ) -> dict[str, Any]:
        """Replace a Mermaid fragment; pass the version from the last read to guard against lost edits."""
        result = await update_fragment_source(store, page_id, source_name, new_source, current_version)
        return result.model_dump(mode="json")

    @mcp.tool()
    async def get_page_history(page_id: str, limit: int = 10) -> dict[str, Any]:
        """List recent versions of a page."""
        result = await _get_page_history(store, page_id, limit)
        return result.model_dump(mode="json")

    @mcp.tool()
    async def get_jira_issue(issue_key: str) -> dict[str, Any]:
        """Fetch an issue description flattened to text, with Mermaid code blocks fenced."""
        result = await get_issue_description(issues, issue_key)
        return result.model_dump(mode="json")

    @mcp.tool()
    async def get_issue_diagrams(issue_key: str) -> dict[str, Any]:
        """List the Mermaid diagrams found in an issue description."""
        result = await get_issue_fragments(issues, issue_key)
        return result.model_dump(mode="json")

    return mcp
