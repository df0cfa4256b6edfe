from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from mermaid_fragments.core.ports.store import DocumentStore, IssueSource
from mermaid_fragments.models import ErrorKind, ServiceResult

console = Console()
err_console = Console(stderr=True)

EXIT_FAILURE = 1
EXIT_CONFLICT = 2


def get_store() -> DocumentStore:
    from mermaid_fragments.store.confluence import ConfluenceDocumentStore
    from mermaid_fragments.store.settings import get_http_client

    return ConfluenceDocumentStore(get_http_client())


def get_issue_source() -> IssueSource:
    from mermaid_fragments.store.jira import JiraIssueSource
    from mermaid_fragments.store.settings import get_http_client

    return JiraIssueSource(get_http_client())


def render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def fail(result: ServiceResult) -> None:
    """Print a failed result and exit; conflicts get their own exit code."""
    err_console.print(f"[red]{result.error}[/red]")
    if result.error_kind is ErrorKind.CONFLICT:
        raise typer.Exit(EXIT_CONFLICT)
    raise typer.Exit(EXIT_FAILURE)
