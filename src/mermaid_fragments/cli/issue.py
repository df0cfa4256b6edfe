import asyncio
from typing import Annotated

import typer
from rich.syntax import Syntax

from mermaid_fragments.cli import _common
from mermaid_fragments.core.service import get_issue_fragments

issue_app = typer.Typer(help="Read diagrams from Jira issues.")


@issue_app.command("diagrams")
def diagrams(
    issue_key: Annotated[str, typer.Argument(help="Issue key, e.g. PROJ-123.")],
) -> None:
    """Print the Mermaid blocks found in an issue description."""
    issues = _common.get_issue_source()

    async def _run() -> None:
        try:
            result = await get_issue_fragments(issues, issue_key)
        finally:
            await issues.dispose()
        if not result.ok:
            _common.fail(result)
        for fragment in result.fragments:
            _common.console.rule(f"{result.key} #{fragment.id}")
            _common.console.print(Syntax(fragment.source, "text"))
        _common.console.print(f"({len(result.fragments)} diagrams)")

    asyncio.run(_run())
