import asyncio
from typing import Annotated

import typer

from mermaid_fragments.cli import _common
from mermaid_fragments.core.service import get_page_history

page_app = typer.Typer(help="Inspect pages.")


@page_app.command("history")
def history(
    page_id: Annotated[str, typer.Argument(help="Numeric page ID.")],
    limit: Annotated[int, typer.Option(help="Max versions to return.")] = 10,
) -> None:
    """List recent versions of a page."""
    store = _common.get_store()

    async def _run() -> None:
        try:
            result = await get_page_history(store, page_id, limit)
        finally:
            await store.dispose()
        if not result.ok:
            _common.fail(result)
        rows = [(v.number, v.created_at or "", v.author_id or "", v.message) for v in result.versions]
        _common.render_table(["number", "created_at", "author_id", "message"], rows)

    asyncio.run(_run())
