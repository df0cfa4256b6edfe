import asyncio
from pathlib import Path
from typing import Annotated

import typer

from mermaid_fragments.cli import _common
from mermaid_fragments.core.errors import FragmentError
from mermaid_fragments.core.locator import iter_fragments
from mermaid_fragments.core.service import get_fragment_source, update_fragment_source
from mermaid_fragments.core.text import extract_text
from mermaid_fragments.core.validation import validate_page_id

fragment_app = typer.Typer(help="Read and update Mermaid fragments on a page.")


@fragment_app.command("get")
def get(
    page_id: Annotated[str, typer.Argument(help="Numeric page ID.")],
    name: Annotated[str | None, typer.Option(help="Fragment name (first fragment when omitted).")] = None,
) -> None:
    """Print a fragment's source."""
    store = _common.get_store()

    async def _run() -> None:
        try:
            result = await get_fragment_source(store, page_id, name)
        finally:
            await store.dispose()
        if not result.ok:
            _common.fail(result)
        if result.source is None:
            _common.err_console.print(f"[yellow]No fragment {name or 'default'!r} (version {result.version})[/yellow]")
            raise typer.Exit(_common.EXIT_FAILURE)
        _common.err_console.print(f"version {result.version}")
        _common.console.print(result.source, markup=False, highlight=False, soft_wrap=True)

    asyncio.run(_run())


@fragment_app.command("set")
def set_(
    page_id: Annotated[str, typer.Argument(help="Numeric page ID.")],
    source: Annotated[str | None, typer.Option(help="New fragment source.")] = None,
    file: Annotated[Path | None, typer.Option(help="Read the new source from a file.")] = None,
    name: Annotated[str | None, typer.Option(help="Fragment name (first fragment when omitted).")] = None,
    version: Annotated[
        int | None, typer.Option(help="Page version the edit is based on; skips the local check when omitted.")
    ] = None,
) -> None:
    """Replace a fragment's source."""
    if (source is None) == (file is None):
        _common.err_console.print("[red]Pass exactly one of --source or --file.[/red]")
        raise typer.Exit(_common.EXIT_FAILURE)
    new_source = source if source is not None else file.read_text(encoding="utf-8")  # type: ignore[union-attr]
    store = _common.get_store()

    async def _run() -> None:
        try:
            result = await update_fragment_source(store, page_id, name, new_source, version)
        finally:
            await store.dispose()
        if not result.ok:
            if result.server_version is not None:
                _common.err_console.print(f"Your version: {version}, server version: {result.server_version}")
            _common.fail(result)
        _common.console.print(
            f"[green]Updated fragment {name or 'default'!r}; page is now at version {result.new_version}[/green]"
        )

    asyncio.run(_run())


@fragment_app.command("list")
def list_(
    page_id: Annotated[str, typer.Argument(help="Numeric page ID.")],
    recursive: Annotated[bool, typer.Option(help="Also search nested containers.")] = False,
) -> None:
    """List the fragments on a page."""
    store = _common.get_store()

    async def _run() -> None:
        try:
            validate_page_id(page_id)
            document = await store.fetch_page(page_id)
        except FragmentError as exc:
            _common.err_console.print(f"[red]{exc}[/red]")
            raise typer.Exit(_common.EXIT_FAILURE) from exc
        finally:
            await store.dispose()
        rows = [
            (label or "(default)", len(extract_text(node).splitlines()))
            for label, node in iter_fragments(document.body, recursive=recursive)
        ]
        _common.render_table(["name", "lines"], rows)

    asyncio.run(_run())
