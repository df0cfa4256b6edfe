from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mermaid_fragments.api.dependencies import shutdown_stores
from mermaid_fragments.api.routes.health import router as health_router
from mermaid_fragments.api.routes.issues import router as issues_router
from mermaid_fragments.api.routes.pages import router as pages_router


@asynccontextmanager
async def _close_stores_on_shutdown(_app: FastAPI) -> AsyncIterator[None]:
    yield
    await shutdown_stores()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Mermaid Fragments API",
        description="Read and update Mermaid diagrams embedded in Confluence pages and Jira issues.",
        version="0.1.0",
        lifespan=_close_stores_on_shutdown,
    )

    app.include_router(health_router, include_in_schema=False)
    app.include_router(pages_router)
    app.include_router(issues_router)

    return app
