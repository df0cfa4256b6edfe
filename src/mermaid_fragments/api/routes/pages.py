from fastapi import APIRouter, Depends, Query, Response

from mermaid_fragments.api.dependencies import get_document_store
from mermaid_fragments.api.schemas import FragmentUpdateRequest
from mermaid_fragments.api.status import status_for
from mermaid_fragments.core.ports.store import DocumentStore
from mermaid_fragments.core.service import (
    get_fragment_source,
    get_page_content,
    get_page_history,
    update_fragment_source,
)
from mermaid_fragments.models import FragmentReadResult, FragmentWriteResult, PageContentResult, PageHistoryResult

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("/{page_id}", response_model=PageContentResult)
async def page_content(
    page_id: str,
    response: Response,
    store: DocumentStore = Depends(get_document_store),
) -> PageContentResult:
    result = await get_page_content(store, page_id)
    response.status_code = status_for(result)
    return result


@router.get("/{page_id}/fragment", response_model=FragmentReadResult)
async def read_fragment(
    page_id: str,
    response: Response,
    name: str | None = None,
    store: DocumentStore = Depends(get_document_store),
) -> FragmentReadResult:
    """Read the named Mermaid fragment (the first fragment when no name is given)."""
    result = await get_fragment_source(store, page_id, name)
    response.status_code = status_for(result)
    return result


@router.put("/{page_id}/fragment", response_model=FragmentWriteResult)
async def write_fragment(
    page_id: str,
    body: FragmentUpdateRequest,
    response: Response,
    store: DocumentStore = Depends(get_document_store),
) -> FragmentWriteResult:
    """Replace a fragment's source, guarded by ``current_version`` when given."""
    result = await update_fragment_source(
        store,
        page_id,
        body.name,
        body.source,  # type: ignore[arg-type]
        body.current_version,
    )
    response.status_code = status_for(result)
    return result


@router.get("/{page_id}/versions", response_model=PageHistoryResult)
async def page_history(
    page_id: str,
    response: Response,
    limit: int = Query(default=10, ge=1, le=250),
    store: DocumentStore = Depends(get_document_store),
) -> PageHistoryResult:
    result = await get_page_history(store, page_id, limit)
    response.status_code = status_for(result)
    return result
