from fastapi import APIRouter, Depends, Response, status

from mermaid_fragments.api.dependencies import get_document_store
from mermaid_fragments.api.schemas import HealthResponse, ReadinessResponse
from mermaid_fragments.core.ports.store import DocumentStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse()


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(
    response: Response,
    store: DocumentStore = Depends(get_document_store),
) -> ReadinessResponse:
    """Report whether the page store answers; 503 when it does not."""
    if await store.ping():
        return ReadinessResponse(status="ok", store="up")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(status="degraded", store="down")
