from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"


class ReadinessResponse(BaseModel):
    status: str = "ok"
    store: str = "up"


class FragmentUpdateRequest(BaseModel):
    """PUT /pages/{page_id}/fragment body.

    ``source`` is left untyped so a non-string reaches the service layer and
    comes back as a tagged validation failure instead of a bare 422.
    """

    name: str | None = None
    source: object = None
    current_version: int | None = None
