from mermaid_fragments.models import ErrorKind, ServiceResult

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.FETCH: 502,
    ErrorKind.CONFLICT: 409,
    ErrorKind.COMMIT: 502,
    ErrorKind.INTERNAL: 500,
}


def status_for(result: ServiceResult) -> int:
    """HTTP status for a tagged result; the body is always the result itself."""
    if result.ok:
        return 200
    return _STATUS_BY_KIND.get(result.error_kind or ErrorKind.INTERNAL, 500)
