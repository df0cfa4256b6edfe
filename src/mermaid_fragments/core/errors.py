class FragmentError(Exception):
    """Base class for every failure raised inside the fragment core."""


class InputValidationError(FragmentError):
    """Caller input has the wrong shape; raised before any I/O."""


class FetchError(FragmentError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class VersionConflictError(FragmentError):
    """The document changed since the caller last read it.

    ``detected_by`` is ``"guard"`` for the local pre-write check and
    ``"store"`` when the store rejected the write itself.
    """

    def __init__(self, message: str, server_version: int | None = None, detected_by: str = "guard") -> None:
        super().__init__(message)
        self.server_version = server_version
        self.detected_by = detected_by


class CommitError(FragmentError):
    def __init__(self, message: str, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
