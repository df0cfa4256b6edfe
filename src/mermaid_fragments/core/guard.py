"""Local optimistic-concurrency pre-check.

The check runs between reading the document and writing it back, so another
writer can still slip in before the write lands. It only exists to fail fast;
the store's compare-and-increment at write time has the final word.
"""

from dataclasses import dataclass
from enum import Enum

from mermaid_fragments.core.errors import VersionConflictError

LOCAL_CONFLICT_MESSAGE = "Page has been modified by another user. Please refresh and try again."


class GuardState(str, Enum):
    UNCHECKED = "unchecked"
    CHECKED = "checked"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    proceed: bool
    server_version: int


def check_version(expected: int | None, actual: int) -> GuardDecision:
    if expected is None:
        return GuardDecision(state=GuardState.UNCHECKED, proceed=True, server_version=actual)
    return GuardDecision(state=GuardState.CHECKED, proceed=expected == actual, server_version=actual)


def ensure_version(expected: int | None, actual: int) -> GuardDecision:
    """Like :func:`check_version`, but raise ``VersionConflictError`` on mismatch."""
    decision = check_version(expected, actual)
    if not decision.proceed:
        raise VersionConflictError(LOCAL_CONFLICT_MESSAGE, server_version=actual, detected_by="guard")
    return decision
