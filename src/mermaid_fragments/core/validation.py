import re
from typing import Any

from mermaid_fragments.core.errors import InputValidationError

MAX_FRAGMENT_NAME_LENGTH = 255

_PAGE_ID_PATTERN = re.compile(r"\d+")
_ISSUE_KEY_PATTERN = re.compile(r"[A-Z][A-Z0-9]*-\d+", re.IGNORECASE)


def is_valid_page_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_PAGE_ID_PATTERN.fullmatch(value))


def is_valid_issue_key(value: Any) -> bool:
    return isinstance(value, str) and bool(_ISSUE_KEY_PATTERN.fullmatch(value))


def is_valid_fragment_name(value: Any) -> bool:
    """A fragment name is optional; when given it must be 1..255 characters."""
    if value is None:
        return True
    return isinstance(value, str) and 0 < len(value) <= MAX_FRAGMENT_NAME_LENGTH


def is_valid_source(value: Any) -> bool:
    return isinstance(value, str)


def validate_page_id(value: Any) -> str:
    if not is_valid_page_id(value):
        raise InputValidationError("Invalid page ID format")
    return value


def validate_issue_key(value: Any) -> str:
    if not is_valid_issue_key(value):
        raise InputValidationError("Invalid issue key format")
    return value


def validate_fragment_name(value: Any) -> str | None:
    if not is_valid_fragment_name(value):
        raise InputValidationError("Invalid source name format")
    return value


def validate_source(value: Any) -> str:
    if not is_valid_source(value):
        raise InputValidationError("Invalid source content")
    return value
