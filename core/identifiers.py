# core/identifiers.py
import re
from typing import Optional
from util.constants import BEARER_PREFIX, UUID_PATTERN

_UUID_RE = re.compile(UUID_PATTERN, re.IGNORECASE)


def is_valid_namespace_id(value: Optional[str]) -> bool:
    """Canonical 8-4-4-4-12 hex UUID, any case, nothing around it."""
    if not value:
        return False
    # fullmatch so a trailing newline is not accepted by `$`
    return _UUID_RE.fullmatch(value) is not None


def canonical_namespace_id(value: str) -> str:
    if not is_valid_namespace_id(value):
        raise ValueError("malformed namespace id")
    return value.lower()


def extract_bearer(header_value: Optional[str]) -> Optional[str]:
    """
    Accepts "Bearer <token>" or a bare "<token>".
    Returns None when the header is absent or blank.
    """
    if header_value is None:
        return None
    value = header_value.strip()
    if value[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        value = value[len(BEARER_PREFIX) :].strip()
    return value or None
