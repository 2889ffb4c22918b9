"""Deterministic session id derivation and validation."""

from typing import Any, Optional
import uuid

from .exceptions import InvalidSubjectError

# Fixed, non-secret namespace; changing it re-keys every stored session.
DEFAULT_SESSION_NAMESPACE = uuid.UUID("6f1c3e52-8b0a-4d8e-9f57-2a4d3c1b7e90")

SESSION_ID_LENGTH = 36
SESSION_ID_VERSION = 5


def derive_session_id(subject: Optional[str], namespace: Optional[uuid.UUID] = None) -> str:
    """Derive the session id for ``subject``.

    The id is a version 5 UUID of the subject under ``namespace``: one-way,
    and identical for identical subjects in any process.

    Raises:
        InvalidSubjectError: if ``subject`` is missing, empty or not a string.
    """
    if not isinstance(subject, str) or not subject:
        raise InvalidSubjectError(
            "derive_session_id()",
            "Could not create a session id: the subject claim is missing or empty.",
        )
    return str(uuid.uuid5(namespace or DEFAULT_SESSION_NAMESPACE, subject))


def is_valid_session_id(candidate: Any) -> bool:
    """Return True if ``candidate`` has the shape produced by :func:`derive_session_id`."""
    if not isinstance(candidate, str) or len(candidate) != SESSION_ID_LENGTH:
        return False
    try:
        parsed = uuid.UUID(candidate)
    except ValueError:
        return False
    return str(parsed) == candidate and parsed.version == SESSION_ID_VERSION


__all__ = [
    "DEFAULT_SESSION_NAMESPACE",
    "derive_session_id",
    "is_valid_session_id",
]
