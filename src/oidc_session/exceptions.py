"""Structured failures raised by the session layer."""

from typing import Dict, Optional


class SessionError(Exception):
    """Base class for every session-layer failure.

    Each error carries a stable ``code``, the ``operation`` that failed, a
    short ``title`` and a human-readable ``detail`` so callers can branch on
    the failure kind without matching message text.
    """

    code = "SESSION-GEN1-ER01"
    title = "Session operation failed"

    def __init__(
        self,
        operation: str,
        detail: str,
        *,
        code: Optional[str] = None,
        title: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.detail = detail
        if code is not None:
            self.code = code
        if title is not None:
            self.title = title
        super().__init__(f"{self.code} {self.operation}: {self.title} - {self.detail}")

    def to_dict(self) -> Dict[str, str]:
        return {
            "code": self.code,
            "operation": self.operation,
            "title": self.title,
            "detail": self.detail,
        }


class InvalidSubjectError(SessionError):
    """Raised when a session id is requested for a missing or empty subject."""

    code = "SESSION-SID1-IV01"
    title = "Creating session id failed"


class InvalidTokenBundleError(SessionError):
    """Raised when a token bundle cannot be turned into a session record."""

    code = "SESSION-CUS1-IV02"
    title = "Invalid token bundle"


class MissingIdentifierError(SessionError):
    code = "SESSION-DUS1-NF01"
    title = "Session id is not found"


class InvalidSessionIdError(SessionError):
    code = "SESSION-DUS1-IV01"
    title = "Destroying session failed"


class SessionNotFoundError(SessionError):
    code = "SESSION-GUS1-NF01"
    title = "Session not found"


class CorruptSessionError(SessionError):
    code = "SESSION-GUS1-IV01"
    title = "Session data is corrupt"


class StoreUnavailableError(SessionError):
    """Raised when the underlying session store call fails or times out."""

    code = "SESSION-STR1-UA01"
    title = "Session store unavailable"


__all__ = [
    "CorruptSessionError",
    "InvalidSessionIdError",
    "InvalidSubjectError",
    "InvalidTokenBundleError",
    "MissingIdentifierError",
    "SessionError",
    "SessionNotFoundError",
    "StoreUnavailableError",
]
