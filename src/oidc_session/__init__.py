"""Public exports for the OIDC session package."""

from .client import OIDCSessionClient
from .exceptions import (
    CorruptSessionError,
    InvalidSessionIdError,
    InvalidSubjectError,
    InvalidTokenBundleError,
    MissingIdentifierError,
    SessionError,
    SessionNotFoundError,
    StoreUnavailableError,
)
from .models import SignInResult, TokenBundle
from .session_id import derive_session_id, is_valid_session_id
from .session_storage import (
    InMemorySessionStore,
    RedisSessionStore,
    SessionStore,
    create_session_store,
)
from .user_session import UserSessionManager

__all__ = [
    "CorruptSessionError",
    "create_session_store",
    "derive_session_id",
    "InMemorySessionStore",
    "InvalidSessionIdError",
    "InvalidSubjectError",
    "InvalidTokenBundleError",
    "is_valid_session_id",
    "MissingIdentifierError",
    "OIDCSessionClient",
    "RedisSessionStore",
    "SessionError",
    "SessionNotFoundError",
    "SessionStore",
    "SignInResult",
    "StoreUnavailableError",
    "TokenBundle",
    "UserSessionManager",
]
