"""
Per-user session lifecycle on top of a session store.

A session record is the JSON-serialized token bundle of one principal,
stored under an id derived from the principal's subject claim. Each id moves
through ``absent -> present -> absent``; there is no partial update and no
internal expiry state.

The manager holds no cached copy of any record and takes no locks. Callers
that need ordering between a concurrent create and destroy for the same
subject must serialize those calls themselves.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar, Union
import uuid

from .config import load_session_settings
from .exceptions import (
    CorruptSessionError,
    InvalidSessionIdError,
    InvalidTokenBundleError,
    MissingIdentifierError,
    SessionNotFoundError,
    StoreUnavailableError,
)
from .models import TokenBundle
from .session_id import derive_session_id, is_valid_session_id
from .session_storage.base import SessionStore

logger = logging.getLogger("oidc_session.user_session")

T = TypeVar("T")


class UserSessionManager:
    """Create, read and destroy session records in ``store``."""

    def __init__(self, store: SessionStore, namespace: Optional[uuid.UUID] = None) -> None:
        self._store = store
        self._namespace = namespace if namespace is not None else load_session_settings().id_namespace

    @property
    def store(self) -> SessionStore:
        return self._store

    async def create_user_session(
        self,
        subject: str,
        token_bundle: Union[TokenBundle, Mapping[str, Any]],
    ) -> str:
        """Persist ``token_bundle`` for ``subject`` and return the session id.

        Any record already stored for the same subject is overwritten, so
        signing in again replaces the stale session instead of duplicating it.
        """
        session_id = derive_session_id(subject, self._namespace)

        # Instances pass through the same conversion as mappings so the stored
        # record reads back exactly as normalized here.
        if isinstance(token_bundle, TokenBundle):
            token_bundle = token_bundle.to_dict()
        try:
            record = TokenBundle.from_dict(token_bundle)
            payload = json.dumps(record.to_dict())
        except (TypeError, ValueError) as exc:
            raise InvalidTokenBundleError("create_user_session()", str(exc)) from exc

        await self._call_store("create_user_session()", self._store.set_data, session_id, payload)

        logger.debug("Created session %s", session_id)
        return session_id

    async def lookup_user_session(self, session_id: str) -> Optional[TokenBundle]:
        """Return the stored record, or ``None`` if the store has none."""
        raw = await self._call_store("get_user_session()", self._store.get_data, session_id)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
            return TokenBundle.from_dict(data)
        except (TypeError, ValueError) as exc:
            logger.warning("Session %s holds undecodable data: %s", session_id, exc)
            raise CorruptSessionError(
                "get_user_session()",
                f"The stored session data could not be decoded: {exc}",
            ) from exc

    async def get_user_session(self, session_id: str) -> TokenBundle:
        record = await self.lookup_user_session(session_id)
        if record is None:
            raise SessionNotFoundError(
                "get_user_session()",
                f"No session is stored for id {session_id!r}.",
            )
        return record

    async def get_uuid(self, subject: str) -> str:
        return derive_session_id(subject, self._namespace)

    async def destroy_user_session(self, session_id: str) -> bool:
        """Remove the session stored under ``session_id``.

        Returns True for any well-formed id, whether or not a record existed,
        so repeated sign-outs are safe. Empty or malformed ids are rejected
        before the store is touched.
        """
        if not session_id:
            raise MissingIdentifierError(
                "destroy_user_session()",
                "No session id was passed as a parameter.",
            )

        if not is_valid_session_id(session_id):
            raise InvalidSessionIdError(
                "destroy_user_session()",
                "The provided session id is not valid.",
            )

        await self._call_store("destroy_user_session()", self._store.remove_data, session_id)
        logger.debug("Destroyed session %s", session_id)
        return True

    async def _call_store(self, operation: str, method: Callable[..., Awaitable[T]], *args: Any) -> T:
        try:
            return await method(*args)
        except Exception as exc:
            logger.error("Session store call failed in %s: %s", operation, exc)
            raise StoreUnavailableError(
                operation,
                f"The session store call failed: {exc}",
            ) from exc


__all__ = ["UserSessionManager"]
