"""Application-facing OIDC session client."""

import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Union
import uuid

from .exceptions import CorruptSessionError
from .models import SignInResult, TokenBundle
from .oauth.engine import ProtocolEngine
from .session_id import is_valid_session_id
from .session_storage.base import SessionStore
from .user_session import UserSessionManager

logger = logging.getLogger("oidc_session.client")

AuthURLCallback = Callable[[str], Union[None, Awaitable[None]]]


class OIDCSessionClient:
    """Sign-in, sign-out and session queries for an application server.

    The session id returned from :meth:`sign_in` is the handle the
    application gives to the end user, typically in an HTTP-only cookie.
    """

    def __init__(
        self,
        engine: ProtocolEngine,
        store: SessionStore,
        namespace: Optional[uuid.UUID] = None,
    ) -> None:
        self._engine = engine
        self._sessions = UserSessionManager(store, namespace=namespace)

    @property
    def sessions(self) -> UserSessionManager:
        return self._sessions

    async def sign_in(
        self,
        auth_url_callback: AuthURLCallback,
        authorization_code: Optional[str] = None,
        session_state: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Optional[SignInResult]:
        """Start or finish the authorization-code flow.

        Without ``authorization_code`` the authorization URL is handed to
        ``auth_url_callback`` and None is returned. With a code, the tokens are
        requested and stored, and the new session id is returned with them.
        """
        if not authorization_code:
            url = await self._engine.get_authorization_url(state=state)
            result = auth_url_callback(url)
            if inspect.isawaitable(result):
                await result
            return None

        tokens = await self._engine.request_access_token(
            authorization_code, session_state=session_state, state=state
        )
        session_id = await self._sessions.create_user_session(tokens.subject, tokens)
        logger.info("Signed in subject %s with session %s", tokens.subject, session_id)
        return SignInResult(session_id=session_id, tokens=tokens)

    async def sign_out(self, session_id: str) -> str:
        """Destroy the session and return the identity provider's sign-out URL."""
        id_token = None
        if is_valid_session_id(session_id):
            try:
                record = await self._sessions.lookup_user_session(session_id)
            except CorruptSessionError as exc:
                logger.warning("Signing out session %s without an ID token hint: %s", session_id, exc)
                record = None
            if record is not None:
                id_token = record.id_token

        await self._sessions.destroy_user_session(session_id)
        logger.info("Signed out session %s", session_id)
        return await self._engine.get_sign_out_url(id_token)

    async def is_authenticated(self, session_id: str) -> bool:
        if not is_valid_session_id(session_id):
            return False
        record = await self._sessions.lookup_user_session(session_id)
        return record is not None and not record.is_expired()

    async def get_id_token(self, session_id: str) -> Optional[str]:
        record = await self._sessions.get_user_session(session_id)
        return record.id_token

    async def create_user_session(
        self,
        subject: str,
        token_bundle: Union[TokenBundle, Mapping[str, Any]],
    ) -> str:
        return await self._sessions.create_user_session(subject, token_bundle)

    async def get_user_session(self, session_id: str) -> TokenBundle:
        return await self._sessions.get_user_session(session_id)

    async def get_uuid(self, subject: str) -> str:
        return await self._sessions.get_uuid(subject)

    async def destroy_user_session(self, session_id: str) -> bool:
        return await self._sessions.destroy_user_session(session_id)


__all__ = ["AuthURLCallback", "OIDCSessionClient"]
