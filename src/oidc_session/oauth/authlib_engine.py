"""Authlib-backed protocol engine."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
import functools
import logging
import time
from typing import Any, Mapping, Optional

from authlib.common.urls import add_params_to_uri
from authlib.integrations.requests_client import OAuth2Session

from ..models import TokenBundle
from .claims import extract_subject
from .config import OIDCSettings
from .engine import ProtocolEngine

logger = logging.getLogger("oidc_session.oauth")


class AuthlibProtocolEngine(ProtocolEngine):
    """Authorization-code flow against the configured identity provider.

    Authlib's ``OAuth2Session`` is built on ``requests`` and blocks, so token
    requests run in a small thread pool.
    """

    def __init__(self, settings: OIDCSettings, timeout: float = 10.0) -> None:
        self.settings = settings
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=2)

    def _new_session(self) -> OAuth2Session:
        return OAuth2Session(
            client_id=self.settings.client_id,
            client_secret=self.settings.client_secret,
            scope=self.settings.scope,
            redirect_uri=self.settings.sign_in_redirect_url,
        )

    async def get_authorization_url(self, state: Optional[str] = None) -> str:
        session = self._new_session()
        try:
            url, _ = session.create_authorization_url(self.settings.authorization_endpoint, state=state)
        finally:
            session.close()
        logger.debug("Built authorization URL for client %s", self.settings.client_id)
        return url

    async def request_access_token(
        self,
        code: str,
        session_state: Optional[str] = None,
        state: Optional[str] = None,
    ) -> TokenBundle:
        loop = asyncio.get_running_loop()
        try:
            token = await loop.run_in_executor(
                self._executor, functools.partial(self._fetch_token_sync, code)
            )
        except Exception as exc:
            logger.error("Token request to %s failed: %s", self.settings.token_endpoint, exc)
            raise

        bundle = bundle_from_token_response(token, session_state=session_state)
        logger.debug("Received tokens for subject %s (state=%s)", bundle.subject, state)
        return bundle

    def _fetch_token_sync(self, code: str) -> Mapping[str, Any]:
        with self._new_session() as session:
            return session.fetch_token(
                self.settings.token_endpoint,
                code=code,
                grant_type="authorization_code",
                timeout=self.timeout,
            )

    async def get_sign_out_url(self, id_token: Optional[str] = None) -> str:
        params = [("client_id", self.settings.client_id)]
        if id_token:
            params.append(("id_token_hint", id_token))
        if self.settings.sign_out_redirect_url:
            params.append(("post_logout_redirect_uri", self.settings.sign_out_redirect_url))
        return add_params_to_uri(self.settings.end_session_endpoint, params)

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def __del__(self) -> None:  # pragma: no cover - cleanup
        if hasattr(self, "_executor"):
            self._executor.shutdown(wait=False)


def bundle_from_token_response(
    token: Mapping[str, Any],
    session_state: Optional[str] = None,
    now: Optional[float] = None,
) -> TokenBundle:
    """Convert an OAuth2 token response into a :class:`TokenBundle`.

    Authlib replaces ``expires_in`` bookkeeping with an absolute
    ``expires_at``; both are folded into ``created_at``/``expires_in``.
    """
    data = dict(token)
    created_at = int(now if now is not None else time.time())
    expires_at = data.pop("expires_at", None)
    if data.get("expires_in") is None and expires_at is not None:
        data["expires_in"] = max(0, int(expires_at) - created_at)

    bundle = TokenBundle.from_dict(data)
    if bundle.subject is None:
        bundle.subject = extract_subject(bundle.id_token)
    if bundle.created_at is None:
        bundle.created_at = created_at
    if session_state:
        bundle.session_state = session_state
    return bundle


__all__ = ["AuthlibProtocolEngine", "bundle_from_token_response"]
