"""Protocol engine boundary consumed by the session client."""

import abc
from typing import Optional

from ..models import TokenBundle


class ProtocolEngine(abc.ABC):
    """Performs the OIDC exchanges; the session layer only stores the result."""

    @abc.abstractmethod
    async def get_authorization_url(self, state: Optional[str] = None) -> str:
        """Return the URL the end user is redirected to for sign-in."""

    @abc.abstractmethod
    async def request_access_token(
        self,
        code: str,
        session_state: Optional[str] = None,
        state: Optional[str] = None,
    ) -> TokenBundle:
        """Exchange an authorization code for a token bundle."""

    @abc.abstractmethod
    async def get_sign_out_url(self, id_token: Optional[str] = None) -> str:
        """Return the identity provider's end-session URL."""


__all__ = ["ProtocolEngine"]
