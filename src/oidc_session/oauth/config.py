"""Environment helpers for OIDC client configuration."""

from dataclasses import dataclass
import logging
import os
from typing import Mapping, Optional

logger = logging.getLogger("oidc_session.oauth")

AUTHORIZE_PATH = "/oauth2/authorize"
TOKEN_PATH = "/oauth2/token"
END_SESSION_PATH = "/oidc/logout"
DEFAULT_SCOPE = "openid"


@dataclass
class OIDCSettings:
    client_id: str
    client_secret: Optional[str]
    server_origin: str
    sign_in_redirect_url: Optional[str]
    sign_out_redirect_url: Optional[str]
    authorization_endpoint: str
    token_endpoint: str
    end_session_endpoint: str
    scope: str = DEFAULT_SCOPE


def load_oidc_settings(env: Optional[Mapping[str, str]] = None) -> Optional[OIDCSettings]:
    env = _ensure_env(env)

    client_id = env.get("OIDC_CLIENT_ID")
    raw_origin = env.get("OIDC_SERVER_ORIGIN")
    if not client_id or not raw_origin:
        return None

    server_origin = _sanitise_origin(raw_origin)

    return OIDCSettings(
        client_id=client_id,
        client_secret=env.get("OIDC_CLIENT_SECRET") or None,
        server_origin=server_origin,
        sign_in_redirect_url=env.get("OIDC_SIGN_IN_REDIRECT_URL") or None,
        sign_out_redirect_url=env.get("OIDC_SIGN_OUT_REDIRECT_URL") or None,
        authorization_endpoint=_resolve_endpoint(
            server_origin, AUTHORIZE_PATH, env.get("OIDC_AUTHORIZATION_ENDPOINT")
        ),
        token_endpoint=_resolve_endpoint(server_origin, TOKEN_PATH, env.get("OIDC_TOKEN_ENDPOINT")),
        end_session_endpoint=_resolve_endpoint(
            server_origin, END_SESSION_PATH, env.get("OIDC_END_SESSION_ENDPOINT")
        ),
        scope=env.get("OIDC_SCOPE") or DEFAULT_SCOPE,
    )


def _ensure_env(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return env if env is not None else os.environ


def _sanitise_origin(raw_origin: str) -> str:
    return raw_origin.rstrip("/")


def _resolve_endpoint(server_origin: str, path: str, override: Optional[str]) -> str:
    if override:
        logger.info("Using provided endpoint: %s", override)
        return override
    return f"{server_origin}{path}"


__all__ = [
    "AUTHORIZE_PATH",
    "DEFAULT_SCOPE",
    "END_SESSION_PATH",
    "OIDCSettings",
    "TOKEN_PATH",
    "load_oidc_settings",
]
