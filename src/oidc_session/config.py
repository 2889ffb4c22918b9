"""Environment helpers for session layer configuration."""

from dataclasses import dataclass
import logging
import os
from typing import Mapping, Optional
import uuid

from .session_id import DEFAULT_SESSION_NAMESPACE

logger = logging.getLogger("oidc_session.config")

DEFAULT_KEY_PREFIX = "oidc_session:session"
DEFAULT_WARN_FRACTION = 0.8


@dataclass
class SessionSettings:
    id_namespace: uuid.UUID = DEFAULT_SESSION_NAMESPACE
    redis_url: Optional[str] = None
    key_prefix: str = DEFAULT_KEY_PREFIX
    ttl_seconds: Optional[int] = None
    memory_max_sessions: Optional[int] = None
    memory_warn_fraction: float = DEFAULT_WARN_FRACTION


def load_session_settings(env: Optional[Mapping[str, str]] = None) -> SessionSettings:
    env = _ensure_env(env)

    return SessionSettings(
        id_namespace=_parse_namespace(env.get("OIDC_SESSION_ID_NAMESPACE")),
        redis_url=env.get("REDIS_URL") or None,
        key_prefix=env.get("OIDC_SESSION_REDIS_KEY_PREFIX") or DEFAULT_KEY_PREFIX,
        ttl_seconds=parse_positive_int(env.get("OIDC_SESSION_TTL_SECONDS"), "OIDC_SESSION_TTL_SECONDS"),
        memory_max_sessions=parse_positive_int(
            env.get("OIDC_SESSION_MEMORY_MAX_SESSIONS"), "OIDC_SESSION_MEMORY_MAX_SESSIONS"
        ),
        memory_warn_fraction=parse_fraction(
            env.get("OIDC_SESSION_MEMORY_WARN_FRACTION"),
            "OIDC_SESSION_MEMORY_WARN_FRACTION",
            default=DEFAULT_WARN_FRACTION,
        ),
    )


def _ensure_env(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return env if env is not None else os.environ


def _parse_namespace(value: Optional[str]) -> uuid.UUID:
    if not value:
        return DEFAULT_SESSION_NAMESPACE
    try:
        return uuid.UUID(value)
    except ValueError:
        logger.warning("OIDC_SESSION_ID_NAMESPACE must be a UUID; using default namespace")
        return DEFAULT_SESSION_NAMESPACE


def parse_positive_int(value: Optional[str], env_key: str) -> Optional[int]:
    if value is None:
        return None
    try:
        parsed = int(value)
        if parsed <= 0:
            logger.warning("%s must be > 0; ignoring value %s", env_key, value)
            return None
        return parsed
    except ValueError:
        logger.warning("%s must be an integer; ignoring value %s", env_key, value)
        return None


def parse_fraction(value: Optional[str], env_key: str, *, default: float) -> float:
    if value is None:
        return default
    try:
        parsed = float(value)
        if not 0 < parsed < 1:
            logger.warning("%s must be between 0 and 1; using default %.2f", env_key, default)
            return default
        return parsed
    except ValueError:
        logger.warning("%s must be a float; using default %.2f", env_key, default)
        return default


__all__ = [
    "DEFAULT_KEY_PREFIX",
    "SessionSettings",
    "load_session_settings",
    "parse_fraction",
    "parse_positive_int",
]
