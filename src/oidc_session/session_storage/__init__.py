"""Session store factory and exports."""

import asyncio
import logging
from typing import Mapping, Optional

from ..config import SessionSettings, load_session_settings
from .base import SessionStore
from .memory import InMemorySessionStore
from .redis_backend import REDIS_AVAILABLE, RedisSessionStore, redis as _redis_async

logger = logging.getLogger("oidc_session.session_storage")


def create_session_store(
    env: Optional[Mapping[str, str]] = None,
    settings: Optional[SessionSettings] = None,
) -> SessionStore:
    """Create the appropriate session store based on configuration."""
    settings = settings or load_session_settings(env)
    redis_url = settings.redis_url

    if redis_url and REDIS_AVAILABLE:
        if _redis_connection_available(redis_url):
            logger.info("Using Redis session store: %s", _redact_redis_url(redis_url))
            return RedisSessionStore(
                redis_url,
                key_prefix=settings.key_prefix,
                ttl_seconds=settings.ttl_seconds,
            )

        logger.warning(
            "Redis at %s unavailable - falling back to in-memory session store",
            _redact_redis_url(redis_url),
        )
    elif redis_url and not REDIS_AVAILABLE:
        logger.warning("REDIS_URL provided but Redis not available - using in-memory store")

    logger.info(
        "Using in-memory session store (max_sessions=%s warn_fraction=%.2f)",
        settings.memory_max_sessions,
        settings.memory_warn_fraction,
    )

    return InMemorySessionStore(
        max_sessions=settings.memory_max_sessions,
        warn_fraction=settings.memory_warn_fraction,
    )


def _redis_connection_available(redis_url: str) -> bool:
    if not REDIS_AVAILABLE or _redis_async is None:
        return False

    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        client = _redis_async.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        try:
            loop.run_until_complete(client.ping())
        finally:
            loop.run_until_complete(client.close())
        return True
    except Exception as exc:  # pragma: no cover - network failure handled by fallback
        logger.warning(
            "Redis connection test failed for %s: %s",
            _redact_redis_url(redis_url),
            exc,
        )
        return False
    finally:
        asyncio.set_event_loop(None)
        loop.close()


def _redact_redis_url(redis_url: str) -> str:
    if "@" in redis_url:
        return redis_url.split("@", 1)[-1]
    return redis_url


__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "create_session_store",
]
