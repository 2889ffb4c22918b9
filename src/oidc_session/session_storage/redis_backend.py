"""Redis-backed session store for production deployments."""

import logging
from typing import Optional

from .base import SessionStore

logger = logging.getLogger("oidc_session.session_storage")

try:  # pragma: no cover - import guarded by runtime availability
    import redis.asyncio as redis
    REDIS_AVAILABLE = True
except ImportError:  # pragma: no cover - exercised when redis is absent
    redis = None  # type: ignore
    REDIS_AVAILABLE = False
    logger.warning("Redis not available - falling back to in-memory storage")


class RedisSessionStore(SessionStore):
    """Redis-based session store; one string key per session record."""

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "oidc_session:session",
        ttl_seconds: Optional[int] = None,
    ) -> None:
        if not REDIS_AVAILABLE:
            raise RuntimeError("Redis dependency not available")

        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds if ttl_seconds and ttl_seconds > 0 else None
        self._redis: Optional["redis.Redis"] = None

    def _session_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    async def _get_redis(self) -> "redis.Redis":
        if self._redis is None:
            try:
                self._redis = redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    health_check_interval=30,
                )
                await self._redis.ping()
                logger.info("Redis connection established")
            except Exception as exc:  # pragma: no cover - connection failure
                self._redis = None
                logger.error("Failed to connect to Redis: %s", exc)
                raise
        return self._redis

    async def set_data(self, key: str, value: str) -> None:
        try:
            redis_client = await self._get_redis()
            if self.ttl_seconds:
                await redis_client.setex(self._session_key(key), self.ttl_seconds, value)
            else:
                await redis_client.set(self._session_key(key), value)
            logger.debug("Stored session %s in Redis", key)
        except Exception as exc:
            logger.error("Failed to store session in Redis: %s", exc)
            raise

    async def get_data(self, key: str) -> Optional[str]:
        try:
            redis_client = await self._get_redis()
            return await redis_client.get(self._session_key(key))
        except Exception as exc:
            logger.error("Failed to get session from Redis: %s", exc)
            raise

    async def remove_data(self, key: str) -> None:
        try:
            redis_client = await self._get_redis()
            removed = await redis_client.delete(self._session_key(key))
            if removed:
                logger.debug("Removed session %s from Redis", key)
        except Exception as exc:
            logger.error("Failed to remove session from Redis: %s", exc)
            raise

    async def close(self) -> None:
        if self._redis:
            await self._redis.close()
            self._redis = None
            logger.debug("Redis connection closed")


__all__ = ["RedisSessionStore", "REDIS_AVAILABLE"]
