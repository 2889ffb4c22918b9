"""In-memory session store for development and testing."""

import logging
import math
from typing import Optional

from .base import SessionStore

logger = logging.getLogger("oidc_session.session_storage")


class InMemorySessionStore(SessionStore):
    """Process-local store; records live until removed."""

    def __init__(self, *, max_sessions: Optional[int] = None, warn_fraction: float = 0.8) -> None:
        self._records: dict[str, str] = {}
        self._max_sessions = max_sessions if max_sessions and max_sessions > 0 else None
        self._warn_fraction = warn_fraction if 0 < warn_fraction < 1 else 0.8
        self._warned_high_water = False
        self._warned_capacity = False

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    async def set_data(self, key: str, value: str) -> None:
        self._records[key] = value
        logger.debug("Stored session %s in memory", key)
        self._emit_usage_warnings()

    async def get_data(self, key: str) -> Optional[str]:
        return self._records.get(key)

    async def remove_data(self, key: str) -> None:
        if self._records.pop(key, None) is not None:
            logger.debug("Removed session %s from memory", key)
        self._emit_usage_warnings(triggered_by_removal=True)

    def _emit_usage_warnings(self, *, triggered_by_removal: bool = False) -> None:
        count = len(self._records)
        if self._max_sessions is None:
            return

        warn_threshold = max(1, math.ceil(self._max_sessions * self._warn_fraction))

        if count < warn_threshold:
            self._warned_high_water = False
        if count < self._max_sessions:
            self._warned_capacity = False

        if triggered_by_removal:
            return

        if not self._warned_high_water and warn_threshold <= count < self._max_sessions:
            logger.warning(
                "In-memory session store nearing capacity: %s/%s sessions in use (>= %s%% threshold)",
                count,
                self._max_sessions,
                int(self._warn_fraction * 100),
            )
            self._warned_high_water = True

        if not self._warned_capacity and count >= self._max_sessions:
            logger.error(
                "In-memory session store reached configured maximum of %s sessions; consider enabling Redis",
                self._max_sessions,
            )
            self._warned_capacity = True


__all__ = ["InMemorySessionStore"]
