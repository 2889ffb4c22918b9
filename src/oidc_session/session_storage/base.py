"""Abstract session store definitions."""

import abc
from typing import Optional


class SessionStore(abc.ABC):
    """Key/value capability the session layer persists records through.

    Implementations are assumed single-writer per key; any atomicity or
    expiry guarantees belong to the implementation.
    """

    @abc.abstractmethod
    async def set_data(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any existing value."""

    @abc.abstractmethod
    async def get_data(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or ``None`` if absent."""

    @abc.abstractmethod
    async def remove_data(self, key: str) -> None:
        """Remove ``key``; removing an absent key is not an error."""

    async def close(self) -> None:
        """Release any backend resources."""


__all__ = ["SessionStore"]
