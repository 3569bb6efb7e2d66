"""Abstract key-value store interface (port) for per-user record collections."""

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Port for JSON value persistence — implemented in the infrastructure layer.

    There is no compare-and-set: callers doing read-modify-write on the same
    key concurrently get last-write-wins on the whole value.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the JSON value stored under ``key``, or None when absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...
