"""Abstract interface (port) for client-local persisted state."""

from abc import ABC, abstractmethod
from typing import Any


class LocalStateStore(ABC):
    """Synchronous JSON key-value storage local to one editor installation.

    Reads are permissive: a missing or unreadable value yields ``default``
    instead of raising.
    """

    @abstractmethod
    def read(self, key: str, default: Any = None) -> Any:
        """Return the value under ``key`` or ``default``."""
        ...

    @abstractmethod
    def write(self, key: str, value: Any) -> None:
        """Persist ``value`` under ``key``."""
        ...
