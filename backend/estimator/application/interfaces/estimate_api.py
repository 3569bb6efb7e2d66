"""Abstract interface (port) for the remote estimate record API."""

from abc import ABC, abstractmethod
from typing import Any

from estimator.domain.entities import RecordKind


class EstimateApi(ABC):
    """Client-side view of the record service, one call per endpoint."""

    @abstractmethod
    async def list_records(self, kind: RecordKind, access_token: str) -> list[dict[str, Any]]:
        """Fetch the caller's whole collection."""
        ...

    @abstractmethod
    async def save_record(
        self, kind: RecordKind, record: dict[str, Any], access_token: str
    ) -> list[dict[str, Any]]:
        """Upsert a supplier/client/item template; returns the updated collection."""
        ...

    @abstractmethod
    async def delete_record(
        self, kind: RecordKind, key: str, access_token: str
    ) -> list[dict[str, Any]]:
        """Delete by natural key or id; returns the updated collection."""
        ...

    @abstractmethod
    async def create_estimate(
        self, payload: dict[str, Any], access_token: str
    ) -> dict[str, Any]:
        """Create an estimate record; returns it with id and timestamps."""
        ...

    @abstractmethod
    async def update_estimate(
        self, estimate_id: str, payload: dict[str, Any], access_token: str
    ) -> dict[str, Any]:
        """Overwrite an existing estimate record; returns the stored record."""
        ...
