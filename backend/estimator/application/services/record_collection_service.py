"""Application service (use case) for the natural-key collections.

Suppliers, clients and item templates are stored as one JSON array per user.
Every mutation reads the whole array, changes it in memory and writes it
back; concurrent writers to the same collection are last-write-wins.
"""

from typing import Any

from estimator.application.interfaces import KeyValueStore
from estimator.domain.collections import as_record_list, remove_by_key, upsert_by_key
from estimator.domain.entities import RecordKind
from estimator.domain.exceptions import RecordValidationError
from estimator.infrastructure.logging.colored_logger import OperationLogger, RecordStage

log = OperationLogger("RecordCollectionService")


class RecordCollectionService:
    """Orchestrates list/upsert/delete of one user's keyed collection. Depends on the store port (DI)."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def list_records(self, kind: RecordKind, user_id: str) -> list[dict[str, Any]]:
        with log.timed_step(RecordStage.LIST, f"Listing {kind.value}", user=user_id):
            return as_record_list(await self._store.get(kind.storage_key(user_id)))

    async def upsert_record(
        self, kind: RecordKind, user_id: str, record: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Replace the record sharing ``record``'s natural key, or append it.

        Returns the full collection as written.
        """
        key_field = kind.natural_key
        if not record.get(key_field):
            raise RecordValidationError(kind.missing_key_message)

        storage_key = kind.storage_key(user_id)
        with log.timed_step(
            RecordStage.UPSERT, f"Saving {kind.label.lower()}", user=user_id, key=record[key_field]
        ):
            current = as_record_list(await self._store.get(storage_key))
            updated = upsert_by_key(current, record, key_field)
            log.detail("Collection size", before=len(current), after=len(updated))
            await self._store.set(storage_key, updated)
            return updated

    async def delete_record(
        self, kind: RecordKind, user_id: str, key_value: str
    ) -> list[dict[str, Any]]:
        """Remove every record whose natural key equals ``key_value``. Missing keys are not an error."""
        storage_key = kind.storage_key(user_id)
        with log.timed_step(
            RecordStage.DELETE, f"Deleting {kind.label.lower()}", user=user_id, key=key_value
        ):
            current = as_record_list(await self._store.get(storage_key))
            updated = remove_by_key(current, kind.natural_key, key_value)
            await self._store.set(storage_key, updated)
            return updated
