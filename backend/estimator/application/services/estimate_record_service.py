"""Application service (use case) for saved estimate records."""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from estimator.application.interfaces import KeyValueStore
from estimator.domain.collections import as_record_list, find_by_key, remove_by_key
from estimator.domain.entities import RecordKind
from estimator.domain.exceptions import EntityNotFoundError, RecordValidationError
from estimator.infrastructure.logging.colored_logger import OperationLogger, RecordStage

log = OperationLogger("EstimateRecordService")

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_SUFFIX_LENGTH = 9


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. ``2024-05-01T09:30:00.123Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def generate_estimate_id(now: datetime) -> str:
    """``{epoch millis}_{9 random base36 chars}``; opaque to callers."""
    millis = int(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{millis}_{suffix}"


class EstimateRecordService:
    """Create/update/delete of a user's estimate records.

    Records are kept most-recent-first. ``clock`` and ``id_factory`` are
    injectable so timestamps and ids can be pinned in tests.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[datetime], str] = generate_estimate_id,
    ):
        self._store = store
        self._clock = clock
        self._id_factory = id_factory

    def _key(self, user_id: str) -> str:
        return RecordKind.ESTIMATES.storage_key(user_id)

    async def list_estimates(self, user_id: str) -> list[dict[str, Any]]:
        with log.timed_step(RecordStage.LIST, "Listing estimates", user=user_id):
            return as_record_list(await self._store.get(self._key(user_id)))

    async def create_estimate(self, user_id: str, document: dict[str, Any]) -> dict[str, Any]:
        if not document.get("estimateNumber") or not document.get("clientName"):
            raise RecordValidationError(RecordKind.ESTIMATES.missing_key_message)

        now = self._clock()
        timestamp = format_timestamp(now)
        record = {
            **document,
            "id": self._id_factory(now),
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }

        with log.timed_step(
            RecordStage.CREATE, "Creating estimate", user=user_id, number=document["estimateNumber"]
        ):
            current = as_record_list(await self._store.get(self._key(user_id)))
            await self._store.set(self._key(user_id), [record, *current])
        return record

    async def update_estimate(
        self, user_id: str, estimate_id: str, document: dict[str, Any]
    ) -> dict[str, Any]:
        """Replace the record's body, keeping ``id`` and ``createdAt``.

        ``updatedAt`` always moves forward, even when the clock has not
        advanced since the previous save.
        """
        with log.timed_step(RecordStage.UPDATE, "Updating estimate", user=user_id, id=estimate_id):
            current = as_record_list(await self._store.get(self._key(user_id)))
            index = find_by_key(current, "id", estimate_id)
            if index < 0:
                raise EntityNotFoundError("Estimate", estimate_id)

            existing = current[index]
            now = self._clock()
            previous = parse_timestamp(existing.get("updatedAt"))
            if previous is not None and now <= previous:
                now = previous + timedelta(milliseconds=1)

            record = {
                **document,
                "id": existing["id"],
                "createdAt": existing.get("createdAt", format_timestamp(now)),
                "updatedAt": format_timestamp(now),
            }
            updated = list(current)
            updated[index] = record
            await self._store.set(self._key(user_id), updated)
        return record

    async def delete_estimate(self, user_id: str, estimate_id: str) -> list[dict[str, Any]]:
        with log.timed_step(RecordStage.DELETE, "Deleting estimate", user=user_id, id=estimate_id):
            current = as_record_list(await self._store.get(self._key(user_id)))
            updated = remove_by_key(current, "id", estimate_id)
            await self._store.set(self._key(user_id), updated)
            return updated
