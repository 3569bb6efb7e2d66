"""Unit tests for the RecordCollectionService."""

import copy
from typing import Any

import pytest

from estimator.application.interfaces import KeyValueStore
from estimator.application.services import RecordCollectionService
from estimator.domain.entities import RecordKind
from estimator.domain.exceptions import RecordValidationError


class FakeKeyValueStore(KeyValueStore):
    """In-memory fake store for unit testing."""

    def __init__(self):
        self.data: dict[str, Any] = {}
        self.writes = 0

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self.data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self.writes += 1
        self.data[key] = copy.deepcopy(value)


@pytest.fixture
def store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def service(store: FakeKeyValueStore) -> RecordCollectionService:
    return RecordCollectionService(store)


@pytest.mark.asyncio
async def test_list_empty(service: RecordCollectionService):
    assert await service.list_records(RecordKind.SUPPLIERS, "u1") == []


@pytest.mark.asyncio
async def test_upsert_appends_then_replaces(service: RecordCollectionService, store: FakeKeyValueStore):
    await service.upsert_record(RecordKind.SUPPLIERS, "u1", {"companyName": "ACME", "phone": "1"})
    await service.upsert_record(RecordKind.SUPPLIERS, "u1", {"companyName": "Beta"})
    result = await service.upsert_record(RecordKind.SUPPLIERS, "u1", {"companyName": "ACME", "phone": "2"})

    assert result == [{"companyName": "ACME", "phone": "2"}, {"companyName": "Beta"}]
    assert store.data["user_suppliers_u1"] == result


@pytest.mark.asyncio
async def test_upsert_is_idempotent(service: RecordCollectionService):
    record = {"companyName": "ACME", "address": "Seoul"}
    first = await service.upsert_record(RecordKind.SUPPLIERS, "u1", record)
    second = await service.upsert_record(RecordKind.SUPPLIERS, "u1", record)
    assert first == second == [record]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "kind, message",
    [
        (RecordKind.SUPPLIERS, "Company name is required"),
        (RecordKind.CLIENTS, "Client name is required"),
        (RecordKind.ITEM_TEMPLATES, "Item name is required"),
    ],
)
async def test_upsert_requires_natural_key(
    service: RecordCollectionService, store: FakeKeyValueStore, kind: RecordKind, message: str
):
    with pytest.raises(RecordValidationError, match=message):
        await service.upsert_record(kind, "u1", {"phone": "1"})
    assert store.writes == 0


@pytest.mark.asyncio
async def test_collections_are_scoped_per_user(service: RecordCollectionService):
    await service.upsert_record(RecordKind.CLIENTS, "u1", {"name": "Kim"})
    assert await service.list_records(RecordKind.CLIENTS, "u2") == []
    assert await service.list_records(RecordKind.CLIENTS, "u1") == [{"name": "Kim"}]


@pytest.mark.asyncio
async def test_delete_missing_key_leaves_collection(service: RecordCollectionService):
    await service.upsert_record(RecordKind.ITEM_TEMPLATES, "u1", {"name": "A"})
    result = await service.delete_record(RecordKind.ITEM_TEMPLATES, "u1", "missing")
    assert result == [{"name": "A"}]


@pytest.mark.asyncio
async def test_delete_removes_record(service: RecordCollectionService):
    await service.upsert_record(RecordKind.CLIENTS, "u1", {"name": "Kim"})
    await service.upsert_record(RecordKind.CLIENTS, "u1", {"name": "Lee"})
    assert await service.delete_record(RecordKind.CLIENTS, "u1", "Kim") == [{"name": "Lee"}]


@pytest.mark.asyncio
async def test_non_list_value_reads_as_empty(service: RecordCollectionService, store: FakeKeyValueStore):
    store.data["user_clients_u1"] = {"oops": True}
    assert await service.list_records(RecordKind.CLIENTS, "u1") == []
