"""Unit tests for the EstimateWorkspace."""

import asyncio
from datetime import date
from typing import Any

import pytest

from estimator.application.interfaces import EstimateApi
from estimator.application.services import EstimateStateStore, EstimateWorkspace
from estimator.domain.collections import remove_by_key, upsert_by_key
from estimator.domain.entities import LineItem, RecordKind
from estimator.domain.exceptions import (
    AuthenticationError,
    EstimateApiError,
    OperationInProgressError,
    RecordValidationError,
)
from estimator.infrastructure.storage import InMemoryLocalStore


class FakeEstimateApi(EstimateApi):
    """In-memory stand-in for the record API."""

    def __init__(self):
        self.collections: dict[RecordKind, list[dict[str, Any]]] = {kind: [] for kind in RecordKind}
        self.calls: list[tuple[str, Any]] = []
        self.fail_templates = False
        self.gate: asyncio.Event | None = None

    async def list_records(self, kind, access_token):
        self.calls.append(("list", kind))
        return list(self.collections[kind])

    async def save_record(self, kind, record, access_token):
        self.calls.append(("save", kind))
        if kind == RecordKind.ITEM_TEMPLATES and self.fail_templates:
            raise EstimateApiError(500, "Error saving item template")
        self.collections[kind] = upsert_by_key(self.collections[kind], record, kind.natural_key)
        return list(self.collections[kind])

    async def delete_record(self, kind, key, access_token):
        self.calls.append(("delete", kind))
        self.collections[kind] = remove_by_key(self.collections[kind], kind.natural_key, key)
        return list(self.collections[kind])

    async def create_estimate(self, payload, access_token):
        self.calls.append(("create", payload))
        if self.gate is not None:
            await self.gate.wait()
        record = {**payload, "id": f"id_{len(self.calls)}", "createdAt": "t", "updatedAt": "t"}
        self.collections[RecordKind.ESTIMATES].insert(0, record)
        return record

    async def update_estimate(self, estimate_id, payload, access_token):
        self.calls.append(("update", estimate_id))
        return {**payload, "id": estimate_id, "createdAt": "t", "updatedAt": "t2"}


@pytest.fixture
def local_store() -> InMemoryLocalStore:
    return InMemoryLocalStore()


@pytest.fixture
def api() -> FakeEstimateApi:
    return FakeEstimateApi()


def _workspace(api: FakeEstimateApi, local_store: InMemoryLocalStore, token: str | None = "tok"):
    state = EstimateStateStore(local_store, today=lambda: date(2024, 5, 1))
    return EstimateWorkspace(state, api, local_store, access_token=token)


def _ready_to_save(workspace: EstimateWorkspace) -> None:
    workspace.state.update_client({"name": "홍길동"})
    workspace.state.append_items([LineItem(name="A", quantity=1, price=1000)])


@pytest.mark.asyncio
async def test_first_save_creates_then_updates(api, local_store):
    workspace = _workspace(api, local_store)
    _ready_to_save(workspace)

    created = await workspace.save_estimate()
    assert workspace.state.current_estimate_id == created["id"]
    assert created["clientName"] == "홍길동"

    await workspace.save_estimate()
    assert [c[0] for c in api.calls] == ["create", "update"]
    assert api.calls[1][1] == created["id"]


@pytest.mark.asyncio
async def test_save_requires_token(api, local_store):
    workspace = _workspace(api, local_store, token=None)
    _ready_to_save(workspace)
    with pytest.raises(AuthenticationError):
        await workspace.save_estimate()
    assert api.calls == []


@pytest.mark.asyncio
async def test_save_requires_client_and_items(api, local_store):
    workspace = _workspace(api, local_store)
    with pytest.raises(RecordValidationError):
        await workspace.save_estimate()

    workspace.state.update_client({"name": "Kim"})
    with pytest.raises(RecordValidationError, match="At least one item"):
        await workspace.save_estimate()
    assert api.calls == []


@pytest.mark.asyncio
async def test_concurrent_save_is_rejected(api, local_store):
    workspace = _workspace(api, local_store)
    _ready_to_save(workspace)
    api.gate = asyncio.Event()

    first = asyncio.create_task(workspace.save_estimate())
    await asyncio.sleep(0)
    assert workspace.is_busy("save_estimate")
    with pytest.raises(OperationInProgressError):
        await workspace.save_estimate()

    api.gate.set()
    await first
    assert not workspace.is_busy("save_estimate")
    assert len(api.collections[RecordKind.ESTIMATES]) == 1


@pytest.mark.asyncio
async def test_load_estimate_then_save_updates(api, local_store):
    workspace = _workspace(api, local_store)
    workspace.load_estimate(
        {
            "id": "1_abc",
            "createdAt": "t",
            "updatedAt": "t",
            "estimateNumber": "20240401-003",
            "clientName": "Legacy Client",
            "items": [{"name": "A", "quantity": 2, "price": 500}],
        }
    )

    assert workspace.state.current_estimate_id == "1_abc"
    assert workspace.state.estimate.client.name == "Legacy Client"
    assert workspace.totals.total == 1100

    await workspace.save_estimate()
    assert api.calls == [("update", "1_abc")]


@pytest.mark.asyncio
async def test_signed_out_suppliers_use_local_store(api, local_store):
    workspace = _workspace(api, local_store, token=None)
    workspace.state.update_supplier({"company_name": "ACME"})
    workspace.state.update_field("footer_notes", "Pay within 7 days")

    saved = await workspace.save_supplier()

    assert saved[0]["companyName"] == "ACME"
    assert saved[0]["footerNotes"] == "Pay within 7 days"
    assert local_store.read("suppliers") == saved
    assert api.calls == []

    fresh = _workspace(api, local_store, token=None)
    assert await fresh.fetch_records(RecordKind.SUPPLIERS) == saved


@pytest.mark.asyncio
async def test_signed_out_client_save_and_delete(api, local_store):
    workspace = _workspace(api, local_store, token=None)
    workspace.state.update_client({"name": "Kim", "phone": "010"})
    await workspace.save_client()
    workspace.state.update_client({"phone": "011"})
    saved = await workspace.save_client()

    assert saved == [{"name": "Kim", "phone": "011", "email": "", "address": ""}]
    assert await workspace.delete_record(RecordKind.CLIENTS, "Kim") == []
    assert local_store.read("clients") == []


@pytest.mark.asyncio
async def test_signed_out_save_without_fetch_keeps_stored_clients(api):
    local_store = InMemoryLocalStore({"clients": [{"name": "Old", "phone": "", "email": "", "address": ""}]})
    workspace = _workspace(api, local_store, token=None)
    workspace.state.update_client({"name": "New"})

    saved = await workspace.save_client()

    assert [c["name"] for c in saved] == ["Old", "New"]
    assert [c["name"] for c in local_store.read("clients")] == ["Old", "New"]


@pytest.mark.asyncio
async def test_signed_out_delete_without_fetch_keeps_other_suppliers(api):
    local_store = InMemoryLocalStore({"suppliers": [{"companyName": "A"}, {"companyName": "B"}]})
    workspace = _workspace(api, local_store, token=None)

    remaining = await workspace.delete_record(RecordKind.SUPPLIERS, "A")

    assert remaining == [{"companyName": "B"}]
    assert local_store.read("suppliers") == [{"companyName": "B"}]


@pytest.mark.asyncio
async def test_server_list_is_not_written_locally_after_sign_out(api, local_store):
    api.collections[RecordKind.CLIENTS] = [{"name": "Server", "phone": "", "email": "", "address": ""}]
    workspace = _workspace(api, local_store)
    await workspace.fetch_records(RecordKind.CLIENTS)

    workspace.sign_out()
    workspace.state.update_client({"name": "Local"})
    saved = await workspace.save_client()

    assert [c["name"] for c in saved] == ["Local"]
    assert [c["name"] for c in local_store.read("clients")] == ["Local"]


@pytest.mark.asyncio
async def test_corrupt_local_list_reads_empty(api):
    local_store = InMemoryLocalStore({"clients": "not a list"})
    workspace = _workspace(api, local_store, token=None)
    assert await workspace.fetch_records(RecordKind.CLIENTS) == []


@pytest.mark.asyncio
async def test_templates_and_estimates_need_account(api, local_store):
    workspace = _workspace(api, local_store, token=None)
    with pytest.raises(AuthenticationError):
        await workspace.fetch_records(RecordKind.ITEM_TEMPLATES)
    with pytest.raises(AuthenticationError):
        await workspace.save_item_template(LineItem(name="A"))
    with pytest.raises(AuthenticationError):
        await workspace.delete_record(RecordKind.ESTIMATES, "1_abc")


@pytest.mark.asyncio
async def test_save_supplier_requires_company_name(api, local_store):
    workspace = _workspace(api, local_store)
    workspace.state.update_supplier({"company_name": ""})
    with pytest.raises(RecordValidationError, match="Company name is required"):
        await workspace.save_supplier()


@pytest.mark.asyncio
async def test_load_supplier_copies_business_fields(api, local_store):
    api.collections[RecordKind.SUPPLIERS] = [
        {"companyName": "ACME", "address": "Busan", "businessFields": "Design", "footerNotes": ""}
    ]
    workspace = _workspace(api, local_store)
    await workspace.fetch_records(RecordKind.SUPPLIERS)
    notes_before = workspace.state.estimate.footer_notes

    assert workspace.load_supplier("ACME")
    estimate = workspace.state.estimate
    assert estimate.supplier.address == "Busan"
    assert estimate.business_fields == "Design"
    assert estimate.footer_notes == notes_before
    assert not workspace.load_supplier("Unknown")


@pytest.mark.asyncio
async def test_load_client(api, local_store):
    api.collections[RecordKind.CLIENTS] = [{"name": "Lee", "phone": "02", "email": "l@e.com", "address": "Seoul"}]
    workspace = _workspace(api, local_store)
    await workspace.fetch_records(RecordKind.CLIENTS)

    assert workspace.load_client("Lee")
    assert workspace.state.estimate.client_email == "l@e.com"
    assert workspace.state.estimate.client.address == "Seoul"


@pytest.mark.asyncio
async def test_add_items_appends_and_saves_templates(api, local_store):
    workspace = _workspace(api, local_store)
    added = await workspace.add_items(
        [
            {"name": "설치비", "quantity": "1", "price": "50000"},
            {"name": "", "quantity": "1", "price": "10"},
            {"name": "자재", "quantity": "3", "price": "1000", "spec": "BOX"},
        ]
    )

    assert [i.name for i in added] == ["설치비", "자재"]
    assert [i.name for i in workspace.state.estimate.items] == ["설치비", "자재"]
    assert [t["name"] for t in api.collections[RecordKind.ITEM_TEMPLATES]] == ["설치비", "자재"]


@pytest.mark.asyncio
async def test_template_auto_save_failure_keeps_items(api, local_store):
    api.fail_templates = True
    workspace = _workspace(api, local_store)

    added = await workspace.add_items([{"name": "A", "quantity": "1", "price": "10"}])

    assert len(added) == 1
    assert len(workspace.state.estimate.items) == 1


@pytest.mark.asyncio
async def test_signed_out_add_items_skips_templates(api, local_store):
    workspace = _workspace(api, local_store, token=None)
    await workspace.add_items([{"name": "A", "quantity": "1", "price": "10"}])
    assert api.calls == []


def test_edit_item_validates(api, local_store):
    workspace = _workspace(api, local_store)
    workspace.state.append_items([LineItem(name="A", quantity=1, price=100)])

    workspace.edit_item(0, "quantity", "4")
    assert workspace.state.estimate.items[0].quantity == 4

    with pytest.raises(RecordValidationError):
        workspace.edit_item(0, "quantity", "0")
    assert workspace.state.estimate.items[0].quantity == 4


@pytest.mark.asyncio
async def test_signing_in_switches_to_server_collections(api, local_store):
    workspace = _workspace(api, local_store, token=None)
    workspace.state.update_client({"name": "Kim"})
    await workspace.save_client()
    assert api.calls == []

    workspace.sign_in("tok")
    await workspace.save_client()
    assert api.calls == [("save", RecordKind.CLIENTS)]

    workspace.sign_out()
    assert workspace.access_token is None
