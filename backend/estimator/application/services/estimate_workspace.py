"""Editor-side orchestration of the estimate state store and the record API.

Signed-in users keep suppliers, clients, item templates and estimates on the
server. Signed-out users can still keep suppliers and clients, in the local
state store under ``suppliers`` / ``clients``; templates and estimates
require an account.

Each network action carries an in-flight flag. Invoking an action again
before the first call finished raises ``OperationInProgressError``; nothing
is cancelled or retried.
"""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from estimator.application.interfaces import EstimateApi, LocalStateStore
from estimator.application.services.estimate_state_store import EstimateStateStore
from estimator.domain.collections import as_record_list, find_by_key, remove_by_key, upsert_by_key
from estimator.domain.compat import document_from_payload, document_to_payload, strip_record_metadata
from estimator.domain.entities import Client, LineItem, RecordKind, Supplier
from estimator.domain.exceptions import (
    AuthenticationError,
    EstimateApiError,
    OperationInProgressError,
    RecordValidationError,
)
from estimator.domain.item_input import coerce_item_edit, parse_item_input
from estimator.domain.totals import Totals, compute_totals

logger = logging.getLogger(__name__)

# Collections a signed-out editor may keep locally
_LOCAL_KINDS = (RecordKind.SUPPLIERS, RecordKind.CLIENTS)


class EstimateWorkspace:
    def __init__(
        self,
        state: EstimateStateStore,
        api: EstimateApi,
        local_store: LocalStateStore,
        access_token: str | None = None,
    ):
        self._state = state
        self._api = api
        self._local_store = local_store
        self._access_token = access_token
        self._in_flight: set[str] = set()
        self._collections: dict[RecordKind, list[dict[str, Any]]] = {
            kind: [] for kind in RecordKind
        }

    # ── Session ──────────────────────────────────────────────────────

    @property
    def state(self) -> EstimateStateStore:
        return self._state

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def sign_in(self, access_token: str) -> None:
        self._access_token = access_token

    def sign_out(self) -> None:
        self._access_token = None

    @property
    def totals(self) -> Totals:
        estimate = self._state.estimate
        return compute_totals(estimate.items, estimate.tax_option)

    def records(self, kind: RecordKind) -> list[dict[str, Any]]:
        """Last fetched (or locally saved) collection of ``kind``."""
        return list(self._collections[kind])

    def is_busy(self, action: str) -> bool:
        return action in self._in_flight

    @asynccontextmanager
    async def _guard(self, action: str) -> AsyncIterator[None]:
        if action in self._in_flight:
            raise OperationInProgressError(action)
        self._in_flight.add(action)
        try:
            yield
        finally:
            self._in_flight.discard(action)

    def _require_token(self) -> str:
        if not self._access_token:
            raise AuthenticationError("No access token provided")
        return self._access_token

    def _local_records(self, kind: RecordKind) -> list[dict[str, Any]]:
        return as_record_list(self._local_store.read(kind.value, []))

    # ── Keyed collections ────────────────────────────────────────────

    async def fetch_records(self, kind: RecordKind) -> list[dict[str, Any]]:
        """Refresh a collection from the server, or from local state when signed out."""
        async with self._guard(f"fetch_{kind.value}"):
            if self._access_token:
                records = await self._api.list_records(kind, self._access_token)
            elif kind in _LOCAL_KINDS:
                records = self._local_records(kind)
            else:
                raise AuthenticationError("No access token provided")
            self._collections[kind] = records
            return self.records(kind)

    async def _save_keyed(self, kind: RecordKind, record: dict[str, Any]) -> list[dict[str, Any]]:
        if not record.get(kind.natural_key):
            raise RecordValidationError(kind.missing_key_message)

        async with self._guard(f"save_{kind.value}"):
            if self._access_token:
                records = await self._api.save_record(kind, record, self._access_token)
            elif kind in _LOCAL_KINDS:
                records = upsert_by_key(self._local_records(kind), record, kind.natural_key)
                self._local_store.write(kind.value, records)
            else:
                raise AuthenticationError("No access token provided")
            self._collections[kind] = records
            return self.records(kind)

    async def delete_record(self, kind: RecordKind, key_value: str) -> list[dict[str, Any]]:
        async with self._guard(f"delete_{kind.value}"):
            if self._access_token:
                records = await self._api.delete_record(kind, key_value, self._access_token)
            elif kind in _LOCAL_KINDS:
                records = remove_by_key(self._local_records(kind), kind.natural_key, key_value)
                self._local_store.write(kind.value, records)
            else:
                raise AuthenticationError("No access token provided")
            self._collections[kind] = records
            return self.records(kind)

    async def save_supplier(self) -> list[dict[str, Any]]:
        """Save the current supplier together with the document's business fields and footer notes."""
        estimate = self._state.estimate
        record = {
            **estimate.supplier.to_payload(),
            "businessFields": estimate.business_fields,
            "footerNotes": estimate.footer_notes,
        }
        return await self._save_keyed(RecordKind.SUPPLIERS, record)

    async def save_client(self) -> list[dict[str, Any]]:
        return await self._save_keyed(RecordKind.CLIENTS, self._state.estimate.client.to_payload())

    def load_supplier(self, company_name: str) -> bool:
        """Copy a saved supplier into the document. Returns False when it is not in the collection."""
        records = self._collections[RecordKind.SUPPLIERS]
        index = find_by_key(records, "companyName", company_name)
        if index < 0:
            return False
        supplier = Supplier.from_payload(records[index])
        self._state.update_field("supplier", supplier)
        if supplier.business_fields:
            self._state.update_field("business_fields", supplier.business_fields)
        if supplier.footer_notes:
            self._state.update_field("footer_notes", supplier.footer_notes)
        return True

    def load_client(self, name: str) -> bool:
        records = self._collections[RecordKind.CLIENTS]
        index = find_by_key(records, "name", name)
        if index < 0:
            return False
        client = Client.from_payload(records[index])
        self._state.update_client(
            {"name": client.name, "phone": client.phone, "email": client.email, "address": client.address}
        )
        return True

    # ── Items ────────────────────────────────────────────────────────

    async def save_item_template(self, item: LineItem) -> list[dict[str, Any]]:
        return await self._save_keyed(RecordKind.ITEM_TEMPLATES, item.to_payload())

    async def add_items(self, rows: Iterable[dict[str, str]]) -> list[LineItem]:
        """Parse item-entry rows, append the valid ones and return them.

        When signed in, every added item is also saved as an item template.
        Template saves are best effort: a failure is logged and the items
        stay on the document.
        """
        new_items = [
            item
            for item in (
                parse_item_input(
                    row.get("name", ""),
                    row.get("quantity", ""),
                    row.get("price", ""),
                    row.get("spec", ""),
                    row.get("note", ""),
                )
                for row in rows
            )
            if item is not None
        ]
        if not new_items:
            return []

        self._state.append_items(new_items)
        if self._access_token:
            for item in new_items:
                try:
                    await self._api.save_record(
                        RecordKind.ITEM_TEMPLATES, item.to_payload(), self._access_token
                    )
                except (EstimateApiError, AuthenticationError, RecordValidationError):
                    logger.warning("Template auto-save failed for item '%s'", item.name, exc_info=True)
        return new_items

    def edit_item(self, index: int, field: str, raw: Any) -> None:
        """Validate a single-field edit and apply it to the item at ``index``."""
        self._state.update_item(index, coerce_item_edit(field, raw))

    # ── Estimates ────────────────────────────────────────────────────

    async def save_estimate(self) -> dict[str, Any]:
        """Create the estimate, or update it when it was loaded from (or already saved to) the server."""
        token = self._require_token()
        estimate = self._state.estimate
        if not estimate.estimate_number or not estimate.client.name:
            raise RecordValidationError(RecordKind.ESTIMATES.missing_key_message)
        if not estimate.items:
            raise RecordValidationError("At least one item is required")

        async with self._guard("save_estimate"):
            payload = document_to_payload(estimate)
            current_id = self._state.current_estimate_id
            if current_id:
                record = await self._api.update_estimate(current_id, payload, token)
            else:
                record = await self._api.create_estimate(payload, token)
                if record.get("id"):
                    self._state.set_current_estimate_id(str(record["id"]))
            logger.info("Estimate %s saved (id=%s)", estimate.estimate_number, record.get("id"))
            return record

    def load_estimate(self, record: dict[str, Any]) -> None:
        """Make a saved record the document being edited; later saves update it."""
        estimate_id, payload = strip_record_metadata(record)
        self._state.replace_estimate(document_from_payload(payload))
        self._state.set_current_estimate_id(estimate_id)
