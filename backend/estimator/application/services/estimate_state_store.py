"""Client-side store holding the one estimate document being edited.

Every mutation replaces the document with a new frozen value, so a snapshot
taken from ``estimate`` is never changed underneath its holder. Mutations
are synchronous and either fully applied or a no-op.
"""

import dataclasses
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from estimator.application.interfaces import LocalStateStore
from estimator.application.services.estimate_numbering import EstimateNumberGenerator
from estimator.domain.entities import Client, EstimateDocument, LineItem, Supplier, TaxOption

_DOCUMENT_FIELDS = {f.name for f in dataclasses.fields(EstimateDocument)}
_SUPPLIER_FIELDS = {f.name for f in dataclasses.fields(Supplier)}
_CLIENT_FIELDS = {f.name for f in dataclasses.fields(Client)}
_ITEM_FIELDS = {f.name for f in dataclasses.fields(LineItem)}

# Flat client fields older callers still edit directly
_LEGACY_CLIENT_FIELDS = {
    "client_name": "name",
    "client_phone": "phone",
    "client_email": "email",
}


def _check_fields(partial: dict[str, Any], allowed: set[str], what: str) -> None:
    unknown = set(partial) - allowed
    if unknown:
        raise ValueError(f"Unknown {what} field(s): {', '.join(sorted(unknown))}")


def create_initial_estimate(numbers: EstimateNumberGenerator, today: date) -> EstimateDocument:
    """A fresh document dated ``today`` with a newly issued number."""
    return EstimateDocument(
        estimate_number=numbers.next_number(today),
        estimate_date=today.isoformat(),
    )


class EstimateStateStore:
    def __init__(
        self,
        local_store: LocalStateStore,
        today: Callable[[], date] = date.today,
    ):
        self._numbers = EstimateNumberGenerator(local_store)
        self._today = today
        self._estimate = create_initial_estimate(self._numbers, today())
        self._current_estimate_id: str | None = None

    @property
    def estimate(self) -> EstimateDocument:
        return self._estimate

    @property
    def current_estimate_id(self) -> str | None:
        """Id of the saved record being edited; None for a new estimate."""
        return self._current_estimate_id

    def set_current_estimate_id(self, estimate_id: str | None) -> None:
        self._current_estimate_id = estimate_id

    # ── Document fields ──────────────────────────────────────────────

    def update_field(self, field: str, value: Any) -> None:
        """Replace one top-level field.

        Setting ``estimate_date`` also issues a new estimate number for that
        date. Raises ``ValueError`` for unknown fields or a bad tax option.
        """
        if field in _LEGACY_CLIENT_FIELDS:
            self.update_client({_LEGACY_CLIENT_FIELDS[field]: value})
            return
        if field not in _DOCUMENT_FIELDS:
            raise ValueError(f"Unknown estimate field: {field}")

        if field == "tax_option":
            value = TaxOption(value)
        elif field == "items":
            value = tuple(value)

        changes: dict[str, Any] = {field: value}
        if field == "estimate_date":
            changes["estimate_number"] = self._numbers.next_number(value)
        self._estimate = dataclasses.replace(self._estimate, **changes)

    def update_supplier(self, partial: dict[str, Any]) -> None:
        _check_fields(partial, _SUPPLIER_FIELDS, "supplier")
        supplier = dataclasses.replace(self._estimate.supplier, **partial)
        self._estimate = dataclasses.replace(self._estimate, supplier=supplier)

    def update_client(self, partial: dict[str, Any]) -> None:
        """Shallow-merge into the client; fields absent from ``partial`` keep their value."""
        _check_fields(partial, _CLIENT_FIELDS, "client")
        client = dataclasses.replace(self._estimate.client, **partial)
        self._estimate = dataclasses.replace(self._estimate, client=client)

    def replace_estimate(self, document: EstimateDocument) -> None:
        """Swap in a whole document. ``current_estimate_id`` is left alone."""
        self._estimate = document

    # ── Items ────────────────────────────────────────────────────────

    def _set_items(self, items: list[LineItem]) -> None:
        self._estimate = dataclasses.replace(self._estimate, items=tuple(items))

    def remove_item(self, index: int) -> None:
        items = list(self._estimate.items)
        if not 0 <= index < len(items):
            return
        del items[index]
        self._set_items(items)

    def move_item(self, from_index: int, to_index: int) -> None:
        """Move an item; ``to_index`` past the end lands it last."""
        items = list(self._estimate.items)
        if from_index == to_index or not 0 <= from_index < len(items):
            return
        moved = items.pop(from_index)
        items.insert(max(to_index, 0), moved)
        self._set_items(items)

    def update_item(self, index: int, partial: dict[str, Any]) -> None:
        items = list(self._estimate.items)
        if not 0 <= index < len(items):
            return
        _check_fields(partial, _ITEM_FIELDS, "item")
        items[index] = dataclasses.replace(items[index], **partial)
        self._set_items(items)

    def append_items(self, new_items: Iterable[LineItem]) -> None:
        self._set_items([*self._estimate.items, *new_items])

    # ── Lifecycle ────────────────────────────────────────────────────

    def reset_estimate(self) -> None:
        """Start over: a fresh document with a new number, and no record identity."""
        self._estimate = create_initial_estimate(self._numbers, self._today())
        self._current_estimate_id = None

    def has_dirty_state(self) -> bool:
        return self._estimate.has_meaningful_data()
