"""Unit tests for the EstimateStateStore."""

from datetime import date

import pytest

from estimator.application.services import EstimateStateStore
from estimator.domain.entities import Client, DEFAULT_SUPPLIER, EstimateDocument, LineItem, TaxOption
from estimator.infrastructure.storage import InMemoryLocalStore

TODAY = date(2024, 5, 1)


@pytest.fixture
def store() -> EstimateStateStore:
    return EstimateStateStore(InMemoryLocalStore(), today=lambda: TODAY)


def _items(*names: str) -> list[LineItem]:
    return [LineItem(name=n, quantity=1, price=100) for n in names]


def _names(store: EstimateStateStore) -> list[str]:
    return [item.name for item in store.estimate.items]


def test_initial_document(store: EstimateStateStore):
    estimate = store.estimate
    assert estimate.estimate_number == "20240501-001"
    assert estimate.estimate_date == "2024-05-01"
    assert estimate.supplier == DEFAULT_SUPPLIER
    assert estimate.items == ()
    assert estimate.tax_option == TaxOption.EXCLUDING
    assert store.current_estimate_id is None
    assert not store.has_dirty_state()


def test_changing_date_issues_increasing_numbers(store: EstimateStateStore):
    store.update_field("estimate_date", "2024-06-10")
    first = store.estimate.estimate_number
    store.update_field("estimate_date", "2024-06-10")
    second = store.estimate.estimate_number

    assert first == "20240610-001"
    assert second == "20240610-002"
    assert store.estimate.estimate_date == "2024-06-10"


def test_update_field_rejects_unknown_field(store: EstimateStateStore):
    with pytest.raises(ValueError):
        store.update_field("discount", 10)


def test_update_field_coerces_tax_option(store: EstimateStateStore):
    store.update_field("tax_option", "including")
    assert store.estimate.tax_option == TaxOption.INCLUDING


def test_client_mirrors_follow_every_patch(store: EstimateStateStore):
    store.update_client({"name": "홍길동", "phone": "010-1111-2222"})
    store.update_client({"email": "hong@example.com"})
    store.update_client({"phone": ""})

    estimate = store.estimate
    assert estimate.client == Client(name="홍길동", phone="", email="hong@example.com")
    assert estimate.client_name == estimate.client.name
    assert estimate.client_phone == estimate.client.phone
    assert estimate.client_email == estimate.client.email


def test_legacy_client_field_updates_client(store: EstimateStateStore):
    store.update_field("client_name", "Kim")
    assert store.estimate.client.name == "Kim"


def test_update_supplier_merges(store: EstimateStateStore):
    store.update_supplier({"company_name": "ACME"})
    assert store.estimate.supplier.company_name == "ACME"
    assert store.estimate.supplier.address == DEFAULT_SUPPLIER.address


def test_snapshots_are_not_changed_by_later_mutations(store: EstimateStateStore):
    store.append_items(_items("A"))
    snapshot = store.estimate
    store.append_items(_items("B"))
    store.update_client({"name": "X"})

    assert [i.name for i in snapshot.items] == ["A"]
    assert snapshot.client.name == ""


@pytest.mark.parametrize("index", [-1, 3, 100])
def test_out_of_range_item_operations_are_noops(store: EstimateStateStore, index: int):
    store.append_items(_items("A", "B", "C"))
    before = store.estimate

    store.remove_item(index)
    store.update_item(index, {"name": "Z"})
    store.move_item(index, 0)

    assert store.estimate == before


def test_move_item(store: EstimateStateStore):
    store.append_items(_items("A", "B", "C"))

    store.move_item(0, 2)
    assert _names(store) == ["B", "C", "A"]

    store.move_item(2, 0)
    assert _names(store) == ["A", "B", "C"]

    store.move_item(1, 1)
    assert _names(store) == ["A", "B", "C"]


def test_move_item_past_end_lands_last(store: EstimateStateStore):
    store.append_items(_items("A", "B", "C"))
    store.move_item(0, 99)
    assert _names(store) == ["B", "C", "A"]


def test_remove_and_update_item(store: EstimateStateStore):
    store.append_items(_items("A", "B"))
    store.update_item(1, {"quantity": 5})
    store.remove_item(0)

    assert store.estimate.items == (LineItem(name="B", quantity=5, price=100),)


def test_dirty_state(store: EstimateStateStore):
    store.update_field("construction_start_date", "2024-05-02")
    assert store.has_dirty_state()


def test_footer_notes_change_is_dirty(store: EstimateStateStore):
    store.update_field("footer_notes", "")
    assert store.has_dirty_state()


def test_replace_keeps_identity_and_reset_clears_it(store: EstimateStateStore):
    store.set_current_estimate_id("1_abc")
    store.replace_estimate(EstimateDocument(estimate_number="LOADED"))
    assert store.estimate.estimate_number == "LOADED"
    assert store.current_estimate_id == "1_abc"

    store.reset_estimate()
    assert store.current_estimate_id is None
    assert store.estimate.estimate_number == "20240501-002"
    assert not store.has_dirty_state()
