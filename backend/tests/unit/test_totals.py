"""Unit tests for the totals engine."""

from estimator.domain.entities import LineItem, TaxOption
from estimator.domain.totals import compute_totals, line_amounts, net_unit_price


def test_excluding_sums_price_times_quantity():
    items = [LineItem(name="A", quantity=2, price=1000), LineItem(name="B", quantity=1, price=500)]

    totals = compute_totals(items, TaxOption.EXCLUDING)

    assert (totals.subtotal, totals.tax_amount, totals.total) == (2500, 250, 2750)


def test_including_backs_out_vat_exactly():
    totals = compute_totals([LineItem(name="A", quantity=1, price=1100)], TaxOption.INCLUDING)

    assert (totals.subtotal, totals.tax_amount, totals.total) == (1000, 100, 1100)


def test_including_floors_unit_price_before_multiplying():
    # 1000 / 1.1 = 909.09 -> 909 per unit, then * 3
    totals = compute_totals([LineItem(name="A", quantity=3, price=1000)], TaxOption.INCLUDING)

    assert totals.subtotal == 2727
    assert totals.tax_amount == 272
    assert totals.total == 2999


def test_tax_is_floored_on_aggregate():
    items = [LineItem(name="A", quantity=1, price=15), LineItem(name="B", quantity=1, price=15)]

    totals = compute_totals(items, TaxOption.EXCLUDING)
    per_line_tax = sum(line_amounts(i, TaxOption.EXCLUDING).tax_amount for i in items)

    assert totals.tax_amount == 3
    assert per_line_tax == 2


def test_empty_items_are_zero():
    totals = compute_totals([], TaxOption.INCLUDING)
    assert (totals.subtotal, totals.tax_amount, totals.total) == (0, 0, 0)


def test_line_amounts_including():
    amounts = line_amounts(LineItem(name="A", quantity=2, price=2200), TaxOption.INCLUDING)

    assert amounts.unit_price == 2000
    assert amounts.supply_amount == 4000
    assert amounts.tax_amount == 400


def test_net_unit_price_excluding_is_identity():
    assert net_unit_price(1234, TaxOption.EXCLUDING) == 1234
