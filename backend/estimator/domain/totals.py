"""Totals engine — subtotal / VAT / total derivation for an estimate.

Rounding happens in two stages and both must stay exactly as they are:

1. with VAT-inclusive prices, each item's net unit price is floored before it
   is multiplied by the quantity and summed;
2. VAT is floored once on the aggregate subtotal.

Per-line display values floor each line independently, so the per-line VAT
figures are not guaranteed to add up to the aggregate VAT.

All arithmetic is on integers. ``floor(price / 1.1)`` is computed as
``price * 10 // 11`` and ``floor(x * 0.1)`` as ``x // 10``; binary floats
give 999 for ``1100 / 1.1``.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from estimator.domain.entities.estimate import LineItem, TaxOption

VAT_PERCENT = 10


@dataclass(frozen=True)
class Totals:
    subtotal: int
    tax_amount: int
    total: int


@dataclass(frozen=True)
class LineAmounts:
    """Per-line display figures."""

    unit_price: int
    supply_amount: int
    tax_amount: int


def net_unit_price(price: int, tax_option: TaxOption) -> int:
    """Unit price without VAT."""
    if tax_option == TaxOption.INCLUDING:
        return price * 100 // (100 + VAT_PERCENT)
    return price


def vat_of(amount: int) -> int:
    return amount * VAT_PERCENT // 100


def compute_totals(items: Iterable[LineItem], tax_option: TaxOption) -> Totals:
    """Derive subtotal, VAT and grand total from the current items."""
    subtotal = sum(net_unit_price(item.price, tax_option) * item.quantity for item in items)
    tax_amount = vat_of(subtotal)
    return Totals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)


def line_amounts(item: LineItem, tax_option: TaxOption) -> LineAmounts:
    unit_price = net_unit_price(item.price, tax_option)
    supply_amount = unit_price * item.quantity
    return LineAmounts(
        unit_price=unit_price,
        supply_amount=supply_amount,
        tax_amount=vat_of(supply_amount),
    )
