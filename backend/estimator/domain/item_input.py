"""Input-edit boundary for line items.

The totals engine assumes well-formed non-negative integers, so raw form
values are checked here before they reach a document. Quantity must be at
least 1; price may be 0.
"""

from typing import Any

from estimator.domain.entities.estimate import LineItem
from estimator.domain.exceptions import RecordValidationError

MIN_QUANTITY = 1
MIN_PRICE = 0

_NUMERIC_FIELDS = {"quantity": MIN_QUANTITY, "price": MIN_PRICE}
_TEXT_FIELDS = ("name", "spec", "note")


def _parse_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_item_input(
    name: str,
    quantity: str,
    price: str,
    spec: str = "",
    note: str = "",
) -> LineItem | None:
    """Turn one row of the item entry form into a ``LineItem``.

    Rows without a name, with a missing/zero/non-numeric quantity, or with a
    non-numeric or negative price are skipped (``None``).
    """
    name = (name or "").strip()
    parsed_quantity = _parse_int(quantity)
    parsed_price = _parse_int(price)
    if not name or parsed_quantity is None or parsed_quantity < MIN_QUANTITY:
        return None
    if parsed_price is None or parsed_price < MIN_PRICE:
        return None
    return LineItem(
        name=name,
        quantity=parsed_quantity,
        price=parsed_price,
        spec=(spec or "").strip() or "EA",
        note=(note or "").strip(),
    )


def coerce_item_edit(field: str, raw: Any) -> dict[str, Any]:
    """Validate a single-field edit of an existing line and return the patch.

    Raises ``RecordValidationError`` for unknown fields, non-numeric or
    negative numbers, and a quantity below 1.
    """
    if field in _TEXT_FIELDS:
        return {field: "" if raw is None else str(raw)}
    if field not in _NUMERIC_FIELDS:
        raise RecordValidationError(f"Unknown item field: {field}")

    value = _parse_int(raw)
    if value is None or value < _NUMERIC_FIELDS[field]:
        raise RecordValidationError(f"Invalid {field}: {raw!r}")
    return {field: value}
