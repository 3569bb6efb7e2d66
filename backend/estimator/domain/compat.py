"""Wire compatibility view for estimate documents.

Version 1 of the view writes the camelCase payload every saved record uses,
including the flat ``clientName``/``clientPhone``/``clientEmail`` mirrors of
the nested ``client`` object. Reading accepts records from any earlier
revision: when the nested client is missing (or a field in it is empty) the
flat mirror is used instead.
"""

from typing import Any

from estimator.domain.entities.estimate import (
    Client,
    DEFAULT_SUPPLIER,
    EstimateDocument,
    LineItem,
    Supplier,
    TaxOption,
)

COMPAT_VIEW_VERSION = 1

# Keys the record service adds on top of a document.
RECORD_METADATA_KEYS = ("id", "createdAt", "updatedAt")


def document_to_payload(document: EstimateDocument) -> dict[str, Any]:
    """Serialise a document into its wire form (with legacy mirrors)."""
    return {
        "estimateNumber": document.estimate_number,
        "estimateDate": document.estimate_date,
        "constructionStartDate": document.construction_start_date,
        "constructionEndDate": document.construction_end_date,
        "constructionDate": document.construction_date,
        "client": document.client.to_payload(),
        "clientName": document.client_name,
        "clientPhone": document.client_phone,
        "clientEmail": document.client_email,
        "supplier": document.supplier.to_payload(),
        "items": [item.to_payload() for item in document.items],
        "taxOption": document.tax_option.value,
        "businessFields": document.business_fields,
        "footerNotes": document.footer_notes,
    }


def document_from_payload(data: dict[str, Any]) -> EstimateDocument:
    """Build a document from wire data, migrating legacy client fields.

    Record metadata (``id``, ``createdAt``, ``updatedAt``) is ignored.
    """
    raw_client = data.get("client")
    client = Client.from_payload(raw_client if isinstance(raw_client, dict) else {})
    client = Client(
        name=client.name or str(data.get("clientName") or ""),
        phone=client.phone or str(data.get("clientPhone") or ""),
        email=client.email or str(data.get("clientEmail") or ""),
        address=client.address,
    )

    raw_supplier = data.get("supplier")
    supplier = (
        Supplier.from_payload(raw_supplier) if isinstance(raw_supplier, dict) else DEFAULT_SUPPLIER
    )

    raw_items = data.get("items")
    items = tuple(
        LineItem.from_payload(item)
        for item in (raw_items if isinstance(raw_items, list) else [])
        if isinstance(item, dict)
    )

    try:
        tax_option = TaxOption(data.get("taxOption") or TaxOption.EXCLUDING.value)
    except ValueError:
        tax_option = TaxOption.EXCLUDING

    business_fields = data.get("businessFields")
    footer_notes = data.get("footerNotes")
    return EstimateDocument(
        estimate_number=str(data.get("estimateNumber") or ""),
        estimate_date=str(data.get("estimateDate") or ""),
        construction_start_date=str(data.get("constructionStartDate") or ""),
        construction_end_date=str(data.get("constructionEndDate") or ""),
        construction_date=str(data.get("constructionDate") or ""),
        client=client,
        supplier=supplier,
        items=items,
        tax_option=tax_option,
        business_fields=(
            str(business_fields) if business_fields is not None else supplier.business_fields
        ),
        footer_notes=str(footer_notes) if footer_notes is not None else supplier.footer_notes,
    )


def strip_record_metadata(record: dict[str, Any]) -> tuple[str | None, dict[str, Any]]:
    """Split a saved estimate record into ``(id, document payload)``."""
    record_id = record.get("id")
    payload = {k: v for k, v in record.items() if k not in RECORD_METADATA_KEYS}
    return (str(record_id) if record_id else None), payload
