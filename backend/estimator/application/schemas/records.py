"""Pydantic DTOs for the record collections (suppliers, clients, item templates, estimates).

Bodies are validated here before any business logic runs. Required natural
keys default to "" so the services can answer with their own messages.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from estimator.domain.entities import TaxOption


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """Plain JSON object as stored in a collection."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LineItemSchema(CamelModel):
    """A line item; also the body of an item template."""

    name: str = Field("", max_length=500, examples=["웹사이트 유지보수"])
    quantity: int = Field(1, ge=0)
    price: int = Field(0, ge=0)
    spec: str = Field("EA", max_length=50)
    note: str = ""


class SupplierSchema(CamelModel):
    name: str = ""
    company_name: str = Field("", examples=["오빠두엑셀"])
    address: str = ""
    business_type: str = ""
    business_item: str = ""
    phone: str = ""
    fax: str = ""
    business_number: str = ""
    company_email: str = ""
    account_number: str = ""
    homepage: str = ""
    logo: str | None = Field(None, description="data: URI of the company logo")
    business_fields: str = ""
    footer_notes: str = ""


class ClientSchema(CamelModel):
    name: str = Field("", examples=["홍길동"])
    phone: str = ""
    email: str = ""
    address: str = ""


class EstimateDocumentSchema(CamelModel):
    """Body of estimate create/update.

    Legacy ``clientName``/``clientPhone``/``clientEmail`` are kept in step
    with the nested client: a non-empty ``client`` field wins, otherwise the
    flat value is copied into the client.
    """

    estimate_number: str = ""
    estimate_date: str = ""
    construction_start_date: str = ""
    construction_end_date: str = ""
    construction_date: str = ""
    client: ClientSchema = Field(default_factory=ClientSchema)
    client_name: str = ""
    client_phone: str = ""
    client_email: str = ""
    supplier: SupplierSchema = Field(default_factory=SupplierSchema)
    items: list[LineItemSchema] = Field(default_factory=list)
    tax_option: TaxOption = TaxOption.EXCLUDING
    business_fields: str = ""
    footer_notes: str = ""

    @model_validator(mode="after")
    def _sync_client_mirrors(self) -> "EstimateDocumentSchema":
        for field in ("name", "phone", "email"):
            legacy_field = f"client_{field}"
            nested = getattr(self.client, field)
            if nested:
                setattr(self, legacy_field, nested)
            else:
                setattr(self.client, field, getattr(self, legacy_field))
        return self


# ── Responses ────────────────────────────────────────────────────────


class SupplierCollectionResponse(CamelModel):
    message: str | None = None
    suppliers: list[dict[str, Any]]


class ClientCollectionResponse(CamelModel):
    message: str | None = None
    clients: list[dict[str, Any]]


class ItemTemplateCollectionResponse(CamelModel):
    message: str | None = None
    item_templates: list[dict[str, Any]]


class EstimateCollectionResponse(CamelModel):
    message: str | None = None
    estimates: list[dict[str, Any]]


class EstimateRecordResponse(CamelModel):
    message: str
    estimate: dict[str, Any]
