"""Domain entity describing the four per-user record collections."""

from enum import Enum


class RecordKind(str, Enum):
    """A per-user collection kept as one JSON array in the key-value store."""

    SUPPLIERS = "suppliers"
    CLIENTS = "clients"
    ITEM_TEMPLATES = "item_templates"
    ESTIMATES = "estimates"

    @property
    def natural_key(self) -> str:
        """Wire field that identifies a record within its collection."""
        return {
            RecordKind.SUPPLIERS: "companyName",
            RecordKind.CLIENTS: "name",
            RecordKind.ITEM_TEMPLATES: "name",
            RecordKind.ESTIMATES: "id",
        }[self]

    @property
    def path(self) -> str:
        """URL segment of the collection endpoints."""
        return self.value.replace("_", "-")

    @property
    def response_key(self) -> str:
        """JSON key the collection is returned under."""
        return {
            RecordKind.SUPPLIERS: "suppliers",
            RecordKind.CLIENTS: "clients",
            RecordKind.ITEM_TEMPLATES: "itemTemplates",
            RecordKind.ESTIMATES: "estimates",
        }[self]

    @property
    def label(self) -> str:
        return {
            RecordKind.SUPPLIERS: "Supplier",
            RecordKind.CLIENTS: "Client",
            RecordKind.ITEM_TEMPLATES: "Item template",
            RecordKind.ESTIMATES: "Estimate",
        }[self]

    @property
    def missing_key_message(self) -> str:
        return {
            RecordKind.SUPPLIERS: "Company name is required",
            RecordKind.CLIENTS: "Client name is required",
            RecordKind.ITEM_TEMPLATES: "Item name is required",
            RecordKind.ESTIMATES: "Estimate number and client name are required",
        }[self]

    def storage_key(self, user_id: str) -> str:
        """Key-value store key holding ``user_id``'s collection."""
        return f"user_{self.value}_{user_id}"
