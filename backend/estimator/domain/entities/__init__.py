from .estimate import (
    Client,
    DEFAULT_SUPPLIER,
    EstimateDocument,
    LineItem,
    Supplier,
    TaxOption,
)
from .record_kind import RecordKind
from .user import AuthUser

__all__ = [
    "Client",
    "DEFAULT_SUPPLIER",
    "EstimateDocument",
    "LineItem",
    "Supplier",
    "TaxOption",
    "RecordKind",
    "AuthUser",
]
