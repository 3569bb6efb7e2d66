from .records import (
    CamelModel,
    LineItemSchema,
    SupplierSchema,
    ClientSchema,
    EstimateDocumentSchema,
    SupplierCollectionResponse,
    ClientCollectionResponse,
    ItemTemplateCollectionResponse,
    EstimateCollectionResponse,
    EstimateRecordResponse,
)
from .account import SignupRequest, SignupResponse, SignupUser

__all__ = [
    "CamelModel",
    "LineItemSchema",
    "SupplierSchema",
    "ClientSchema",
    "EstimateDocumentSchema",
    "SupplierCollectionResponse",
    "ClientCollectionResponse",
    "ItemTemplateCollectionResponse",
    "EstimateCollectionResponse",
    "EstimateRecordResponse",
    "SignupRequest",
    "SignupResponse",
    "SignupUser",
]
