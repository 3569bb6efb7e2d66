"""Saved supplier profiles, keyed by company name."""

from fastapi import APIRouter, Depends, HTTPException, status

from estimator.application.schemas import SupplierCollectionResponse, SupplierSchema
from estimator.application.services import RecordCollectionService
from estimator.domain.entities import AuthUser, RecordKind
from estimator.domain.exceptions import RecordStoreError, RecordValidationError
from estimator.infrastructure.dependencies import (
    authenticated_body,
    get_current_user,
    get_record_collection_service,
)

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("", response_model=SupplierCollectionResponse, response_model_exclude_none=True)
async def list_suppliers(
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> SupplierCollectionResponse:
    try:
        suppliers = await service.list_records(RecordKind.SUPPLIERS, user.id)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching suppliers")
    return SupplierCollectionResponse(suppliers=suppliers)


@router.post("", response_model=SupplierCollectionResponse)
async def save_supplier(
    data: SupplierSchema = Depends(authenticated_body(SupplierSchema)),
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> SupplierCollectionResponse:
    """Insert a supplier, or replace the one with the same company name."""
    try:
        suppliers = await service.upsert_record(RecordKind.SUPPLIERS, user.id, data.to_record())
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving supplier")
    return SupplierCollectionResponse(message="Supplier saved successfully", suppliers=suppliers)


@router.delete("/{company_name:path}", response_model=SupplierCollectionResponse)
async def delete_supplier(
    company_name: str,
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> SupplierCollectionResponse:
    try:
        suppliers = await service.delete_record(RecordKind.SUPPLIERS, user.id, company_name)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting supplier")
    return SupplierCollectionResponse(message="Supplier deleted successfully", suppliers=suppliers)
