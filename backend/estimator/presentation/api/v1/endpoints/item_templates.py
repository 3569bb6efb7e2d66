"""Reusable line-item templates, keyed by item name."""

from fastapi import APIRouter, Depends, HTTPException, status

from estimator.application.schemas import ItemTemplateCollectionResponse, LineItemSchema
from estimator.application.services import RecordCollectionService
from estimator.domain.entities import AuthUser, RecordKind
from estimator.domain.exceptions import RecordStoreError, RecordValidationError
from estimator.infrastructure.dependencies import (
    authenticated_body,
    get_current_user,
    get_record_collection_service,
)

router = APIRouter(prefix="/item-templates", tags=["Item Templates"])


@router.get("", response_model=ItemTemplateCollectionResponse, response_model_exclude_none=True)
async def list_item_templates(
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> ItemTemplateCollectionResponse:
    try:
        templates = await service.list_records(RecordKind.ITEM_TEMPLATES, user.id)
    except RecordStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching item templates"
        )
    return ItemTemplateCollectionResponse(item_templates=templates)


@router.post("", response_model=ItemTemplateCollectionResponse)
async def save_item_template(
    data: LineItemSchema = Depends(authenticated_body(LineItemSchema)),
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> ItemTemplateCollectionResponse:
    try:
        templates = await service.upsert_record(RecordKind.ITEM_TEMPLATES, user.id, data.to_record())
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except RecordStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving item template"
        )
    return ItemTemplateCollectionResponse(
        message="Item template saved successfully", item_templates=templates
    )


@router.delete("/{name:path}", response_model=ItemTemplateCollectionResponse)
async def delete_item_template(
    name: str,
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> ItemTemplateCollectionResponse:
    try:
        templates = await service.delete_record(RecordKind.ITEM_TEMPLATES, user.id, name)
    except RecordStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting item template"
        )
    return ItemTemplateCollectionResponse(
        message="Item template deleted successfully", item_templates=templates
    )
