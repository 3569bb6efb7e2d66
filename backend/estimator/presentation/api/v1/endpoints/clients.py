"""Saved clients, keyed by name."""

from fastapi import APIRouter, Depends, HTTPException, status

from estimator.application.schemas import ClientCollectionResponse, ClientSchema
from estimator.application.services import RecordCollectionService
from estimator.domain.entities import AuthUser, RecordKind
from estimator.domain.exceptions import RecordStoreError, RecordValidationError
from estimator.infrastructure.dependencies import (
    authenticated_body,
    get_current_user,
    get_record_collection_service,
)

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=ClientCollectionResponse, response_model_exclude_none=True)
async def list_clients(
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> ClientCollectionResponse:
    try:
        clients = await service.list_records(RecordKind.CLIENTS, user.id)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching clients")
    return ClientCollectionResponse(clients=clients)


@router.post("", response_model=ClientCollectionResponse)
async def save_client(
    data: ClientSchema = Depends(authenticated_body(ClientSchema)),
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> ClientCollectionResponse:
    try:
        clients = await service.upsert_record(RecordKind.CLIENTS, user.id, data.to_record())
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving client")
    return ClientCollectionResponse(message="Client saved successfully", clients=clients)


@router.delete("/{name:path}", response_model=ClientCollectionResponse)
async def delete_client(
    name: str,
    user: AuthUser = Depends(get_current_user),
    service: RecordCollectionService = Depends(get_record_collection_service),
) -> ClientCollectionResponse:
    try:
        clients = await service.delete_record(RecordKind.CLIENTS, user.id, name)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting client")
    return ClientCollectionResponse(message="Client deleted successfully", clients=clients)
