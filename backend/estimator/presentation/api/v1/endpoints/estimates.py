"""Saved estimates, most recent first, identified by a server-assigned id."""

from fastapi import APIRouter, Depends, HTTPException, status

from estimator.application.schemas import (
    EstimateCollectionResponse,
    EstimateDocumentSchema,
    EstimateRecordResponse,
)
from estimator.application.services import EstimateRecordService
from estimator.domain.entities import AuthUser
from estimator.domain.exceptions import EntityNotFoundError, RecordStoreError, RecordValidationError
from estimator.infrastructure.dependencies import (
    authenticated_body,
    get_current_user,
    get_estimate_record_service,
)

router = APIRouter(prefix="/estimates", tags=["Estimates"])


@router.get("", response_model=EstimateCollectionResponse, response_model_exclude_none=True)
async def list_estimates(
    user: AuthUser = Depends(get_current_user),
    service: EstimateRecordService = Depends(get_estimate_record_service),
) -> EstimateCollectionResponse:
    try:
        estimates = await service.list_estimates(user.id)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching estimates")
    return EstimateCollectionResponse(estimates=estimates)


@router.post("", response_model=EstimateRecordResponse)
async def create_estimate(
    data: EstimateDocumentSchema = Depends(authenticated_body(EstimateDocumentSchema)),
    user: AuthUser = Depends(get_current_user),
    service: EstimateRecordService = Depends(get_estimate_record_service),
) -> EstimateRecordResponse:
    """Save a new estimate. Each call creates a new record."""
    try:
        estimate = await service.create_estimate(user.id, data.to_record())
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error saving estimate")
    return EstimateRecordResponse(message="Estimate saved successfully", estimate=estimate)


@router.put("/{estimate_id}", response_model=EstimateRecordResponse)
async def update_estimate(
    estimate_id: str,
    data: EstimateDocumentSchema = Depends(authenticated_body(EstimateDocumentSchema)),
    user: AuthUser = Depends(get_current_user),
    service: EstimateRecordService = Depends(get_estimate_record_service),
) -> EstimateRecordResponse:
    try:
        estimate = await service.update_estimate(user.id, estimate_id, data.to_record())
    except EntityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Estimate not found")
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating estimate")
    return EstimateRecordResponse(message="Estimate updated successfully", estimate=estimate)


@router.delete("/{estimate_id}", response_model=EstimateCollectionResponse)
async def delete_estimate(
    estimate_id: str,
    user: AuthUser = Depends(get_current_user),
    service: EstimateRecordService = Depends(get_estimate_record_service),
) -> EstimateCollectionResponse:
    try:
        estimates = await service.delete_estimate(user.id, estimate_id)
    except RecordStoreError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting estimate")
    return EstimateCollectionResponse(message="Estimate deleted successfully", estimates=estimates)
