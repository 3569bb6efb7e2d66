"""Account signup endpoint."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from estimator.application.schemas import SignupRequest, SignupResponse, SignupUser
from estimator.application.services import AccountService
from estimator.domain.exceptions import IdentityProviderError, RecordValidationError
from estimator.infrastructure.dependencies import get_account_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Account"])


@router.post("/signup", response_model=SignupResponse)
async def signup(
    data: SignupRequest,
    service: AccountService = Depends(get_account_service),
) -> SignupResponse:
    """Create an account with a confirmed email address."""
    try:
        user = await service.sign_up(data.email, data.password, data.name)
    except RecordValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except IdentityProviderError as e:
        if e.status_code == 0:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error during signup",
            )
        logger.warning("Signup rejected by identity provider: %s", e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return SignupResponse(
        message="User created successfully",
        user=SignupUser(id=user.id, email=user.email, name=user.name or data.name),
    )
