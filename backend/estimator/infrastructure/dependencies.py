"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from collections.abc import AsyncGenerator, Callable, Coroutine
from typing import Any, TypeVar

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from estimator.config import get_settings
from estimator.application.interfaces import IdentityProvider, KeyValueStore
from estimator.application.services import (
    AccountService,
    EstimateRecordService,
    RecordCollectionService,
)
from estimator.domain.entities import AuthUser
from estimator.domain.exceptions import AuthenticationError, IdentityProviderError
from estimator.infrastructure.auth import SupabaseAuthClient
from estimator.infrastructure.database.session import get_db_session
from estimator.infrastructure.database.repositories import SQLAlchemyKeyValueStore

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def get_key_value_store(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[KeyValueStore, None]:
    """Provides the per-request key-value store bound to the request's session."""
    yield SQLAlchemyKeyValueStore(session)


async def get_identity_provider() -> AsyncGenerator[IdentityProvider, None]:
    """Provides the Supabase Auth client configured from settings."""
    settings = get_settings()
    yield SupabaseAuthClient(
        base_url=settings.supabase_url,
        service_role_key=settings.supabase_service_role_key,
        timeout=settings.auth_timeout,
    )


async def get_record_collection_service(
    store: KeyValueStore = Depends(get_key_value_store),
) -> AsyncGenerator[RecordCollectionService, None]:
    yield RecordCollectionService(store)


async def get_estimate_record_service(
    store: KeyValueStore = Depends(get_key_value_store),
) -> AsyncGenerator[EstimateRecordService, None]:
    yield EstimateRecordService(store)


async def get_account_service(
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> AsyncGenerator[AccountService, None]:
    yield AccountService(identity_provider)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2:
        return None
    token = parts[1].strip()
    return token or None


async def get_current_user(
    authorization: str | None = Header(None),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthUser:
    """Resolve the bearer token to a user; every collection endpoint depends on this."""
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError("No access token provided")
    try:
        return await identity_provider.get_user(token)
    except IdentityProviderError as e:
        logger.warning("Token rejected by identity provider: %s", e)
        raise AuthenticationError("Invalid access token") from e


def authenticated_body(schema: type[SchemaT]) -> Callable[..., Coroutine[Any, Any, SchemaT]]:
    """Request body as ``schema``, decoded after ``get_current_user`` accepted the token.

    Any call without a valid token is 401 whatever its body holds.
    """

    async def _parse(request: Request, user: AuthUser = Depends(get_current_user)) -> SchemaT:
        raw = await request.body()
        try:
            return schema.model_validate_json(raw)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False), body=raw) from e

    return _parse
