"""Application service (use case) for account signup."""

import logging

from estimator.application.interfaces import IdentityProvider
from estimator.domain.entities import AuthUser
from estimator.domain.exceptions import RecordValidationError

logger = logging.getLogger("AccountService")


class AccountService:
    """Creates accounts through the identity provider. Depends on the provider port (DI)."""

    def __init__(self, identity_provider: IdentityProvider):
        self._identity_provider = identity_provider

    async def sign_up(self, email: str, password: str, name: str) -> AuthUser:
        if not email or not password or not name:
            raise RecordValidationError("Email, password, and name are required")

        # IdentityProviderError propagates; the HTTP layer turns it into a 400
        user = await self._identity_provider.create_user(email, password, name)
        logger.info("Account created: id=%s", user.id)
        return user
