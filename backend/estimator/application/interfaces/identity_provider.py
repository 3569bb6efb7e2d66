"""Abstract interface (port) for the external identity provider."""

from abc import ABC, abstractmethod

from estimator.domain.entities import AuthUser


class IdentityProvider(ABC):
    """Resolves access tokens and creates accounts.

    Implementations raise ``IdentityProviderError`` when the provider rejects
    a request or cannot be reached.
    """

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser:
        """Exchange an access token for the user it was issued to."""
        ...

    @abstractmethod
    async def create_user(self, email: str, password: str, name: str) -> AuthUser:
        """Create an account with an already-confirmed email address."""
        ...
