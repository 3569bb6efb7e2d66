"""Supabase Auth (GoTrue) client — implements the IdentityProvider interface.

Token checks call ``GET /auth/v1/user`` with the caller's token; account
creation calls the admin endpoint ``POST /auth/v1/admin/users`` with the
service-role key and an already-confirmed email address.
"""

import logging
from typing import Any

import httpx

from estimator.application.interfaces import IdentityProvider
from estimator.domain.entities import AuthUser
from estimator.domain.exceptions import IdentityProviderError

logger = logging.getLogger(__name__)


class SupabaseAuthClient(IdentityProvider):
    """Infrastructure adapter — connects to the Supabase Auth REST API."""

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._service_role_key = service_role_key
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self, bearer: str) -> dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(self, method: str, path: str, bearer: str, **kwargs: Any) -> dict[str, Any]:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.request(
                method, f"{self._base_url}{path}", headers=self._get_headers(bearer), **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("Identity provider unreachable: %s", e)
            raise IdentityProviderError(0, "Identity provider unreachable") from e
        finally:
            if should_close:
                await client.aclose()

        if response.status_code >= 400:
            self._raise_provider_error(response)
        try:
            data = response.json()
        except ValueError as e:
            raise IdentityProviderError(response.status_code, "Malformed identity provider response") from e
        if not isinstance(data, dict):
            raise IdentityProviderError(response.status_code, "Malformed identity provider response")
        return data

    @staticmethod
    def _raise_provider_error(response: httpx.Response) -> None:
        """Raise IdentityProviderError with the provider's own message when it sent one."""
        try:
            data = response.json()
        except ValueError:
            data = None
        message = response.text
        if isinstance(data, dict):
            message = (
                data.get("msg")
                or data.get("message")
                or data.get("error_description")
                or data.get("error")
                or response.text
            )
        raise IdentityProviderError(response.status_code, str(message))

    @staticmethod
    def _to_user(data: dict[str, Any]) -> AuthUser:
        user = data.get("user") if isinstance(data.get("user"), dict) else data
        if not user.get("id"):
            raise IdentityProviderError(200, "Identity provider returned no user")
        metadata = user.get("user_metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        return AuthUser(
            id=str(user["id"]),
            email=str(user.get("email") or ""),
            name=str(metadata.get("name") or ""),
        )

    async def get_user(self, access_token: str) -> AuthUser:
        data = await self._request("GET", "/auth/v1/user", access_token)
        return self._to_user(data)

    async def create_user(self, email: str, password: str, name: str) -> AuthUser:
        payload = {
            "email": email,
            "password": password,
            "user_metadata": {"name": name},
            # No mail server is configured, so accounts start confirmed
            "email_confirm": True,
        }
        data = await self._request("POST", "/auth/v1/admin/users", self._service_role_key, json=payload)
        user = self._to_user(data)
        logger.info("Created account %s", user.id)
        return user
