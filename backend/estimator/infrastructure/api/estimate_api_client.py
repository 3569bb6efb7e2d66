"""HTTP client for the estimate record API — implements the EstimateApi interface.

Error responses (``{"error": "..."}``) are mapped back to the domain
exceptions the server raised: 400 → RecordValidationError, 401 →
AuthenticationError, 404 → EntityNotFoundError, anything else →
EstimateApiError. Nothing is retried.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from estimator.application.interfaces import EstimateApi
from estimator.domain.entities import RecordKind
from estimator.domain.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    EstimateApiError,
    RecordValidationError,
)

logger = logging.getLogger(__name__)


class EstimateApiClient(EstimateApi):
    """Infrastructure adapter — talks to the record service over httpx."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    @staticmethod
    def _get_headers(access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _send(
        self,
        method: str,
        path: str,
        access_token: str,
        json: dict[str, Any] | None = None,
        not_found: tuple[str, str] = ("Resource", ""),
    ) -> dict[str, Any]:
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.request(
                method, f"{self._base_url}{path}", headers=self._get_headers(access_token), json=json
            )
        except httpx.HTTPError as e:
            logger.warning("Estimate API request %s %s failed: %s", method, path, e)
            raise EstimateApiError(0, "Estimate API unreachable") from e
        finally:
            if should_close:
                await client.aclose()

        if response.status_code >= 400:
            self._raise_api_error(response, not_found)
        try:
            data = response.json()
        except ValueError as e:
            raise EstimateApiError(response.status_code, "Malformed estimate API response") from e
        if not isinstance(data, dict):
            raise EstimateApiError(response.status_code, "Malformed estimate API response")
        return data

    @staticmethod
    def _raise_api_error(response: httpx.Response, not_found: tuple[str, str]) -> None:
        try:
            data = response.json()
        except ValueError:
            data = None
        message = response.text
        if isinstance(data, dict) and data.get("error"):
            message = str(data["error"])

        status = response.status_code
        if status == 400:
            raise RecordValidationError(message)
        if status == 401:
            raise AuthenticationError(message)
        if status == 404:
            raise EntityNotFoundError(*not_found)
        raise EstimateApiError(status, message)

    async def list_records(self, kind: RecordKind, access_token: str) -> list[dict[str, Any]]:
        data = await self._send("GET", f"/{kind.path}", access_token)
        return list(data.get(kind.response_key) or [])

    async def save_record(
        self, kind: RecordKind, record: dict[str, Any], access_token: str
    ) -> list[dict[str, Any]]:
        data = await self._send("POST", f"/{kind.path}", access_token, json=record)
        return list(data.get(kind.response_key) or [])

    async def delete_record(
        self, kind: RecordKind, key: str, access_token: str
    ) -> list[dict[str, Any]]:
        data = await self._send("DELETE", f"/{kind.path}/{quote(key, safe='')}", access_token)
        return list(data.get(kind.response_key) or [])

    async def create_estimate(self, payload: dict[str, Any], access_token: str) -> dict[str, Any]:
        data = await self._send("POST", "/estimates", access_token, json=payload)
        return dict(data.get("estimate") or {})

    async def update_estimate(
        self, estimate_id: str, payload: dict[str, Any], access_token: str
    ) -> dict[str, Any]:
        data = await self._send(
            "PUT",
            f"/estimates/{quote(estimate_id, safe='')}",
            access_token,
            json=payload,
            not_found=("Estimate", estimate_id),
        )
        return dict(data.get("estimate") or {})
