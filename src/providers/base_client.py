"""
Shared HTTP plumbing for provider clients.

Uses httpx for async requests. A provider either borrows the application's
shared AsyncClient or opens a short-lived one per call; either way every
request carries the provider's own timeout.
"""

from typing import Any, Dict, Optional

import httpx

from src.config import get_service_logger
from src.core.exceptions import (
    MalformedResponseError,
    ProviderError,
    ProviderTimeoutError,
)

logger = get_service_logger(__name__)

ERROR_BODY_CHARS = 500


class BaseHTTPProvider:
    """
    Base class for providers reached over HTTP.

    Translates transport failures into the Pivot exception hierarchy:
    timeouts -> ProviderTimeoutError, non-2xx and network errors ->
    ProviderError, non-JSON bodies -> MalformedResponseError.
    """

    name: str = "provider"

    def __init__(
        self,
        api_key: str = "",
        timeout: float = 8.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key or ""
        self.timeout = timeout
        self._client = client

    @property
    def available(self) -> bool:
        """True when the provider has a credential configured."""
        return bool(self.api_key)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(
                method, url, params=params, headers=headers, json=json, timeout=self.timeout
            )
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.request(
                method, url, params=params, headers=headers, json=json
            )

    async def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            ProviderTimeoutError: the call exceeded self.timeout
            ProviderError: non-2xx status or transport failure
            MalformedResponseError: body is not JSON
        """
        try:
            response = await self._send(
                method, url, params=params, headers=headers, json=json
            )
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(
                f"{self.name} request timed out after {self.timeout}s",
                provider=self.name,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(
                f"{self.name} request failed: {e}", provider=self.name
            ) from e

        if not response.is_success:
            body = response.text[:ERROR_BODY_CHARS]
            logger.error(
                f"{self.name} API error response",
                status=response.status_code,
                body=body,
            )
            raise ProviderError(
                f"{self.name} API failed with status {response.status_code}: {body}",
                status=response.status_code,
                provider=self.name,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.name} returned a non-JSON body",
                raw=response.text[:200],
            ) from e
