"""WPRO groups API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..errors import ApiError, ConfigurationError
from .models import PublishRequest

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    400: "Bad Request - The server could not process the request.",
    401: "Unauthorized - Please check your authentication token.",
    403: "Forbidden - You do not have permission to perform this action.",
    404: "Not Found - The endpoint or resource does not exist.",
    500: "Internal Server Error - Please try again later.",
    503: "Service Unavailable - The server is currently unable to handle the request.",
}
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


def describe_status(status_code: int | None) -> str:
    """Map an HTTP status code to a human-readable error message."""
    if status_code is None:
        return UNKNOWN_ERROR_MESSAGE
    return STATUS_MESSAGES.get(status_code, UNKNOWN_ERROR_MESSAGE)


class WproClient:
    """Client for the component prototype and service publish resources."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            settings: Resolved run configuration (URLs, token, timeout)
            transport: Optional httpx transport, used in place of the network
        """
        self.settings = settings
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"Authorization": f"Bearer {self.settings.access_token}"},
                timeout=self.settings.timeout_seconds,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> WproClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request, raising ApiError on transport failure or non-2xx status."""
        logger.debug("%s %s", method, url)
        try:
            response = await self.client.request(method, url, json=json)
        except httpx.TransportError as e:
            raise ApiError(f"No response from server: {e}") from e

        if not response.is_success:
            raise ApiError(
                f"{method} {url} failed with status {response.status_code}",
                response.status_code,
                response.text,
            )
        return response

    async def create_component(self, request: PublishRequest) -> httpx.Response:
        """POST a component to the prototype collection."""
        url = self.settings.prototype_resource
        if url is None:
            raise ConfigurationError("No valid URL configuration found. Set WPRO_API_URL.")
        return await self._request("POST", url, json=request.to_payload())

    async def update_component(self, request: PublishRequest) -> httpx.Response:
        """PUT a component to its own resource, keyed by group id."""
        url = self.settings.component_url(request.group_id)
        return await self._request("PUT", url, json=request.to_payload())

    async def publish_service(self) -> httpx.Response:
        """POST to the service publish resource with an empty body."""
        url = self.settings.service_publish_resource
        if url is None:
            raise ConfigurationError("Service publish resource is not configured.")
        return await self._request("POST", url)
