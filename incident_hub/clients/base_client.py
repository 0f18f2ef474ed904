"""
Base HTTP client for external services.
Provides the shared httpx client lifecycle and error mapping.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from incident_hub.core.exceptions import UpstreamError
from incident_hub.core.logging import get_logger

logger = get_logger(__name__)


class BaseHTTPClient(ABC):
    """
    Abstract base class for clients of external HTTP services.

    One request is made per call; failures are mapped to the subclass's
    UpstreamError type and never retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL of the service
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {"Content-Type": "application/json", **(headers or {})}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Human-readable name used in logs and errors."""
        ...

    def _error(
        self,
        message: str,
        details: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> UpstreamError:
        """Build the error raised for a failed request."""
        return UpstreamError(self.service_name, message, details=details, context=context)

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Make an HTTP request to the service.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: Path relative to the base URL
            json: Request body
            params: Query parameters
            headers: Extra headers for this request

        Returns:
            The successful response

        Raises:
            UpstreamError: If the request fails or returns a non-2xx status
        """
        client = await self._get_client()

        try:
            response = await client.request(
                method=method,
                url=endpoint,
                json=json,
                params=params,
                headers=headers,
            )
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            logger.error(
                "Upstream request failed",
                service=self.service_name,
                endpoint=endpoint,
                status_code=e.response.status_code,
                response_text=e.response.text,
            )
            raise self._error(
                f"HTTP {e.response.status_code}",
                details=e.response.text,
                context={"endpoint": endpoint, "status_code": e.response.status_code},
            ) from e

        except httpx.RequestError as e:
            logger.error(
                "Upstream request error",
                service=self.service_name,
                endpoint=endpoint,
                error=str(e),
            )
            raise self._error(
                f"Request failed: {e!s}",
                context={"endpoint": endpoint},
            ) from e

    async def __aenter__(self) -> "BaseHTTPClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
