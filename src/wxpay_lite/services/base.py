"""Base service class for the gateway HTTP transport."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from wxpay_lite.exceptions import TransportError

# Default timeout for gateway requests (30 seconds overall read budget)
DEFAULT_TIMEOUT = httpx.Timeout(connect=5.0, read=30.0, write=10.0, pool=5.0)


class BaseService:
    """Base class for HTTP-based gateway integrations.

    Provides:
    - Shared httpx.AsyncClient with connection pooling
    - Structured logging of every exchange
    - Timeout configuration

    Requests are sent exactly once. The gateway's status lives in the
    response body, so HTTP error statuses are returned to the caller for
    classification rather than raised.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: httpx.Timeout | float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the base service.

        Args:
            base_url: Gateway prefix, without trailing slash.
            client: Optional httpx.AsyncClient. If not provided,
                    a new client will be created with ``timeout``.
            timeout: Timeout for an owned client.
        """
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self.logger = structlog.get_logger(service=self.__class__.__name__)
        self._owns_client = client is None

    async def close(self) -> None:
        """Close the HTTP client if owned by this service."""
        if self._owns_client and self.client:
            await self.client.aclose()

    async def __aenter__(self) -> "BaseService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send one HTTP request to ``base_url + path``.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path (and query) below the gateway prefix
            **kwargs: Additional arguments passed to httpx.request()

        Returns:
            httpx.Response object, whatever its status

        Raises:
            TransportError: On timeouts and connection failures
        """
        url = self.url_for(path)
        self.logger.debug("gateway_request", method=method, path=path)

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            self.logger.error("gateway_timeout", method=method, path=path, error=str(e))
            raise TransportError(
                message=f"Request timeout: {e}",
                url=url,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            self.logger.error("gateway_unreachable", method=method, path=path, error=str(e))
            raise TransportError(
                message=f"Connection error: {e}",
                url=url,
                original_error=e,
            ) from e

        self.logger.debug(
            "gateway_response",
            method=method,
            path=path,
            status_code=response.status_code,
            body=response.text,
        )
        return response
