"""HttpFetcher: Shared HTTP transport for ticker providers.

A single httpx.AsyncClient is shared across all providers to avoid connection
overhead. The fetcher only moves bytes; decoding the body is left to the
service that asked for it.

.. code-block:: python

    fetcher = HttpFetcher(timeout=5.0)
    body = await fetcher.fetch("https://api.coingecko.com/api/v3/coins/markets")
"""

from __future__ import annotations

import logging
from typing import ClassVar

import httpx

logger = logging.getLogger(__name__)


class FetcherError(Exception):
    """Base exception for transport errors."""

    pass


class FetcherTimeoutError(FetcherError):
    """Raised when a request exceeds the configured timeout."""

    pass


class FetcherHTTPError(FetcherError):
    """Raised when HTTP request fails.

    :ivar status_code: HTTP status code from the failed request.
    """

    def __init__(self, status_code: int, message: str):
        """Initialize the HTTP error.

        :param status_code: HTTP status code.
        :param message: Error message from response.
        """
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {message}")


class HttpFetcher:
    """Fetches raw response bodies over HTTP.

    :cvar DEFAULT_TIMEOUT: Default HTTP request timeout in seconds.
    :ivar timeout: Request timeout in seconds.
    """

    # Class-level shared HTTP client
    _shared_client: ClassVar[httpx.AsyncClient | None] = None

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        :param timeout: Request timeout in seconds (default: 10).
        :param client: Optional client to use instead of the shared one.
        """
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self._client = client

    @classmethod
    def get_shared_client(cls) -> httpx.AsyncClient:
        """Get or create the shared HTTP client.

        :returns: Shared httpx.AsyncClient instance.
        """
        if cls._shared_client is None or cls._shared_client.is_closed:
            cls._shared_client = httpx.AsyncClient(
                timeout=httpx.Timeout(30.0, connect=10.0),
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                follow_redirects=True,
            )
        return cls._shared_client

    @classmethod
    async def close_shared_client(cls) -> None:
        """Close the shared HTTP client."""
        if cls._shared_client is not None and not cls._shared_client.is_closed:
            await cls._shared_client.aclose()
            cls._shared_client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the injected client, or the shared one."""
        if self._client is not None:
            return self._client
        return self.get_shared_client()

    async def fetch(self, url: str) -> bytes:
        """Make an HTTP GET request and return the raw body.

        :param url: Request URL.
        :returns: Response body bytes.
        :raises FetcherTimeoutError: When the request times out.
        :raises FetcherHTTPError: On non-2xx response.
        :raises FetcherError: On other network errors.
        """
        try:
            response = await self.client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise FetcherTimeoutError(
                f"Request to {url} timed out after {self.timeout}s"
            ) from e
        except httpx.RequestError as e:
            raise FetcherError(f"Request failed: {e}") from e

        if not response.is_success:
            logger.debug(
                "HTTP GET %s failed with status %s: %s",
                url,
                response.status_code,
                response.text[:200],
            )
            raise FetcherHTTPError(response.status_code, response.text[:200])
        return response.content

    async def aclose(self) -> None:
        """Close the injected client, or the shared one."""
        if self._client is not None:
            await self._client.aclose()
        else:
            await self.close_shared_client()
