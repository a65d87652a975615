"""Async HTTP GET transport used as the pipeline's real fetcher.

HttpClient owns an httpx connection pool for the lifetime of an
``async with`` block. HttpGet is the fetcher collaborator: each call opens a
short-lived HttpClient, performs one GET and returns the body text.

Failures surface as FetchError. There are no retries; a failed request
fails once.

Usage:
    async with HttpClient(base_url="https://jsfiddle.net") as client:
        body = await client.get_text("/echo/json")

    fetcher = HttpGet.build()           # base URL and timeout from settings
    body = await fetcher("/echo/json")
"""

import logging
from typing import Any

import httpx

from reqpipe.config import settings
from reqpipe.errors import FetchError

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY = 500


class HttpClient:
    """Async HTTP client with connection pooling.

    Args:
        base_url: Base URL for relative resource identifiers
        headers: Default headers for all requests
        timeout: Request timeout in seconds (default: 30)
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HttpClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get_text(self, resource: str) -> str:
        """GET a resource and return the response body as text.

        Redirects are followed; the final response decides success.

        Absolute URLs are requested as-is; anything else is treated as a path
        relative to ``base_url``.

        Args:
            resource: Path or absolute URL

        Returns:
            Response body text

        Raises:
            FetchError: On HTTP status >= 400 or any httpx transport failure
            RuntimeError: If used outside ``async with``
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context manager.")

        if not resource.startswith(("http://", "https://", "/")):
            resource = f"/{resource}"

        logger.debug("GET %s%s", self.base_url, resource)

        try:
            response = await self._client.get(resource)
        except httpx.TimeoutException as e:
            logger.error("Request timeout for %s: %s", resource, e)
            raise FetchError(f"Request timeout: {e}") from e
        except httpx.NetworkError as e:
            logger.error("Network error for %s: %s", resource, e)
            raise FetchError(f"Network error: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Transport error for %s: %s", resource, e)
            raise FetchError(f"Transport error: {e}") from e

        logger.debug("Response: %d for %s", response.status_code, resource)

        if response.status_code >= 400:
            error_body = response.text[:_MAX_ERROR_BODY]
            logger.error("HTTP error: %d %s - %s", response.status_code, resource, error_body)
            raise FetchError(
                message=f"GET {resource} failed: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body,
            )

        return response.text


class HttpGet:
    """Fetcher collaborator performing one HTTP GET per call.

    Args:
        base_url: Base URL for relative resource identifiers
        timeout: Request timeout in seconds
        headers: Extra request headers
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}

    @classmethod
    def build(cls) -> "HttpGet":
        """Create a fetcher from the global settings."""
        return cls(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers={"User-Agent": settings.user_agent},
        )

    @classmethod
    def configure(cls, receiver: Any) -> None:
        """Put a freshly built fetcher into ``receiver``'s fetcher slot."""
        receiver.configure("fetcher", cls.build())

    @classmethod
    async def call(cls, resource: str) -> str:
        return await cls.build()(resource)

    async def __call__(self, resource: str) -> str:
        async with HttpClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
        ) as client:
            return await client.get_text(resource)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"
