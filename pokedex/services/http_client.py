"""HTTP client service for the PokeAPI JSON endpoints."""

from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Async HTTP client making a single attempt per request.

    Failed requests are logged and re-raised; callers decide whether a
    failure is fatal or skippable. There is no retry or backoff.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_connections: int = 50,
        verify_ssl: bool = True,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Request timeout in seconds
            max_connections: Connection pool size; one batch of fetches fits in it
            verify_ssl: Whether to verify SSL certificates
        """
        self.timeout = timeout
        self.max_connections = max_connections

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "Pokedex-TUI/1.0",
                "Accept": "application/json",
            },
            follow_redirects=True,
            limits=httpx.Limits(
                max_keepalive_connections=max_connections,
                max_connections=max_connections,
            ),
            verify=verify_ssl,
        )

        log.info(
            "HTTP client service initialized",
            timeout=timeout,
            max_connections=max_connections,
            verify_ssl=verify_ssl,
        )

    async def get(
        self,
        url: str,
        params: dict[str, str | int] | None = None,
    ) -> httpx.Response:
        """Make a single GET request.

        Args:
            url: The URL to request
            params: Optional query parameters

        Returns:
            HTTP response object

        Raises:
            httpx.HTTPStatusError: On a non-2xx response
            httpx.RequestError: On transport failure or timeout
        """
        log.debug("Making HTTP GET request", url=url, params=params)

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            status_code = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            log.warning(
                "HTTP GET request failed",
                url=url,
                status_code=status_code,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        log.debug(
            "HTTP GET request successful",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response

    async def get_json(
        self,
        url: str,
        params: dict[str, str | int] | None = None,
    ) -> Any:
        """GET a URL and decode the JSON body.

        Raises:
            httpx.HTTPError: If the request fails
            ValueError: If the body is not valid JSON
        """
        response = await self.get(url, params=params)
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
