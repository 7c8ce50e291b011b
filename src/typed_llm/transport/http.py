"""HTTP 传输层：基于 httpx 的异步 HTTP 客户端。

HTTP transport using httpx for async requests.

Provides:
- Configurable timeouts
- Auth header management
- Wrapping of network failures into TransportError and HTTP error
  responses into RemoteError
"""

from __future__ import annotations

from contextlib import suppress
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

import httpx

from typed_llm.errors import RemoteError, TransportError
from typed_llm.transport.auth import get_auth_header

if TYPE_CHECKING:
    from typed_llm.config import ClientConfig

_DEFAULT_CONNECT_TIMEOUT = 10.0


def _get_ua_version() -> str:
    try:
        return version("typed-llm")
    except PackageNotFoundError:
        return "0.0.0"


class HttpTransport:
    """HTTP transport for the chat completions endpoint.

    Example:
        >>> transport = HttpTransport(ClientConfig(base_url="https://api.openai.com/v1"))
        >>> response = await transport.post("/chat/completions", payload)
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize HTTP transport.

        Args:
            config: Client configuration
            client: Pre-built httpx client (tests, shared pools); it is not
                closed by this transport
        """
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._auth_headers = get_auth_header(config.auth_style, config.api_key)
        self._client = client
        self._owns_client = client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            timeout = httpx.Timeout(
                self._config.timeout,
                connect=min(_DEFAULT_CONNECT_TIMEOUT, self._config.timeout),
            )
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"typed-llm/{_get_ua_version()}",
        }
        headers.update(self._auth_headers)
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _build_params(self) -> dict[str, str] | None:
        if self._config.api_version:
            return {"api-version": self._config.api_version}
        return None

    async def post(
        self,
        path: str,
        json: dict[str, Any],
        *,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a POST request.

        Args:
            path: Request path (relative to base URL)
            json: JSON body
            headers: Additional headers

        Returns:
            HTTP response

        Raises:
            TransportError: On network/connection errors
            RemoteError: On API errors (4xx, 5xx)
        """
        client = self._get_client()
        url = f"{self._base_url}{path}"

        try:
            response = await client.post(
                url,
                json=json,
                headers=self._build_headers(headers),
                params=self._build_params(),
            )
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}", url=url, cause=e) from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}", url=url, cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", url=url, cause=e) from e

        if response.status_code >= 400:
            body = None
            with suppress(ValueError):
                body = response.json()
            raise RemoteError.from_response(
                status_code=response.status_code,
                body=body if isinstance(body, dict) else None,
                headers=dict(response.headers),
            )

        return response

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
