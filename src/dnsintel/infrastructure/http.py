"""HTTP client wrapper."""

from typing import Any

import httpx

from dnsintel.core.config import get_settings


class HTTPClient:
    """Async HTTP client wrapper.

    ``transport`` lets tests swap the network for ``httpx.MockTransport``.
    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        verify: bool = True,
        follow_redirects: bool = True,
    ) -> None:
        self.settings = get_settings()
        self._timeout = timeout if timeout is not None else self.settings.http_timeout
        self._headers = {"User-Agent": self.settings.user_agent, **(headers or {})}
        self._transport = transport
        self._verify = verify
        self._follow_redirects = follow_redirects
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
            verify=self._verify,
            follow_redirects=self._follow_redirects,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make GET request."""
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")
        return await self._client.get(url, **kwargs)

    async def head(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make HEAD request."""
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")
        return await self._client.head(url, **kwargs)
