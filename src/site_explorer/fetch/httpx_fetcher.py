"""Page fetcher built on httpx."""

import logging

import httpx

from site_explorer.data import Usage
from site_explorer.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "site-explorer/0.1"


class HttpxFetcher:
    """Fetch pages over HTTP using a shared ``httpx.AsyncClient``.

    The client is created lazily and reused across fetches; call
    :meth:`aclose` (or use the fetcher as an async context manager) when
    the run is finished.

    Args:
        timeout: Request timeout in seconds.
        follow_redirects: Whether to follow HTTP redirects.
        user_agent: Value for the User-Agent header.
        transport: Optional custom transport (used by tests).
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        follow_redirects: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._follow_redirects = follow_redirects
        self._headers = {"User-Agent": user_agent}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._usage = Usage()

    @property
    def usage(self) -> Usage:
        return self._usage

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=self._follow_redirects,
                headers=self._headers,
                transport=self._transport,
            )
        return self._client

    async def fetch(self, url: str) -> str:
        """Fetch a page and return its decoded text.

        Raises:
            FetchError: On transport errors or non-2xx responses.
        """
        client = self._get_client()
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(url, str(e)) from e

        self._usage.page_fetches += 1
        logger.debug("Fetched %s (%d bytes)", url, len(response.content))
        return response.text

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
