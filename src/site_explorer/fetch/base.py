"""Protocol for page fetching."""

from typing import Protocol

from site_explorer.data import Usage


class PageFetcher(Protocol):
    """Interface for retrieving raw page markup."""

    @property
    def usage(self) -> Usage:
        """Usage accumulated across all fetches so far."""
        ...

    async def fetch(self, url: str) -> str:
        """Fetch a page, following redirects, without executing scripts.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Raw page markup.

        Raises:
            FetchError: If the page cannot be retrieved.
        """
        ...

    async def aclose(self) -> None:
        """Release any underlying connections."""
        ...
