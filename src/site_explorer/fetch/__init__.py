"""Page fetching."""

from site_explorer.fetch.base import PageFetcher
from site_explorer.fetch.httpx_fetcher import HttpxFetcher

__all__ = [
    "HttpxFetcher",
    "PageFetcher",
]
