"""Link extraction and relevance scoring."""

from site_explorer.links.extractor import extract_links, is_valid_url, normalize_url, resolve_url
from site_explorer.links.scorer import LinkScorer

__all__ = [
    "LinkScorer",
    "extract_links",
    "is_valid_url",
    "normalize_url",
    "resolve_url",
]
