"""Anchor extraction and URL resolution."""

import logging
from urllib.parse import urldefrag, urljoin, urlparse, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from site_explorer.data import URLMetadata

logger = logging.getLogger(__name__)

FETCHABLE_SCHEMES = ("http", "https")


def normalize_url(url: str) -> str:
    """Drop the fragment and give a bare host the root path.

    ``https://site.test`` and ``https://site.test/#top`` both become
    ``https://site.test/``, so the visited set sees one page.
    """
    parts = urlsplit(urldefrag(url.strip()).url)
    if parts.netloc and not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


def resolve_url(href: str, site_root: str) -> str:
    """Resolve an href against the site root and normalize the result.

    Absolute URLs keep their host and path; see :func:`normalize_url`.
    """
    href = href.strip()
    if urlparse(href).scheme:
        absolute = href
    else:
        absolute = urljoin(site_root.rstrip("/") + "/", href)
    return normalize_url(absolute)


def is_valid_url(url: str) -> bool:
    """Basic URL syntax check: an http(s) scheme, a host and no whitespace."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if any(ch.isspace() for ch in url):
        return False
    return parsed.scheme in FETCHABLE_SCHEMES and bool(parsed.netloc)


def extract_links(html: str, site_root: str) -> list[URLMetadata]:
    """Collect metadata for every fetchable anchor on a page.

    Each distinct URL appears once, with the metadata of its first anchor.

    Args:
        html: Raw page markup.
        site_root: Root used to resolve relative hrefs.

    Returns:
        Link metadata in document order.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: dict[str, URLMetadata] = {}

    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if not isinstance(href, str) or not href.strip():
            continue
        if href.strip().lower().startswith("javascript:"):
            continue

        try:
            url = resolve_url(href, site_root)
        except ValueError:
            logger.debug("Skipping malformed link %s", href)
            continue
        if not is_valid_url(url):
            logger.debug("Skipping non-fetchable link %s", href)
            continue
        if url in links:
            continue

        title = anchor.get("title")
        parent = anchor.parent
        context = " ".join(parent.get_text(separator=" ").split()) if parent is not None else ""
        links[url] = URLMetadata(
            url=url,
            text=" ".join(anchor.get_text(separator=" ").split()),
            title=title if isinstance(title, str) and title else None,
            context=context,
        )

    return list(links.values())
