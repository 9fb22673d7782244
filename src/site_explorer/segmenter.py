"""Turn raw page markup into bounded-length text chunks."""

import logging
import re
import textwrap

from bs4 import BeautifulSoup, Comment

from site_explorer.data import ContentChunk

logger = logging.getLogger(__name__)

NON_CONTENT_TAGS = ["script", "style", "noscript", "iframe", "template"]
HIDDEN_SELECTOR = '[hidden], .hidden, [style*="display: none"], [style*="display:none"]'

# A fragment runs up to terminal punctuation followed by whitespace, or to the
# end of the text. Dots inside emails and hostnames do not split.
_FRAGMENT_PATTERN = re.compile(r"\S.*?(?:[.!?]+(?=\s|$)|$)")


def extract_visible_text(html: str) -> str:
    """Strip comments, scripts, styles and hidden elements; return visible text.

    Whitespace is collapsed to single spaces.
    """
    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for element in soup(NON_CONTENT_TAGS):
        element.decompose()
    for element in soup.select(HIDDEN_SELECTOR):
        element.decompose()

    root = soup.body or soup
    return " ".join(root.get_text(separator=" ").split())


def split_fragments(text: str, max_chars: int) -> list[str]:
    """Split text into sentence-like fragments no longer than ``max_chars``."""
    fragments: list[str] = []
    for match in _FRAGMENT_PATTERN.finditer(text):
        fragment = match.group().strip()
        if not fragment:
            continue
        if len(fragment) <= max_chars:
            fragments.append(fragment)
        else:
            fragments.extend(textwrap.wrap(fragment, width=max_chars, break_long_words=True))
    return fragments


class ContentSegmenter:
    """Segment a page into chunks of at most ``max_chunk_chars`` characters.

    Fragments are accumulated greedily: when appending the next fragment
    would overflow the buffer, the buffer is closed as a chunk and the
    fragment starts a new one.

    Args:
        max_chunk_chars: Upper bound on chunk text length.
    """

    def __init__(self, max_chunk_chars: int = 1000) -> None:
        if max_chunk_chars <= 0:
            raise ValueError("max_chunk_chars must be positive")
        self._max_chars = max_chunk_chars

    @property
    def max_chunk_chars(self) -> int:
        return self._max_chars

    def segment(self, html: str, parent_id: str) -> list[ContentChunk]:
        """Segment a page's markup into content chunks.

        Args:
            html: Raw page markup.
            parent_id: Identifier of the page (its URL).

        Returns:
            Ordered chunks with ids ``chunk_<parent_id>_<n>``. Empty when the
            page has no visible text.
        """
        text = extract_visible_text(html)
        chunks: list[ContentChunk] = []
        buffer = ""

        def close(buffered: str) -> None:
            chunks.append(
                ContentChunk(
                    id=f"chunk_{parent_id}_{len(chunks)}",
                    text=buffered,
                    parent_id=parent_id,
                )
            )

        for fragment in split_fragments(text, self._max_chars):
            candidate = f"{buffer} {fragment}" if buffer else fragment
            if len(candidate) > self._max_chars:
                close(buffer)
                buffer = fragment
            else:
                buffer = candidate

        if buffer:
            close(buffer)

        logger.debug("Segmented %s into %d chunks", parent_id, len(chunks))
        return chunks
