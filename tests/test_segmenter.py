"""Tests for the content segmenter."""

import pytest

from site_explorer.segmenter import ContentSegmenter, extract_visible_text, split_fragments

PAGE = """\
<html>
  <head><title>Ignored title</title><style>body { color: red; }</style></head>
  <body>
    <!-- internal note: do not publish -->
    <h1>Welcome to SoftoAI</h1>
    <p>We build robots. Our team is small!</p>
    <script>var secret = "tracking";</script>
    <noscript>Enable JavaScript</noscript>
    <div hidden>Hidden attribute text.</div>
    <p class="hidden">Hidden class text.</p>
    <p style="display: none">Inline hidden text.</p>
    <p>Contact us at kontakt@softoai.whatever</p>
  </body>
</html>
"""


def test_extract_visible_text_strips_non_content() -> None:
    text = extract_visible_text(PAGE)
    assert "Welcome to SoftoAI" in text
    assert "We build robots." in text
    assert "kontakt@softoai.whatever" in text
    for unwanted in (
        "internal note",
        "tracking",
        "color: red",
        "Enable JavaScript",
        "Hidden attribute",
        "Hidden class",
        "Inline hidden",
        "Ignored title",
    ):
        assert unwanted not in text


def test_extract_visible_text_collapses_whitespace() -> None:
    text = extract_visible_text("<body><p>One\n\n   two</p>\n<p>three</p></body>")
    assert text == "One two three"


def test_split_fragments_on_terminal_punctuation() -> None:
    fragments = split_fragments("First one. Second one! Third one? Trailing text", 1000)
    assert fragments == ["First one.", "Second one!", "Third one?", "Trailing text"]


def test_split_fragments_wraps_overlong_fragment() -> None:
    text = " ".join(["word"] * 50) + "."
    fragments = split_fragments(text, 40)
    assert len(fragments) > 1
    assert all(len(f) <= 40 for f in fragments)


def test_segment_single_chunk() -> None:
    segmenter = ContentSegmenter()
    chunks = segmenter.segment("<p>One. Two! Three?</p>", "https://site.test")
    assert len(chunks) == 1
    assert chunks[0].text == "One. Two! Three?"
    assert chunks[0].id == "chunk_https://site.test_0"
    assert chunks[0].parent_id == "https://site.test"
    assert chunks[0].urls == []
    assert chunks[0].embedding is None


def test_segment_respects_length_bound() -> None:
    sentences = " ".join(f"Sentence number {i} is here." for i in range(40))
    segmenter = ContentSegmenter(max_chunk_chars=100)
    chunks = segmenter.segment(f"<p>{sentences}</p>", "page")

    assert len(chunks) > 1
    assert all(len(c.text) <= 100 for c in chunks)
    assert [c.id for c in chunks] == [f"chunk_page_{i}" for i in range(len(chunks))]
    # Nothing is lost or reordered
    assert " ".join(c.text for c in chunks) == sentences


def test_segment_chunk_closes_before_overflow() -> None:
    segmenter = ContentSegmenter(max_chunk_chars=20)
    chunks = segmenter.segment("<p>Aaaa bbbb. Cccc dddd. Eeee.</p>", "p")
    assert [c.text for c in chunks] == ["Aaaa bbbb.", "Cccc dddd. Eeee."]


def test_segment_no_empty_chunks() -> None:
    segmenter = ContentSegmenter(max_chunk_chars=30)
    text = "A" * 100 + ". Short one."
    chunks = segmenter.segment(f"<p>{text}</p>", "p")
    assert chunks
    assert all(c.text for c in chunks)
    assert all(len(c.text) <= 30 for c in chunks)


@pytest.mark.parametrize(
    "html",
    [
        "",
        "<html><body></body></html>",
        "<body><script>only()</script><!-- comment --></body>",
        "<body><div hidden>Invisible.</div></body>",
    ],
)
def test_segment_page_without_text_yields_no_chunks(html: str) -> None:
    assert ContentSegmenter().segment(html, "empty") == []


def test_segmenter_rejects_non_positive_bound() -> None:
    with pytest.raises(ValueError):
        ContentSegmenter(max_chunk_chars=0)


def test_split_fragments_keeps_emails_and_hostnames_intact() -> None:
    fragments = split_fragments("Write to kontakt@softoai.whatever today. Visit softo.ag3nts.org", 1000)
    assert fragments == ["Write to kontakt@softoai.whatever today.", "Visit softo.ag3nts.org"]
