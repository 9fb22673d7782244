"""Tests for link extraction and batched relevance scoring."""

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from site_explorer.data import Question, Usage
from site_explorer.errors import OracleError
from site_explorer.links.extractor import (
    extract_links,
    is_valid_url,
    normalize_url,
    resolve_url,
)
from site_explorer.links.scorer import LinkScorer, build_scoring_prompt

SITE_ROOT = "https://site.test"

PAGE = """\
<html><body>
  <nav>
    <a href="/about" title="About the company">About us</a>
    <a href="portfolio">Portfolio</a>
  </nav>
  <p>Read our <a href="https://blog.site.test/post#comments">latest post</a> today.</p>
  <a href="/about">About again</a>
  <a>No href</a>
  <a href="">Empty</a>
  <a href="javascript:void(0)">Click</a>
  <a href="mailto:kontakt@site.test">Mail</a>
</body></html>
"""


def _scorer_with_response(text: str) -> tuple[LinkScorer, AsyncMock]:
    oracle = MagicMock()
    oracle.usage = Usage()
    oracle.answer = AsyncMock(return_value=text)
    return LinkScorer(oracle, SITE_ROOT), oracle.answer


@pytest.fixture
def question() -> Question:
    return Question(id="01", text="What is the company's email address?")


# -- URL helpers --


@pytest.mark.parametrize(
    ("href", "expected"),
    [
        ("/about", "https://site.test/about"),
        ("about", "https://site.test/about"),
        ("https://other.test/x", "https://other.test/x"),
        ("/page#section", "https://site.test/page"),
        ("  /padded  ", "https://site.test/padded"),
        ("/", "https://site.test/"),
        ("#top", "https://site.test/"),
        ("https://other.test", "https://other.test/"),
        ("https://other.test?page=2", "https://other.test/?page=2"),
    ],
)
def test_resolve_url(href: str, expected: str) -> None:
    assert resolve_url(href, SITE_ROOT) == expected


def test_resolve_url_ignores_trailing_slash_on_root() -> None:
    assert resolve_url("contact", "https://site.test/") == "https://site.test/contact"


@pytest.mark.parametrize(
    "url",
    ["https://site.test", "https://site.test/", "https://site.test/#contact", " https://site.test "],
)
def test_normalize_url_gives_root_one_spelling(url: str) -> None:
    assert normalize_url(url) == "https://site.test/"


def test_normalize_url_keeps_paths_and_queries() -> None:
    assert normalize_url("https://site.test/a/?q=1#x") == "https://site.test/a/?q=1"
    assert normalize_url("https://site.test/a") == "https://site.test/a"


@pytest.mark.parametrize(
    ("url", "valid"),
    [
        ("https://site.test/a", True),
        ("http://site.test", True),
        ("mailto:kontakt@site.test", False),
        ("not a url", False),
        ("https://", False),
        ("/relative/path", False),
        ("https://site.test/with space", False),
    ],
)
def test_is_valid_url(url: str, valid: bool) -> None:
    assert is_valid_url(url) is valid


# -- extract_links --


def test_extract_links_collects_metadata() -> None:
    links = extract_links(PAGE, SITE_ROOT)
    urls = [link.url for link in links]
    assert urls == [
        "https://site.test/about",
        "https://site.test/portfolio",
        "https://blog.site.test/post",
    ]

    about = links[0]
    assert about.text == "About us"
    assert about.title == "About the company"
    assert "Portfolio" in about.context
    assert links[1].title is None
    assert links[2].context == "Read our latest post today."
    assert all(link.scores == {} for link in links)


def test_extract_links_no_anchors() -> None:
    assert extract_links("<p>No links here.</p>", SITE_ROOT) == []


# -- LinkScorer --


def test_build_scoring_prompt_lists_every_link(question: Question) -> None:
    links = extract_links(PAGE, SITE_ROOT)
    prompt = build_scoring_prompt(question, links)
    assert question.text in prompt
    assert "URL 1:" in prompt and "URL 3:" in prompt
    assert "- Title: About the company" in prompt
    assert "- Title: none" in prompt
    assert "relevanceScore" in prompt


async def test_score_returns_nodes_for_all_scored_links(question: Question) -> None:
    response = json.dumps(
        {
            "scores": [
                {"url": "https://site.test/about", "relevanceScore": 0.9, "reasoning": "contact"},
                {"url": "https://site.test/portfolio", "relevanceScore": 0.2, "reasoning": "no"},
                {"url": "https://blog.site.test/post", "relevanceScore": 0.5, "reasoning": "maybe"},
            ]
        }
    )
    scorer, answer = _scorer_with_response(response)

    nodes = await scorer.score(PAGE, "https://site.test", question)

    answer.assert_awaited_once()
    assert [n.url for n in nodes] == [
        "https://site.test/about",
        "https://site.test/portfolio",
        "https://blog.site.test/post",
    ]
    about = nodes[0]
    assert about.id == "url_https://site.test_0"
    assert about.relevance_score == pytest.approx(0.9)
    assert about.question_ids == ("01",)
    assert about.parent_chunk_id == "https://site.test"
    assert about.visited is False
    assert about.confidence == 0.0
    assert about.reasoning == "contact"
    assert about.metadata is not None
    assert about.metadata.text == "About us"
    assert about.metadata.scores["01"].score == pytest.approx(0.9)
    # Low scores are still reported; the explorer decides what to enqueue
    assert nodes[1].relevance_score == pytest.approx(0.2)


async def test_score_clamps_out_of_range_scores(question: Question) -> None:
    response = json.dumps(
        {
            "scores": [
                {"url": "https://site.test/about", "relevanceScore": 1.7, "reasoning": ""},
                {"url": "https://site.test/portfolio", "relevanceScore": -0.4, "reasoning": ""},
            ]
        }
    )
    scorer, _ = _scorer_with_response(response)
    nodes = await scorer.score(PAGE, "p", question)
    assert [n.relevance_score for n in nodes] == [1.0, 0.0]


async def test_score_skips_invalid_urls_with_warning(
    question: Question, caplog: pytest.LogCaptureFixture
) -> None:
    response = json.dumps(
        {
            "scores": [
                {"url": "not a url", "relevanceScore": 0.9, "reasoning": ""},
                {"url": "https://site.test/about", "relevanceScore": 0.8, "reasoning": ""},
            ]
        }
    )
    scorer, _ = _scorer_with_response(response)
    with caplog.at_level(logging.WARNING, logger="site_explorer.links.scorer"):
        nodes = await scorer.score(PAGE, "p", question)

    assert [n.url for n in nodes] == ["https://site.test/about"]
    assert nodes[0].id == "url_p_0"
    assert "Invalid URL skipped" in caplog.text


async def test_score_handles_markdown_fences(question: Question) -> None:
    body = json.dumps(
        {"scores": [{"url": "https://site.test/about", "relevanceScore": 0.6, "reasoning": ""}]}
    )
    scorer, _ = _scorer_with_response(f"```json\n{body}\n```")
    nodes = await scorer.score(PAGE, "p", question)
    assert len(nodes) == 1


@pytest.mark.parametrize(
    "text",
    [
        "this is not json",
        '{"scores": "nope"}',
        '{"scores": [{"url": "https://site.test/about"}]}',
        '[{"url": "https://site.test/about", "relevanceScore": 0.9}]',
        "",
    ],
)
async def test_score_malformed_response_yields_no_links(question: Question, text: str) -> None:
    scorer, _ = _scorer_with_response(text)
    assert await scorer.score(PAGE, "p", question) == []


async def test_score_oracle_error_yields_no_links(question: Question) -> None:
    oracle = MagicMock()
    oracle.answer = AsyncMock(side_effect=OracleError("service unavailable"))
    scorer = LinkScorer(oracle, SITE_ROOT)
    assert await scorer.score(PAGE, "p", question) == []


async def test_score_page_without_links_skips_oracle(question: Question) -> None:
    scorer, answer = _scorer_with_response("{}")
    assert await scorer.score("<p>Nothing to follow.</p>", "p", question) == []
    answer.assert_not_awaited()
