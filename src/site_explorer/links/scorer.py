"""Batched link relevance scoring via the answering oracle."""

import logging

from site_explorer.data import LinkScore, Question, URLMetadata, URLNode
from site_explorer.errors import OracleError
from site_explorer.links.extractor import extract_links, is_valid_url, normalize_url
from site_explorer.oracle.base import AnsweringOracle
from site_explorer.oracle.contracts import LinkScoresResponse, clamp_unit, parse_oracle_json

logger = logging.getLogger(__name__)

RESPONSE_EXAMPLE = (
    '{"scores":[{"url":"https://example.com/page1","relevanceScore":0.8,'
    '"reasoning":"explanation"}]}'
)


def _link_to_prompt_text(meta: URLMetadata, index: int) -> str:
    """Format a link for inclusion in the scoring prompt."""
    return (
        f"URL {index + 1}:\n"
        f"- URL: {meta.url}\n"
        f"- Link text: {meta.text}\n"
        f"- Title: {meta.title or 'none'}\n"
        f"- Context: {meta.context}"
    )


def build_scoring_prompt(question: Question, links: list[URLMetadata]) -> str:
    link_texts = [_link_to_prompt_text(meta, i) for i, meta in enumerate(links)]
    return (
        f"Analyze these URLs for answering this question:\n{question.text}\n\n"
        "URLs to analyze:\n\n" + "\n\n".join(link_texts) + "\n\n"
        "Score each URL's relevance (0-1) for answering the question. "
        "Compare URLs to each other.\n\n"
        "RESPOND WITH RAW JSON ONLY. NO BACKTICKS. NO FORMATTING. EXAMPLE:\n"
        f"{RESPONSE_EXAMPLE}\n\n"
        "YOUR RESPONSE:"
    )


class LinkScorer:
    """Extract a page's links and score them for one question in a single call.

    Failures degrade softly: an oracle error or malformed response yields no
    links for the page, and a returned URL that fails syntax validation is
    dropped with a warning without affecting its siblings.

    Args:
        oracle: Answering oracle used for scoring.
        site_root: Root used to resolve relative hrefs.
    """

    def __init__(self, oracle: AnsweringOracle, site_root: str) -> None:
        self._oracle = oracle
        self._site_root = site_root

    async def score(self, html: str, parent_id: str, question: Question) -> list[URLNode]:
        """Score every link on a page for a question.

        Args:
            html: Raw page markup.
            parent_id: Identifier of the page the links were found on.
            question: Question the links are scored against.

        Returns:
            One node per valid scored link, scores clamped to [0, 1], in the
            order the oracle returned them.
        """
        links = extract_links(html, self._site_root)
        if not links:
            return []

        try:
            raw = await self._oracle.answer(build_scoring_prompt(question, links))
            response = parse_oracle_json(raw, LinkScoresResponse)
        except OracleError as e:
            logger.warning("Link scoring failed for %s: %s", parent_id, e)
            return []

        by_url = {meta.url: meta for meta in links}
        nodes: list[URLNode] = []
        for scored in response.scores:
            if not is_valid_url(scored.url.strip()):
                logger.warning("Invalid URL skipped: %r", scored.url)
                continue
            url = normalize_url(scored.url)

            relevance = clamp_unit(scored.relevance_score)
            metadata = by_url.get(url)
            if metadata is not None:
                metadata.scores[question.id] = LinkScore(score=relevance, reasoning=scored.reasoning)

            nodes.append(
                URLNode(
                    id=f"url_{parent_id}_{len(nodes)}",
                    url=url,
                    relevance_score=relevance,
                    question_ids=(question.id,),
                    parent_chunk_id=parent_id,
                    reasoning=scored.reasoning,
                    metadata=metadata,
                )
            )

        logger.debug("Scored %d of %d links on %s", len(nodes), len(links), parent_id)
        return nodes
