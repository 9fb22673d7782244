"""Question-guided exploration of a single site."""

import asyncio
import logging
from typing import cast

from site_explorer.cache import ChunkCache
from site_explorer.data import (
    Answer,
    ContentChunk,
    ExplorationStatus,
    Question,
    QuestionOutcome,
    URLNode,
    Usage,
)
from site_explorer.errors import FetchError, OracleError
from site_explorer.events import (
    ChunksEvent,
    EnqueueEvent,
    ExplorationEvent,
    ParseEvent,
    ScrapeEvent,
    TransitionEvent,
    VisitEvent,
    YieldEvent,
)
from site_explorer.extractor import AnswerExtractor
from site_explorer.fetch.base import PageFetcher
from site_explorer.links.extractor import normalize_url
from site_explorer.links.scorer import LinkScorer
from site_explorer.oracle.base import AnsweringOracle, EmbeddingOracle
from site_explorer.run_logger import RunLogger
from site_explorer.segmenter import ContentSegmenter
from site_explorer.state import ExplorationState

logger = logging.getLogger(__name__)


class SiteExplorer:
    """Explore a site page by page to answer a set of questions.

    Questions are explored one after another, each with a fresh
    :class:`ExplorationState`. For each question the site root is visited
    first, then the highest-priority unvisited frontier link, until an answer
    clears ``answer_threshold`` (ANSWERED) or the frontier empties or
    ``max_pages`` pages have been visited (EXHAUSTED).

    Flow per page:
    1. Fetch and segment into chunks; embed all chunks concurrently
    2. Validate and extract each chunk, stopping at a committed answer
    3. Otherwise score the page's links and enqueue the relevant unvisited ones

    Args:
        oracle: Answering oracle used for scoring, validation and extraction.
        embedder: Embedding oracle for chunk similarity.
        fetcher: Page fetcher.
        site_root: Seed URL, also the base for relative links.
        max_pages: Page budget per question, seed included.
        enqueue_threshold: Relevance a link must strictly exceed to be enqueued.
        answer_threshold: Confidence an answer must strictly exceed.
        related_link_threshold: Relevance bar for links offered as context.
        similarity_threshold: Cosine similarity bar for related chunks.
        max_chunk_chars: Upper bound on chunk length.
        validation_word_limit: Words of each chunk sent for validation.
        run_logger: Event sink (a non-recording logger by default).
    """

    def __init__(
        self,
        oracle: AnsweringOracle,
        embedder: EmbeddingOracle,
        fetcher: PageFetcher,
        *,
        site_root: str,
        max_pages: int = 10,
        enqueue_threshold: float = 0.3,
        answer_threshold: float = 0.8,
        related_link_threshold: float = 0.7,
        similarity_threshold: float = 0.8,
        max_chunk_chars: int = 1000,
        validation_word_limit: int = 100,
        run_logger: RunLogger | None = None,
    ) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self._oracle = oracle
        self._embedder = embedder
        self._fetcher = fetcher
        self._site_root = site_root
        self._seed_url = normalize_url(site_root)
        self._max_pages = max_pages
        self._enqueue_threshold = enqueue_threshold
        self._answer_threshold = answer_threshold
        self._run_logger = run_logger or RunLogger(enabled=False)
        self._segmenter = ContentSegmenter(max_chunk_chars)
        self._scorer = LinkScorer(oracle, site_root)
        self._extractor = AnswerExtractor(
            oracle,
            answer_threshold=answer_threshold,
            related_link_threshold=related_link_threshold,
            similarity_threshold=similarity_threshold,
            validation_word_limit=validation_word_limit,
            run_logger=self._run_logger,
        )

    @property
    def site_root(self) -> str:
        return self._site_root

    async def aclose(self) -> None:
        """Close the page fetcher's connections."""
        await self._fetcher.aclose()

    @property
    def usage(self) -> Usage:
        """Combined usage of the oracles and the fetcher."""
        return self._oracle.usage + self._embedder.usage + self._fetcher.usage

    async def explore(self, questions: dict[str, str]) -> dict[str, str]:
        """Explore the site for every question and report the answers.

        Args:
            questions: Mapping of question id to question text.

        Returns:
            Mapping of question id to answer content, for answered questions
            only.
        """
        self._run_logger.start_run(self._site_root, questions)

        outcomes = await self.explore_all(
            [Question(id=qid, text=text) for qid, text in questions.items()]
        )
        answers = {o.question_id: o.answer.content for o in outcomes if o.answer is not None}

        self._run_logger.finish_run(answers, self.usage)
        return answers

    async def explore_all(self, questions: list[Question]) -> list[QuestionOutcome]:
        """Explore questions strictly one after another."""
        outcomes: list[QuestionOutcome] = []
        for question in questions:
            outcome = await self.explore_question(question)
            self._run_logger.log_outcome(outcome)
            outcomes.append(outcome)
        return outcomes

    async def explore_question(self, question: Question) -> QuestionOutcome:
        """Run the exploration loop for a single question.

        Returns:
            Final status, committed answer (if any) and pages visited.
        """
        logger.info("Starting exploration for question %s: %s", question.id, question.text)
        state = ExplorationState(
            question=question,
            cache=ChunkCache(self._embedder),
            max_pages=self._max_pages,
        )
        self._transition(state, ExplorationStatus.EXPLORING)

        next_url: str | None = self._seed_url
        while next_url is not None and not state.budget_exhausted:
            await self._explore_page(next_url, state)
            if state.has_answer_above(self._answer_threshold):
                break
            next_url = self._next_unvisited(state)

        if state.has_answer_above(self._answer_threshold):
            self._transition(state, ExplorationStatus.ANSWERED)
            answer: Answer | None = state.answer
        else:
            self._transition(state, ExplorationStatus.EXHAUSTED)
            answer = None

        return QuestionOutcome(
            question_id=question.id,
            status=state.status,
            answer=answer,
            pages_visited=state.pages_visited,
        )

    def _transition(self, state: ExplorationState, to_status: ExplorationStatus) -> None:
        self._log(state, TransitionEvent(from_status=state.status, to_status=to_status))
        state.status = to_status

    def _log(self, state: ExplorationState, event: ExplorationEvent) -> None:
        self._run_logger.log_event(state.question.id, event, state)

    def _next_unvisited(self, state: ExplorationState) -> str | None:
        """Pop frontier nodes until one points at an unvisited URL."""
        while not state.frontier.is_empty():
            node = cast(URLNode, state.frontier.dequeue())
            if node.url in state.visited:
                self._log(state, YieldEvent(reason="URL already visited", url=node.url))
                continue
            node.visited = True
            return node.url
        return None

    async def _explore_page(self, url: str, state: ExplorationState) -> None:
        """Visit one page. Failures abandon the page, never the question."""
        self._log(state, VisitEvent(url=url))
        if url in state.visited:
            self._log(state, YieldEvent(reason="URL already visited", url=url))
            return

        state.mark_visited(url)
        self._log(state, ScrapeEvent(url=url))
        try:
            html = await self._fetcher.fetch(url)
        except FetchError as e:
            self._log(state, YieldEvent(reason=f"Error exploring URL: {e}", url=url))
            return

        self._log(state, ParseEvent(url=url, content_length=len(html)))
        try:
            chunks = await self._process_content(html, url, state)
        except OracleError as e:
            self._log(state, YieldEvent(reason=f"Error embedding page content: {e}", url=url))
            return

        for chunk in chunks:
            answer = await self._extractor.analyze(chunk, state)
            if answer is not None and answer.confidence > self._answer_threshold:
                return

        # Scored only after extraction, so the chunks above were analyzed with
        # no related links.
        links = await self._scorer.score(html, url, state.question)
        for chunk in chunks:
            chunk.urls = links
        self._enqueue_links(links, state)

    async def _process_content(
        self, html: str, url: str, state: ExplorationState
    ) -> list[ContentChunk]:
        """Segment a page, embed its chunks concurrently and cache them."""
        chunks = self._segmenter.segment(html, url)
        embeddings = await asyncio.gather(*(self._embedder.embed(c.text) for c in chunks))
        for chunk, embedding in zip(chunks, embeddings, strict=True):
            chunk.embedding = embedding
            state.cache.add(chunk)

        self._log(
            state,
            ChunksEvent(
                url=url,
                count=len(chunks),
                first_chunk=chunks[0].text[:100] if chunks else None,
            ),
        )
        return chunks

    def _enqueue_links(self, links: list[URLNode], state: ExplorationState) -> None:
        for node in links:
            if node.relevance_score <= self._enqueue_threshold:
                continue
            if node.url in state.visited:
                continue
            state.frontier.enqueue(node)
            self._log(state, EnqueueEvent(url=node.url, relevance_score=node.relevance_score))
