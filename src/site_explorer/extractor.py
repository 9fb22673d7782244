"""Confidence-gated answer extraction from content chunks."""

import logging

from site_explorer.data import Answer, ContentChunk, ContentValidation, ExtractionResult, URLNode
from site_explorer.errors import OracleError
from site_explorer.events import AnswerEvent, ReasonEvent, ValidateEvent, YieldEvent
from site_explorer.oracle.base import AnsweringOracle
from site_explorer.oracle.contracts import (
    ExtractionResponse,
    ValidationResponse,
    clamp_unit,
    json_prompt,
    parse_oracle_json,
)
from site_explorer.run_logger import RunLogger
from site_explorer.state import ExplorationState

logger = logging.getLogger(__name__)

VALIDATION_FORMAT = """\
{
  "isValid": boolean,
  "confidence": number_between_0_and_1,
  "reasoning": "brief_explanation"
}"""

EXTRACTION_FORMAT = """\
{
  "answer": {
    "found": boolean,
    "content": "string_or_empty",
    "confidence": number_between_0_and_1,
    "foundInUrl": "string_or_empty",
    "reasoning": "explanation of why this is or isn't an answer"
  }
}"""

EXTRACTION_RULES = """\
IMPORTANT:
1. Only return an answer if it's explicitly found in the content or URLs above
2. Do not make assumptions or generate answers
3. If no clear answer is found, set found=false
4. A URL found in the text might also be an answer, but it's not guaranteed. \
Check the URLs' metadata for more context."""

NO_ANSWER = ExtractionResult(found=False, reasoning="No answer found")


def _link_to_prompt_text(node: URLNode) -> str:
    meta = node.metadata
    return (
        f"URL: {node.url}\n"
        f"Link text: {meta.text if meta else ''}\n"
        f"Context: {meta.context if meta else ''}"
    )


def build_extraction_prompt(
    chunk: ContentChunk,
    question_text: str,
    similar: list[ContentChunk],
    links: list[URLNode],
) -> str:
    content = (
        f"Primary content:\n{chunk.text}\n\n"
        "Related context:\n" + "\n---\n".join(c.text for c in similar) + "\n\n"
        "Found relevant URLs:\n" + "\n\n".join(_link_to_prompt_text(n) for n in links) + "\n\n"
        f"{EXTRACTION_RULES}\n\n"
        f"Question:\n{question_text}"
    )
    return json_prompt(content, EXTRACTION_FORMAT)


class AnswerExtractor:
    """Decide whether a chunk answers the current question.

    Each chunk first passes a cheap validation call over its leading words;
    only valid chunks get the full extraction request, which includes
    similar cached chunks and strongly relevant links as context. Oracle
    failures and malformed responses mean "no answer" and never propagate.

    Args:
        oracle: Answering oracle.
        answer_threshold: Confidence an extraction must strictly exceed to
            be committed.
        related_link_threshold: Relevance a chunk link must strictly exceed
            to be offered as context.
        similarity_threshold: Cosine similarity bound for related chunks.
        validation_word_limit: Words of the chunk sent for validation.
        run_logger: Event sink.
    """

    def __init__(
        self,
        oracle: AnsweringOracle,
        *,
        answer_threshold: float = 0.8,
        related_link_threshold: float = 0.7,
        similarity_threshold: float = 0.8,
        validation_word_limit: int = 100,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._oracle = oracle
        self._answer_threshold = answer_threshold
        self._related_link_threshold = related_link_threshold
        self._similarity_threshold = similarity_threshold
        self._validation_word_limit = validation_word_limit
        self._run_logger = run_logger or RunLogger(enabled=False)

    async def validate(self, chunk: ContentChunk) -> ContentValidation:
        """Check whether a chunk holds meaningful content.

        Falls back to an invalid result if the oracle fails.
        """
        preview = " ".join(chunk.text.split()[: self._validation_word_limit])
        try:
            raw = await self._oracle.answer(json_prompt(preview, VALIDATION_FORMAT))
            response = parse_oracle_json(raw, ValidationResponse)
        except OracleError as e:
            logger.warning("Failed to validate chunk %s: %s", chunk.id, e)
            return ContentValidation(
                is_valid=False, confidence=0.0, reasoning="Failed to validate content"
            )
        return ContentValidation(
            is_valid=response.is_valid,
            confidence=clamp_unit(response.confidence),
            reasoning=response.reasoning,
        )

    def related_links(self, chunk: ContentChunk, question_id: str) -> list[URLNode]:
        """Links on the chunk scored for this question above the related-link bar."""
        return [
            node
            for node in chunk.urls
            if question_id in node.question_ids
            and node.relevance_score > self._related_link_threshold
        ]

    async def extract(
        self, chunk: ContentChunk, state: ExplorationState
    ) -> tuple[ExtractionResult, list[ContentChunk]]:
        """Ask the oracle whether the chunk answers the question.

        Returns:
            Tuple of (extraction result, similar chunks used as context).
            The result is "not found" if any oracle call fails.
        """
        try:
            similar = await state.cache.find_similar(
                chunk.text, self._similarity_threshold, exclude_id=chunk.id
            )
            prompt = build_extraction_prompt(
                chunk,
                state.question.text,
                similar,
                self.related_links(chunk, state.question.id),
            )
            raw = await self._oracle.answer(prompt)
            response = parse_oracle_json(raw, ExtractionResponse)
        except OracleError as e:
            self._run_logger.log_event(
                state.question.id,
                YieldEvent(reason=f"Error analyzing chunk {chunk.id}: {e}"),
                state,
            )
            return (NO_ANSWER, [])

        extracted = response.answer
        result = ExtractionResult(
            found=extracted.found,
            content=extracted.content.strip(),
            confidence=clamp_unit(extracted.confidence),
            found_in_url=(extracted.found_in_url or "").strip() or None,
            reasoning=extracted.reasoning,
        )
        return (result, similar)

    async def analyze(self, chunk: ContentChunk, state: ExplorationState) -> Answer | None:
        """Validate, extract and, if confident enough, commit an answer.

        Args:
            chunk: Chunk to analyze.
            state: Exploration state of the current question; a committed
                answer replaces ``state.answer``.

        Returns:
            The committed answer, or None.
        """
        question_id = state.question.id
        validation = await self.validate(chunk)
        self._run_logger.log_event(
            question_id,
            ValidateEvent(
                chunk_id=chunk.id,
                is_valid=validation.is_valid,
                confidence=validation.confidence,
                reasoning=validation.reasoning,
            ),
            state,
        )
        if not validation.is_valid:
            return None

        result, similar = await self.extract(chunk, state)
        content = result.found_in_url or result.content
        if not (result.found and result.confidence > self._answer_threshold and content):
            self._run_logger.log_event(
                question_id,
                ReasonEvent(
                    chunk_id=chunk.id,
                    context=result.reasoning or "No valid answer found in content",
                ),
                state,
            )
            return None

        answer = Answer(
            question_id=question_id,
            content=content,
            confidence=result.confidence,
            source_path=(chunk.id, *(c.id for c in similar)),
            reasoning=result.reasoning,
        )
        state.commit(answer)
        self._run_logger.log_event(
            question_id,
            AnswerEvent(
                question_id=question_id,
                preview=answer.content[:100],
                confidence=answer.confidence,
                source_path=list(answer.source_path),
                reasoning=answer.reasoning,
            ),
            state,
        )
        return answer
