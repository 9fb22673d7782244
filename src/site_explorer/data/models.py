"""Core data models for site exploration."""

from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np
from numpy.typing import NDArray


class ExplorationStatus(StrEnum):
    """Lifecycle of a single question's exploration.

    ``SEEDED -> EXPLORING -> {ANSWERED | EXHAUSTED}``
    """

    SEEDED = "seeded"
    EXPLORING = "exploring"
    ANSWERED = "answered"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Question:
    """A natural-language question to answer from the site."""

    id: str
    text: str


@dataclass(frozen=True)
class LinkScore:
    """Relevance of a link for one question, as judged by the answering oracle."""

    score: float
    reasoning: str = ""


@dataclass
class URLMetadata:
    """Anchor metadata collected for a link while scoring a page."""

    url: str
    text: str = ""
    title: str | None = None
    context: str = ""
    scores: dict[str, LinkScore] = field(default_factory=dict)


@dataclass
class URLNode:
    """A discovered link waiting in (or popped from) the frontier."""

    id: str
    url: str
    relevance_score: float
    question_ids: tuple[str, ...]
    parent_chunk_id: str
    visited: bool = False
    confidence: float = 0.0
    reasoning: str = ""
    metadata: URLMetadata | None = None

    @property
    def priority(self) -> float:
        """Frontier ordering key."""
        return self.relevance_score * (1 + self.confidence)


@dataclass
class ContentChunk:
    """A bounded-length segment of a page's visible text."""

    id: str
    text: str
    parent_id: str
    urls: list[URLNode] = field(default_factory=list)
    embedding: NDArray[np.float32] | None = None


@dataclass(frozen=True)
class ContentValidation:
    """Result of the lightweight "is this chunk worth analysing" check."""

    is_valid: bool
    confidence: float = 0.0
    reasoning: str = ""


@dataclass(frozen=True)
class ExtractionResult:
    """Raw outcome of an answer-extraction request."""

    found: bool
    content: str = ""
    confidence: float = 0.0
    found_in_url: str | None = None
    reasoning: str = ""


@dataclass(frozen=True)
class Answer:
    """A committed answer for a question.

    ``source_path`` lists the chunk ids used as evidence, primary chunk first.
    """

    question_id: str
    content: str
    confidence: float
    source_path: tuple[str, ...] = ()
    reasoning: str = ""


@dataclass(frozen=True)
class QuestionOutcome:
    """Final result of exploring the site for one question."""

    question_id: str
    status: ExplorationStatus
    answer: Answer | None
    pages_visited: int


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single oracle call, tagged with the model that served it."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class Usage:
    """Accumulated oracle and fetcher usage across an exploration run."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    embedding_requests: int = 0
    page_fetches: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    @property
    def cache_creation_input_tokens(self) -> int:
        return sum(c.cache_creation_input_tokens for c in self.api_calls)

    @property
    def cache_read_input_tokens(self) -> int:
        return sum(c.cache_read_input_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            embedding_requests=self.embedding_requests + other.embedding_requests,
            page_fetches=self.page_fetches + other.page_fetches,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.embedding_requests += other.embedding_requests
        self.page_fetches += other.page_fetches
        return self
