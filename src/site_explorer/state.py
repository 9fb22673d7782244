"""Per-question exploration state."""

from dataclasses import dataclass, field

from site_explorer.cache import ChunkCache
from site_explorer.data import Answer, ExplorationStatus, Question
from site_explorer.frontier import Frontier


@dataclass
class ExplorationState:
    """All mutable data for one question's exploration.

    Created fresh for every question and threaded through each helper; nothing
    in it survives into the next question.
    """

    question: Question
    cache: ChunkCache
    max_pages: int = 10
    frontier: Frontier = field(default_factory=Frontier)
    visited: set[str] = field(default_factory=set)
    pages_visited: int = 0
    answer: Answer | None = None
    status: ExplorationStatus = ExplorationStatus.SEEDED

    @property
    def budget_exhausted(self) -> bool:
        return self.pages_visited >= self.max_pages

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)
        self.pages_visited += 1

    def commit(self, answer: Answer) -> None:
        """Record an answer, replacing any previously committed one."""
        self.answer = answer

    def has_answer_above(self, threshold: float) -> bool:
        return self.answer is not None and self.answer.confidence > threshold
