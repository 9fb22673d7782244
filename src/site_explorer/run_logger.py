"""Run logger for exploration events and the JSON run record."""

import dataclasses
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from site_explorer.data import QuestionOutcome, Usage
from site_explorer.events import ExplorationEvent
from site_explorer.state import ExplorationState

logger = logging.getLogger(__name__)


class StateSnapshot(BaseModel):
    """Exploration counters at the time an event was logged."""

    status: str
    pages_visited: int
    max_pages: int
    frontier_size: int
    visited_urls: int
    cached_chunks: int
    answer_confidence: float | None = None


class EventRecord(BaseModel):
    """A single logged exploration event."""

    question_id: str
    timestamp: str
    event: ExplorationEvent
    state: StateSnapshot | None = None


class RunRecord(BaseModel):
    """Record of a complete exploration run."""

    run_id: str
    site_root: str
    questions: dict[str, str]
    started_at: str
    completed_at: str | None = None
    events: list[EventRecord] = []
    outcomes: list[dict[str, Any]] = []
    answers: dict[str, str] = {}
    total_usage: dict[str, Any] | None = None


def _serialize(obj: Any) -> Any:
    """Serialize an object to JSON-compatible format.

    Handles dataclasses, Pydantic models, lists, dicts, and primitives.
    For Usage objects, includes computed property summaries.
    """
    if obj is None:
        return None
    if isinstance(obj, Usage):
        return {
            "api_calls": [_serialize(c) for c in obj.api_calls],
            "embedding_requests": obj.embedding_requests,
            "page_fetches": obj.page_fetches,
            "input_tokens": obj.input_tokens,
            "output_tokens": obj.output_tokens,
            "cache_creation_input_tokens": obj.cache_creation_input_tokens,
            "cache_read_input_tokens": obj.cache_read_input_tokens,
        }
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _serialize(dataclasses.asdict(obj))
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    if isinstance(obj, dict):
        return {k: _serialize(v) for k, v in obj.items()}
    if isinstance(obj, Path):
        return str(obj)
    return obj


def snapshot(state: ExplorationState) -> StateSnapshot:
    """Capture the loggable counters of an exploration state."""
    return StateSnapshot(
        status=state.status.value,
        pages_visited=state.pages_visited,
        max_pages=state.max_pages,
        frontier_size=len(state.frontier),
        visited_urls=len(state.visited),
        cached_chunks=len(state.cache),
        answer_confidence=state.answer.confidence if state.answer else None,
    )


class RunLogger:
    """Single consumer of exploration events.

    Every event is written to the module logger. When ``enabled`` is True the
    events are also accumulated, with a state snapshot, into a run record that
    :meth:`finish_run` writes as one JSON file per run.

    Args:
        log_dir: Directory to write JSON log files.
        enabled: If False, no run record is kept or written.
    """

    def __init__(self, log_dir: Path = Path("logs"), *, enabled: bool = True) -> None:
        self._log_dir = log_dir
        self._enabled = enabled
        self._record: RunRecord | None = None
        self._last_log_path: Path | None = None

    @property
    def enabled(self) -> bool:
        """Whether run records are kept."""
        return self._enabled

    @property
    def last_log_path(self) -> Path | None:
        """Path to the last written log file, or None."""
        return self._last_log_path

    @property
    def record(self) -> RunRecord | None:
        """The run record in progress, if any."""
        return self._record

    def start_run(self, site_root: str, questions: dict[str, str]) -> None:
        if not self._enabled:
            return

        self._record = RunRecord(
            run_id=str(uuid.uuid4()),
            site_root=site_root,
            questions=dict(questions),
            started_at=datetime.now(tz=UTC).isoformat(),
        )

    def log_event(
        self,
        question_id: str,
        event: ExplorationEvent,
        state: ExplorationState | None = None,
    ) -> None:
        """Log an event and, when enabled, append it to the run record.

        Args:
            question_id: Question being explored.
            event: The event to log.
            state: Current exploration state, snapshotted into the record.
        """
        details = event.model_dump_json(exclude={"type"})
        if state is not None:
            logger.info(
                "[Q%s %d/%d] %s: %s",
                question_id,
                state.pages_visited,
                state.max_pages,
                event.type.upper(),
                details,
            )
        else:
            logger.info("[Q%s] %s: %s", question_id, event.type.upper(), details)

        if not self._enabled or self._record is None:
            return

        self._record.events.append(
            EventRecord(
                question_id=question_id,
                timestamp=datetime.now(tz=UTC).isoformat(),
                event=event,
                state=snapshot(state) if state is not None else None,
            )
        )

    def log_outcome(self, outcome: QuestionOutcome) -> None:
        logger.info(
            "Question %s finished: %s after %d page(s)",
            outcome.question_id,
            outcome.status.value,
            outcome.pages_visited,
        )
        if not self._enabled or self._record is None:
            return
        self._record.outcomes.append(_serialize(outcome))

    def finish_run(self, answers: dict[str, str], usage: Usage | None) -> Path | None:
        """Write the run record to a JSON file.

        Args:
            answers: Final answer mapping.
            usage: Total accumulated usage.

        Returns:
            Path to the written JSON file, or None if logging is disabled.
        """
        if not self._enabled or self._record is None:
            return None

        self._record.completed_at = datetime.now(tz=UTC).isoformat()
        self._record.answers = dict(answers)
        self._record.total_usage = _serialize(usage) if usage is not None else None

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # run_2026-02-12T14-30-00.json
        ts = self._record.started_at.replace(":", "-")
        ts = ts.split(".")[0].split("+")[0]
        filepath = self._log_dir / f"run_{ts}.json"

        filepath.write_text(self._record.model_dump_json(indent=2))
        self._last_log_path = filepath
        return filepath
