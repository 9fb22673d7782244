"""Closed set of exploration events consumed by the run logger."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from site_explorer.data import ExplorationStatus


class VisitEvent(BaseModel):
    """A page was selected for exploration."""

    type: Literal["visit"] = "visit"
    url: str

    model_config = {"frozen": True}


class ScrapeEvent(BaseModel):
    """A page fetch is about to start."""

    type: Literal["scrape"] = "scrape"
    url: str

    model_config = {"frozen": True}


class ParseEvent(BaseModel):
    """A page was fetched and is being parsed."""

    type: Literal["parse"] = "parse"
    url: str
    content_length: int

    model_config = {"frozen": True}


class ChunksEvent(BaseModel):
    """A page was segmented and its chunks embedded."""

    type: Literal["chunks"] = "chunks"
    url: str
    count: int
    first_chunk: str | None = None

    model_config = {"frozen": True}


class ValidateEvent(BaseModel):
    """A chunk went through the validation gate."""

    type: Literal["validate"] = "validate"
    chunk_id: str
    is_valid: bool
    confidence: float
    reasoning: str = ""

    model_config = {"frozen": True}


class ReasonEvent(BaseModel):
    """Extraction ran on a chunk but did not produce a committed answer."""

    type: Literal["reason"] = "reason"
    chunk_id: str
    context: str

    model_config = {"frozen": True}


class AnswerEvent(BaseModel):
    """An answer was committed."""

    type: Literal["answer"] = "answer"
    question_id: str
    preview: str
    confidence: float
    source_path: list[str] = Field(default_factory=list)
    reasoning: str = ""

    model_config = {"frozen": True}


class EnqueueEvent(BaseModel):
    """A scored link entered the frontier."""

    type: Literal["enqueue"] = "enqueue"
    url: str
    relevance_score: float

    model_config = {"frozen": True}


class YieldEvent(BaseModel):
    """Work on a page, link or chunk was abandoned."""

    type: Literal["yield"] = "yield"
    reason: str
    url: str | None = None

    model_config = {"frozen": True}


class TransitionEvent(BaseModel):
    """The question's exploration changed status."""

    type: Literal["transition"] = "transition"
    from_status: ExplorationStatus
    to_status: ExplorationStatus

    model_config = {"frozen": True}


ExplorationEvent = Annotated[
    VisitEvent
    | ScrapeEvent
    | ParseEvent
    | ChunksEvent
    | ValidateEvent
    | ReasonEvent
    | AnswerEvent
    | EnqueueEvent
    | YieldEvent
    | TransitionEvent,
    Field(discriminator="type"),
]
