"""Data models for site exploration."""

from site_explorer.data.models import (
    Answer,
    APICallUsage,
    ContentChunk,
    ContentValidation,
    ExplorationStatus,
    ExtractionResult,
    LinkScore,
    Question,
    QuestionOutcome,
    URLMetadata,
    URLNode,
    Usage,
)

__all__ = [
    "APICallUsage",
    "Answer",
    "ContentChunk",
    "ContentValidation",
    "ExplorationStatus",
    "ExtractionResult",
    "LinkScore",
    "Question",
    "QuestionOutcome",
    "URLMetadata",
    "URLNode",
    "Usage",
]
