"""Site Explorer: question-guided exploration of a website with LLM oracles."""

from site_explorer.cache import ChunkCache, cosine_similarity
from site_explorer.config import SiteExplorerConfig, create_from_config, load_config
from site_explorer.data import (
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
from site_explorer.errors import (
    FetchError,
    OracleError,
    OracleFormatError,
    ReportError,
    SiteExplorerError,
)
from site_explorer.explorer import SiteExplorer
from site_explorer.extractor import AnswerExtractor
from site_explorer.fetch import HttpxFetcher, PageFetcher
from site_explorer.frontier import Frontier
from site_explorer.links import LinkScorer, extract_links, resolve_url
from site_explorer.oracle import (
    AnsweringOracle,
    ClaudeOracle,
    EmbeddingOracle,
    SentenceTransformerEmbedder,
)
from site_explorer.report import AnswerReporter
from site_explorer.run_logger import RunLogger
from site_explorer.segmenter import ContentSegmenter
from site_explorer.state import ExplorationState

__all__ = [
    # Models
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
    "ExplorationState",
    # Errors
    "FetchError",
    "OracleError",
    "OracleFormatError",
    "ReportError",
    "SiteExplorerError",
    # Functions
    "cosine_similarity",
    "extract_links",
    "resolve_url",
    # Protocols
    "AnsweringOracle",
    "EmbeddingOracle",
    "PageFetcher",
    # Oracles
    "ClaudeOracle",
    "SentenceTransformerEmbedder",
    # Components
    "AnswerExtractor",
    "ChunkCache",
    "ContentSegmenter",
    "Frontier",
    "HttpxFetcher",
    "LinkScorer",
    # Orchestration
    "SiteExplorer",
    # Reporting
    "AnswerReporter",
    # Logging
    "RunLogger",
    # Config
    "SiteExplorerConfig",
    "create_from_config",
    "load_config",
]
