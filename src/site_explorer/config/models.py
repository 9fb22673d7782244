"""Pydantic configuration models for site explorer components."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

# ============================================================
# Explorer Config
# ============================================================


class ExplorerConfig(BaseModel):
    """Configuration for the exploration loop and its thresholds."""

    site_root: str = "https://softo.ag3nts.org"
    max_pages: int = Field(default=10, ge=1)
    enqueue_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    answer_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    related_link_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    similarity_threshold: float = Field(default=0.8, ge=-1.0, le=1.0)
    max_chunk_chars: int = Field(default=1000, ge=1)
    validation_word_limit: int = Field(default=100, ge=1)

    model_config = {"frozen": True}


# ============================================================
# Oracle Configs
# ============================================================


class ClaudeOracleConfig(BaseModel):
    """Configuration for ClaudeOracle."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_tokens: int = 2048
    temperature: float = 0.0

    model_config = {"frozen": True}


class SentenceTransformerEmbedderConfig(BaseModel):
    """Configuration for SentenceTransformerEmbedder."""

    type: Literal["sentence_transformer"] = "sentence_transformer"
    model_name: str = "all-MiniLM-L6-v2"

    model_config = {"frozen": True}


# ============================================================
# Fetcher / Report Configs
# ============================================================


class FetcherConfig(BaseModel):
    """Configuration for the httpx page fetcher."""

    timeout_seconds: float = 30.0
    follow_redirects: bool = True
    user_agent: str = "site-explorer/0.1"

    model_config = {"frozen": True}


class ReportConfig(BaseModel):
    """Configuration for submitting answers to a verification endpoint."""

    enabled: bool = False
    url: str = "https://centrala.ag3nts.org/report"
    task: str = "softo"

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for the JSON run record."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class SiteExplorerConfig(BaseModel):
    """Root configuration for a site exploration run."""

    questions: dict[str, str]
    explorer: ExplorerConfig = Field(default_factory=ExplorerConfig)
    oracle: ClaudeOracleConfig = Field(default_factory=ClaudeOracleConfig)
    embedder: SentenceTransformerEmbedderConfig = Field(
        default_factory=SentenceTransformerEmbedderConfig
    )
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}

    @field_validator("questions")
    @classmethod
    def questions_not_empty(cls, v: dict[str, str]) -> dict[str, str]:
        if not v:
            raise ValueError("At least one question is required")
        return v
