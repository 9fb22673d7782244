"""Factory functions to create components from configuration."""

from pathlib import Path

from site_explorer.config.models import (
    ClaudeOracleConfig,
    FetcherConfig,
    ReportConfig,
    SentenceTransformerEmbedderConfig,
    SiteExplorerConfig,
)
from site_explorer.explorer import SiteExplorer
from site_explorer.fetch.httpx_fetcher import HttpxFetcher
from site_explorer.oracle.base import AnsweringOracle, EmbeddingOracle
from site_explorer.oracle.claude import ClaudeOracle
from site_explorer.oracle.embeddings import SentenceTransformerEmbedder
from site_explorer.report import AnswerReporter
from site_explorer.run_logger import RunLogger


def create_oracle(config: ClaudeOracleConfig) -> AnsweringOracle:
    """Create an answering oracle from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, ClaudeOracleConfig):
        return ClaudeOracle(
            model=config.model,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    msg = f"Unknown oracle config type: {type(config)}"
    raise ValueError(msg)


def create_embedder(config: SentenceTransformerEmbedderConfig) -> EmbeddingOracle:
    """Create an embedding oracle from config."""
    if isinstance(config, SentenceTransformerEmbedderConfig):
        return SentenceTransformerEmbedder(config.model_name)
    msg = f"Unknown embedder config type: {type(config)}"
    raise ValueError(msg)


def create_fetcher(config: FetcherConfig) -> HttpxFetcher:
    """Create a page fetcher from config."""
    return HttpxFetcher(
        timeout=config.timeout_seconds,
        follow_redirects=config.follow_redirects,
        user_agent=config.user_agent,
    )


def create_reporter(config: ReportConfig) -> AnswerReporter | None:
    """Create an answer reporter, or None if reporting is disabled."""
    if not config.enabled:
        return None
    return AnswerReporter(url=config.url, task=config.task)


def create_from_config(
    config: SiteExplorerConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
    report_override: bool | None = None,
) -> tuple[SiteExplorer, RunLogger, AnswerReporter | None]:
    """Create a complete explorer from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.
        report_override: Override the config's report.enabled setting.

    Returns:
        Tuple of (explorer, run_logger, reporter).
        reporter is None if reporting is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)
    run_logger = RunLogger(log_dir=log_dir, enabled=log_enabled)

    report_config = config.report
    if report_override is not None:
        report_config = report_config.model_copy(update={"enabled": report_override})

    explorer_config = config.explorer
    explorer = SiteExplorer(
        oracle=create_oracle(config.oracle),
        embedder=create_embedder(config.embedder),
        fetcher=create_fetcher(config.fetcher),
        site_root=explorer_config.site_root,
        max_pages=explorer_config.max_pages,
        enqueue_threshold=explorer_config.enqueue_threshold,
        answer_threshold=explorer_config.answer_threshold,
        related_link_threshold=explorer_config.related_link_threshold,
        similarity_threshold=explorer_config.similarity_threshold,
        max_chunk_chars=explorer_config.max_chunk_chars,
        validation_word_limit=explorer_config.validation_word_limit,
        run_logger=run_logger,
    )
    return (explorer, run_logger, create_reporter(report_config))
