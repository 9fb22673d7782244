"""Configuration module for site explorer."""

from site_explorer.config.factory import create_from_config
from site_explorer.config.loader import get_default_config_path, load_config
from site_explorer.config.models import (
    ClaudeOracleConfig,
    ExplorerConfig,
    FetcherConfig,
    LoggingConfig,
    ReportConfig,
    SentenceTransformerEmbedderConfig,
    SiteExplorerConfig,
)

__all__ = [
    "ClaudeOracleConfig",
    "ExplorerConfig",
    "FetcherConfig",
    "LoggingConfig",
    "ReportConfig",
    "SentenceTransformerEmbedderConfig",
    "SiteExplorerConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
