"""Tests for configuration loading and factory functions."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest
from pydantic import ValidationError

from site_explorer.config import (
    ClaudeOracleConfig,
    ExplorerConfig,
    FetcherConfig,
    LoggingConfig,
    ReportConfig,
    SentenceTransformerEmbedderConfig,
    SiteExplorerConfig,
    create_from_config,
    get_default_config_path,
    load_config,
)
from site_explorer.config import factory
from site_explorer.config.factory import create_fetcher, create_oracle, create_reporter
from site_explorer.data import Usage
from site_explorer.explorer import SiteExplorer
from site_explorer.fetch.httpx_fetcher import HttpxFetcher
from site_explorer.oracle.claude import ClaudeOracle
from site_explorer.report import AnswerReporter


class FakeEmbedder:
    def __init__(self, model_name: str) -> None:
        self.model_name = model_name
        self.usage = Usage()


class TestConfigModels:
    """Tests for Pydantic config models."""

    def test_explorer_config_defaults(self) -> None:
        config = ExplorerConfig()
        assert config.site_root == "https://softo.ag3nts.org"
        assert config.max_pages == 10
        assert config.enqueue_threshold == 0.3
        assert config.answer_threshold == 0.8
        assert config.related_link_threshold == 0.7
        assert config.similarity_threshold == 0.8
        assert config.max_chunk_chars == 1000
        assert config.validation_word_limit == 100

    def test_claude_oracle_config_defaults(self) -> None:
        config = ClaudeOracleConfig()
        assert config.type == "claude"
        assert config.model == "claude-haiku-4-5-20251001"
        assert config.max_tokens == 2048

    def test_embedder_config_defaults(self) -> None:
        config = SentenceTransformerEmbedderConfig()
        assert config.type == "sentence_transformer"
        assert config.model_name == "all-MiniLM-L6-v2"

    def test_report_and_logging_disabled_by_default(self) -> None:
        assert ReportConfig().enabled is False
        assert LoggingConfig().enabled is False

    def test_site_explorer_config_defaults(self) -> None:
        config = SiteExplorerConfig(questions={"01": "Email?"})
        assert isinstance(config.explorer, ExplorerConfig)
        assert isinstance(config.oracle, ClaudeOracleConfig)
        assert isinstance(config.fetcher, FetcherConfig)

    def test_questions_required(self) -> None:
        with pytest.raises(ValidationError, match="At least one question"):
            SiteExplorerConfig(questions={})

    @pytest.mark.parametrize(
        "overrides",
        [{"max_pages": 0}, {"answer_threshold": 1.5}, {"max_chunk_chars": 0}],
    )
    def test_explorer_config_rejects_out_of_range(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            ExplorerConfig(**overrides)  # type: ignore[arg-type]

    def test_configs_are_frozen(self) -> None:
        config = ExplorerConfig()
        with pytest.raises(ValidationError):
            config.max_pages = 20  # type: ignore[misc]


class TestConfigLoader:
    """Tests for YAML config loading."""

    def test_load_config(self) -> None:
        yaml_content = """
questions:
  "01": "What is the contact email?"
explorer:
  site_root: "https://site.test"
  max_pages: 5
oracle:
  type: claude
  model: claude-sonnet-4-5-20250929
logging:
  enabled: true
  log_dir: runs
"""
        with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            path = f.name

        config = load_config(path)
        assert config.questions == {"01": "What is the contact email?"}
        assert config.explorer.site_root == "https://site.test"
        assert config.explorer.max_pages == 5
        assert config.explorer.answer_threshold == 0.8
        assert config.oracle.model == "claude-sonnet-4-5-20250929"
        assert config.logging.enabled is True
        assert config.logging.log_dir == "runs"

        Path(path).unlink()

    def test_load_config_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_get_default_config_path(self) -> None:
        path = get_default_config_path()
        assert path.name == "default.yaml"
        assert path.parent.name == "configs"

    def test_load_default_config(self) -> None:
        config = load_config(get_default_config_path())
        assert set(config.questions) == {"01", "02", "03"}
        assert config.explorer.site_root == "https://softo.ag3nts.org"
        assert config.report.task == "softo"


class TestFactory:
    """Tests for factory functions."""

    def test_create_oracle(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLAUDE_API_KEY", "test-key")
        oracle = create_oracle(ClaudeOracleConfig(max_tokens=256))
        assert isinstance(oracle, ClaudeOracle)
        assert oracle._max_tokens == 256

    def test_create_fetcher(self) -> None:
        fetcher = create_fetcher(FetcherConfig(timeout_seconds=5.0, user_agent="bot"))
        assert isinstance(fetcher, HttpxFetcher)
        assert fetcher._timeout == 5.0
        assert fetcher._headers == {"User-Agent": "bot"}

    def test_create_reporter_disabled(self) -> None:
        assert create_reporter(ReportConfig()) is None

    def test_create_reporter_enabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPORT_API_KEY", "secret")
        reporter = create_reporter(ReportConfig(enabled=True))
        assert isinstance(reporter, AnswerReporter)

    def test_create_from_config(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("CLAUDE_API_KEY", "test-key")
        monkeypatch.setattr(factory, "SentenceTransformerEmbedder", FakeEmbedder)
        config = SiteExplorerConfig(
            questions={"01": "Email?"},
            explorer=ExplorerConfig(site_root="https://site.test", max_pages=3),
        )

        explorer, run_logger, reporter = create_from_config(
            config, log_override=True, log_dir_override=str(tmp_path)
        )

        assert isinstance(explorer, SiteExplorer)
        assert explorer.site_root == "https://site.test"
        assert explorer._max_pages == 3
        assert isinstance(explorer._embedder, FakeEmbedder)
        assert run_logger.enabled is True
        assert run_logger._log_dir == tmp_path
        assert reporter is None

    def test_create_from_config_report_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLAUDE_API_KEY", "test-key")
        monkeypatch.setenv("REPORT_API_KEY", "secret")
        monkeypatch.setattr(factory, "SentenceTransformerEmbedder", FakeEmbedder)
        config = SiteExplorerConfig(questions={"01": "Email?"})

        _, run_logger, reporter = create_from_config(config, report_override=True)

        assert isinstance(reporter, AnswerReporter)
        assert run_logger.enabled is False
