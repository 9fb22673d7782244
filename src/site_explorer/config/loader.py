"""YAML configuration loading utilities."""

from pathlib import Path

import yaml

from site_explorer.config.models import SiteExplorerConfig


def load_config(path: Path | str) -> SiteExplorerConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated SiteExplorerConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return SiteExplorerConfig.model_validate(raw)


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml"
