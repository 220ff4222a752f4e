"""
Configuration management for the filing pipeline.

Supports:
- Loading config from YAML
- Merging file values over built-in defaults
- Environment variable overrides (EDGAR_USER_AGENT, EDGAR_LOG_LEVEL)
- Config validation with Pydantic
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic Config Models
# =============================================================================


class EdgarConfig(BaseModel):
    """SEC EDGAR access settings."""

    # SEC rejects requests without a contact address in the User-Agent
    user_agent: str = "EdgarPipeline research@example.com"
    timeout: float = 30.0  # Seconds per request
    retries: int = 3
    backoff_factor: float = 0.5
    request_interval: float = 0.15  # SEC allows 10 requests/second


class ParseConfig(BaseModel):
    """Filing parsing settings."""

    encoding: str = "utf-8"


class LoggingConfig(BaseModel):
    """Logging settings for the command line entry point."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt: str = "%H:%M:%S"


class PipelineConfig(BaseModel):
    """Complete pipeline configuration."""

    edgar: EdgarConfig = Field(default_factory=EdgarConfig)
    parse: ParseConfig = Field(default_factory=ParseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "EDGAR_USER_AGENT": ("edgar", "user_agent"),
    "EDGAR_LOG_LEVEL": ("logging", "level"),
}


# =============================================================================
# Config Loading Functions
# =============================================================================


def load_yaml(path: Union[str, Path]) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Override values take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def apply_env_overrides(config_dict: dict, environ: Optional[dict] = None) -> dict:
    """Apply environment variable overrides to a config dictionary."""
    environ = os.environ if environ is None else environ
    overrides: dict[str, dict] = {}

    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_var)
        if value:
            overrides.setdefault(section, {})[key] = value
            logger.debug(f"Config override from {env_var}")

    return deep_merge(config_dict, overrides)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[dict] = None,
) -> PipelineConfig:
    """
    Load pipeline configuration.

    Args:
        config_path: Optional YAML file merged over the defaults
        environ: Environment to read overrides from (defaults to os.environ)

    Returns:
        PipelineConfig with all settings resolved
    """
    config_dict = PipelineConfig().model_dump()

    if config_path is not None:
        config_dict = deep_merge(config_dict, load_yaml(config_path))
        logger.info(f"Loaded config from {config_path}")

    config_dict = apply_env_overrides(config_dict, environ)
    return PipelineConfig.model_validate(config_dict)
