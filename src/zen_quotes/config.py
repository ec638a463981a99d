"""Configuration management using Pydantic Settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from zen_quotes.exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()


class ApiConfig(BaseModel):
    """Remote quote API configuration."""

    base_url: str = "https://api.quotable.io"
    random_path: str = "/random"
    timeout_seconds: float = 10.0
    user_agent: str = "Mozilla/5.0 (compatible; ZenQuotes/0.1)"

    @property
    def random_url(self) -> str:
        return self.base_url.rstrip("/") + self.random_path


class RetryConfig(BaseModel):
    """Bounded retry configuration for quote fetches."""

    max_retries: int = Field(default=2, ge=0)
    delay_seconds: float = Field(default=1.0, ge=0)


class SessionConfig(BaseModel):
    """Interactive session behaviour."""

    default_category: str = "all"
    # Drop results from superseded requests instead of last-resolved-wins
    discard_stale_results: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ZEN_QUOTES_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    api: ApiConfig = Field(default_factory=ApiConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)


def _interpolate_env_vars(data: Any) -> Any:
    """Recursively interpolate ${VAR} patterns with environment variables."""
    if isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_name = data[2:-1]
            return os.environ.get(var_name, "")
        return data
    elif isinstance(data, dict):
        return {k: _interpolate_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_interpolate_env_vars(item) for item in data]
    return data


def load_config(config_path: Path | None = None) -> Settings:
    """Load configuration from YAML file with env var interpolation."""
    if config_path is None:
        # Check current directory first, then home directory
        local_config = Path("config.yaml")
        if local_config.exists():
            config_path = local_config
        else:
            config_path = Path.home() / ".zen-quotes" / "config.yaml"

    if not config_path.exists():
        return Settings()

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")

    config_data = _interpolate_env_vars(raw_config)

    try:
        return Settings(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

