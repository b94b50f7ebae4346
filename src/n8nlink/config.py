"""Configuration management for n8nlink."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from n8nlink.models import ClientOptions

DEFAULT_API_URL = "http://localhost:5678/api/v1"

# Environment variable for each setting, checked before the config file
ENV_VARS = {
    "api_url": "N8N_API_URL",
    "api_key": "N8N_API_KEY",
    "timeout": "REQUEST_TIMEOUT",
    "max_retries": "MAX_RETRIES",
    "retry_delay": "RETRY_DELAY",
    "log_level": "LOG_LEVEL",
}


class ConfigError(Exception):
    """Error loading or accessing configuration."""


class Settings(BaseModel):
    """Resolved runtime settings."""

    api_url: str = Field(default=DEFAULT_API_URL, description="n8n API base URL")
    api_key: str = Field(default="", description="n8n API key")
    timeout: int = Field(default=30000, ge=1, description="Request timeout in ms")
    max_retries: int = Field(default=3, ge=1, description="Attempts per request")
    retry_delay: int = Field(default=1000, ge=0, description="Base retry delay in ms")
    production: bool = Field(default=False, description="Sanitize upstream error detail")
    log_level: str = Field(default="INFO", description="Logging level")
    allowed_origins: list[str] = Field(
        default_factory=list, description="CORS origins for the HTTP transport"
    )

    def client_options(self) -> ClientOptions:
        return ClientOptions(
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            production=self.production,
        )


def get_config_path() -> Path:
    return Path.home() / ".n8nlink" / "config.yaml"


def get_file_config(path: Path | None = None) -> dict[str, Any]:
    """Load the ``n8n`` section of the config file.

    Returns:
        Configuration dictionary, empty if the file doesn't exist or is invalid.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (yaml.YAMLError, OSError):
        return {}

    if not isinstance(config, dict):
        return {}
    section = config.get("n8n", {})
    return section if isinstance(section, dict) else {}


def _is_production(env: Mapping[str, str], file_config: dict[str, Any]) -> bool:
    mode = env.get("N8NLINK_ENV") or env.get("NODE_ENV")
    if mode:
        return mode.lower() == "production"
    return bool(file_config.get("production", False))


def load_settings(
    env: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> Settings:
    """Resolve settings from the environment, then the config file, then defaults.

    Args:
        env: Environment mapping. Defaults to ``os.environ``.
        config_path: Config file location. Defaults to ~/.n8nlink/config.yaml.

    Returns:
        The resolved Settings.

    Raises:
        ConfigError: If a value is present but invalid.
    """
    env = os.environ if env is None else env
    file_config = get_file_config(config_path)

    values: dict[str, Any] = {}
    for field_name, env_var in ENV_VARS.items():
        if value := env.get(env_var):
            values[field_name] = value
        elif field_name in file_config:
            values[field_name] = file_config[field_name]

    if origins := env.get("ALLOWED_ORIGINS"):
        values["allowed_origins"] = [o for o in origins.split(",") if o]
    elif isinstance(file_config.get("allowed_origins"), list):
        values["allowed_origins"] = file_config["allowed_origins"]

    values["production"] = _is_production(env, file_config)

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def get_api_key(settings: Settings | None = None) -> str:
    """Get the n8n API key.

    Raises:
        ConfigError: If no API key is configured.
    """
    settings = settings or load_settings()
    if settings.api_key:
        return settings.api_key

    raise ConfigError(
        "n8n API key not found. Set N8N_API_KEY environment variable "
        "or add to ~/.n8nlink/config.yaml under 'n8n.api_key'"
    )
