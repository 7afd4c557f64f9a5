"""Configuration loading with environment variable substitution."""

import json
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from clouddown.api.auth import Credential
from clouddown.api.urls import DEFAULT_API_ENDPOINT
from clouddown.observability import LogLevel, configure_logging
from clouddown.utils.validation import validate_identifier

ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")


def substitute_env_vars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} patterns with environment variables."""
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable {var_name} is not set")
            return env_value

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]
    return value


class CloudKVConfig(BaseModel):
    """Workers KV settings.

    ``account_id``, ``namespace_id`` and ``credential`` are only needed for
    batch operations.
    """

    api_endpoint: str = DEFAULT_API_ENDPOINT
    account_id: str | None = None
    namespace_id: str | None = None
    credential: Credential | None = None
    default_cache_ttl: int = Field(default=60, ge=0)

    @field_validator("account_id", "namespace_id")
    @classmethod
    def _check_identifier(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return None
        return validate_identifier(value, name=info.field_name)


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: LogLevel = LogLevel.INFO
    format: str = "json"  # json | text


class Config(BaseModel):
    """Main configuration for clouddown."""

    kv: CloudKVConfig = Field(default_factory=CloudKVConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML or JSON file."""
        path = Path(path)
        with path.open() as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        data = substitute_env_vars(data or {})
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Load configuration from a dictionary."""
        data = substitute_env_vars(data)
        return cls.model_validate(data)

    def apply_logging(self) -> None:
        """Configure the clouddown logger from these settings."""
        configure_logging(level=self.logging.level, format=self.logging.format)
