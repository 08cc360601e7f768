"""Server configuration.

Values are resolved with the precedence command-line flag > environment
variable > YAML config file > built-in default. The command line handles
the first two (``click`` reads the environment); this module merges the
result over the config file and validates it.

Config file keys::

    url: https://gitea.example.com
    token: ${GITEA_TOKEN}
    owner: acme
    repo: widgets
    timeout: 30
    max_message_size: 10485760
    log_level: INFO
    otlp_endpoint: http://localhost:4317
    trace_console: false
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gitea_mcp.protocol.transport import DEFAULT_MAX_MESSAGE_SIZE

DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Configuration is missing, unreadable or invalid."""


class ServerConfig(BaseModel):
    """Immutable, validated settings for one server run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    base_url: str = Field(alias="url")
    token: str = Field(min_length=1)
    default_owner: str = Field(default="", alias="owner")
    default_repo: str = Field(default="", alias="repo")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_message_size: int = Field(default=DEFAULT_MAX_MESSAGE_SIZE, ge=DEFAULT_MAX_MESSAGE_SIZE)
    log_level: str = DEFAULT_LOG_LEVEL
    otlp_endpoint: str | None = None
    trace_console: bool = False

    @field_validator("base_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value.startswith(("http://", "https://")):
            msg = "must be an http(s) URL"
            raise ValueError(msg)
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            msg = f"must be one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def resolve(cls, file_values: dict[str, Any] | None = None, **overrides: Any) -> ServerConfig:
        """Merge *overrides* (flags and environment) over *file_values* and validate.

        Overrides that are ``None`` are treated as not given.

        Raises:
            ConfigError: A required value is missing or a value is invalid.
        """
        merged: dict[str, Any] = dict(file_values or {})
        merged.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(_describe(exc)) from exc


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML config file, expanding ``${VAR}`` references first.

    Raises:
        ConfigError: The file cannot be read, is not valid YAML, or is not a mapping.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    expanded = os.path.expandvars(raw)

    try:
        data: Any = yaml.safe_load(expanded)
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error in {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must be a mapping")
    return data


def _describe(exc: ValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "config"
        if error["type"] == "missing":
            parts.append(f"{field} is required")
        else:
            parts.append(f"{field}: {error['msg']}")
    return "invalid configuration: " + "; ".join(parts)
