"""Settings management utilities for Prompt Enhancer configuration.

Updates:
  v0.3.0 - 2026-01-11 - Add prompt history limit and LiteLLM retry settings.
  v0.2.0 - 2025-12-20 - Read .env values via python-dotenv without mutating os.environ.
  v0.1.0 - 2025-12-13 - Introduce PromptEnhancerSettings with JSON and env sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger("prompt_enhancer.settings")

_DOTENV_FALLBACK_PATH = ".env"

# Canonical field name -> accepted environment keys (prefixed and, when upper-case, bare).
_ENV_ALIASES: dict[str, list[str]] = {
    "db_path": ["DB_PATH", "DATABASE_PATH", "db_path", "database_path"],
    "redis_dsn": ["REDIS_DSN", "redis_dsn"],
    "cache_ttl_seconds": ["CACHE_TTL_SECONDS", "cache_ttl_seconds"],
    "litellm_model": ["LITELLM_MODEL", "litellm_model"],
    "litellm_api_key": ["LITELLM_API_KEY", "litellm_api_key", "OPENAI_API_KEY"],
    "litellm_api_base": ["LITELLM_API_BASE", "litellm_api_base", "OPENAI_API_BASE"],
    "litellm_api_version": ["LITELLM_API_VERSION", "litellm_api_version"],
    "litellm_drop_params": ["LITELLM_DROP_PARAMS", "litellm_drop_params"],
    "litellm_max_tokens": ["LITELLM_MAX_TOKENS", "litellm_max_tokens"],
    "litellm_temperature": ["LITELLM_TEMPERATURE", "litellm_temperature"],
    "litellm_retry_attempts": ["LITELLM_RETRY_ATTEMPTS", "litellm_retry_attempts"],
    "litellm_retry_delay_seconds": [
        "LITELLM_RETRY_DELAY_SECONDS",
        "litellm_retry_delay_seconds",
    ],
    "request_timeout_seconds": ["REQUEST_TIMEOUT_SECONDS", "request_timeout_seconds"],
    "history_limit": ["HISTORY_LIMIT", "history_limit"],
}

_JSON_CONFIG_KEYS: tuple[str, ...] = (
    "db_path",
    "redis_dsn",
    "cache_ttl_seconds",
    "litellm_model",
    "litellm_api_base",
    "litellm_api_version",
    "litellm_drop_params",
    "litellm_max_tokens",
    "litellm_temperature",
    "litellm_retry_attempts",
    "litellm_retry_delay_seconds",
    "request_timeout_seconds",
    "history_limit",
)

_DISALLOWED_SECRET_KEYS = frozenset({"litellm_api_key", "OPENAI_API_KEY", "LITELLM_API_KEY"})


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv("PROMPT_ENHANCER_ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when Prompt Enhancer configuration cannot be loaded or validated."""


class PromptEnhancerSettings(BaseSettings):
    """Application configuration sourced from environment variables or JSON files."""

    db_path: Path = Field(default=Path("data") / "prompt_enhancer.db")
    redis_dsn: str | None = None
    cache_ttl_seconds: int = Field(
        default=12 * 60 * 60,
        description="Lifetime of cached enhancements in seconds.",
    )
    litellm_model: str | None = Field(
        default="gpt-4o-mini",
        description="LiteLLM model used to rewrite prompts.",
    )
    litellm_api_key: str | None = Field(
        default=None,
        description="LiteLLM API key.",
        repr=False,
    )
    litellm_api_base: str | None = Field(
        default=None,
        description="Optional LiteLLM API base URL override.",
    )
    litellm_api_version: str | None = Field(
        default=None,
        description="Optional LiteLLM API version (useful for Azure OpenAI).",
    )
    litellm_drop_params: list[str] | None = Field(
        default=None,
        description="Request parameters LiteLLM should drop before calling the provider.",
    )
    litellm_max_tokens: int = Field(default=500)
    litellm_temperature: float = Field(default=0.7)
    litellm_retry_attempts: int = Field(
        default=2,
        description="Retries after the first failed model call.",
    )
    litellm_retry_delay_seconds: float = Field(default=0.3)
    request_timeout_seconds: float | None = Field(default=30.0)
    history_limit: int = Field(
        default=50,
        description="Number of recent enhancements kept in the history table.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "PROMPT_ENHANCER_",
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("db_path", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None:
            raise ValueError("a filesystem path is required")
        path = Path(str(value)).expanduser()
        return path.resolve()

    @field_validator("cache_ttl_seconds", "litellm_max_tokens", "history_limit")
    def _validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("value must be greater than zero")
        return value

    @field_validator("litellm_retry_attempts")
    def _validate_retry_attempts(cls, value: int) -> int:
        if value < 0:
            raise ValueError("litellm_retry_attempts cannot be negative")
        return value

    @field_validator("litellm_retry_delay_seconds")
    def _validate_retry_delay(cls, value: float) -> float:
        if value < 0:
            raise ValueError("litellm_retry_delay_seconds cannot be negative")
        return value

    @field_validator("litellm_temperature")
    def _validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("litellm_temperature must be between 0 and 2")
        return value

    @field_validator("request_timeout_seconds", mode="before")
    def _normalise_timeout(cls, value: object) -> object:
        if value in (None, "", 0, "0"):
            return None
        return value

    @field_validator(
        "redis_dsn",
        "litellm_model",
        "litellm_api_base",
        "litellm_api_version",
        mode="before",
    )
    def _strip_strings(cls, value: str | None) -> str | None:
        """Normalise optional strings by stripping whitespace and empty values."""
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("litellm_drop_params", mode="before")
    def _normalise_drop_params(cls, value: object) -> list[str] | None:
        if value in (None, "", [], ()):  # type: ignore[comparison-overlap]
            return None
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                items = [item.strip() for item in stripped.split(",") if item.strip()]
            else:
                if isinstance(parsed, Sequence) and not isinstance(parsed, (str, bytes, bytearray)):
                    sequence = cast("Sequence[object]", parsed)
                    items = [str(item).strip() for item in sequence if str(item).strip()]
                else:
                    items = [str(parsed).strip()]
            return items or None
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sequence_value = cast("Sequence[object]", value)
            items = [str(item).strip() for item in sequence_value if str(item).strip()]
            return items or None
        raise ValueError(
            "litellm_drop_params must be a list, comma-separated string, or JSON array"
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(litellm_model="...")).
            2. JSON configuration file (application settings).
            3. Environment variables, ``.env`` values, and aliases.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))
            dotenv_data = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_data.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_ALIASES.items():
                for key in keys:
                    candidates = [f"{prefix}{key}", f"{prefix}{key.upper()}"]
                    if key.isupper():
                        candidates.append(key)
                    found = next(
                        (val for val in map(_lookup, candidates) if val is not None),
                        None,
                    )
                    if found is not None:
                        data[field] = found
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv("PROMPT_ENHANCER_CONFIG_JSON")
            candidates: list[Path] = []
            if explicit_path:
                candidates.append(Path(explicit_path).expanduser())
            candidates.append((Path("config") / "config.json").expanduser())

            for path in candidates:
                if not path.exists():
                    if explicit_path and path == candidates[0]:
                        raise SettingsError(f"Configuration file not found: {path}")
                    continue
                try:
                    raw_contents = path.read_text(encoding="utf-8")
                except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                    raise SettingsError(f"Unable to read configuration file: {path}") from exc
                try:
                    data = json.loads(raw_contents)
                except json.JSONDecodeError as exc:
                    raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
                if not isinstance(data, dict):
                    message = f"Configuration file {path} must contain a JSON object"
                    raise SettingsError(message)
                mapping_data = cast("Mapping[object, Any]", data)
                data_dict: dict[str, Any] = {str(key): value for key, value in mapping_data.items()}
                removed_secrets = [
                    key
                    for key in _DISALLOWED_SECRET_KEYS
                    if key in data_dict and data_dict.pop(key, None) is not None
                ]
                if removed_secrets:
                    logger.warning(
                        "Ignoring secret key(s) %s in configuration file %s; "
                        "set credentials via environment variables instead.",
                        ", ".join(sorted(removed_secrets)),
                        path,
                    )
                mapped: dict[str, Any] = {}
                if "database_path" in data_dict and "db_path" not in data_dict:
                    mapped["db_path"] = data_dict["database_path"]
                for key in _JSON_CONFIG_KEYS:
                    if key in data_dict:
                        mapped[key] = data_dict[key]
                return mapped
            return {}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptEnhancerSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptEnhancerSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Prompt Enhancer configuration") from exc


__all__ = ["PromptEnhancerSettings", "SettingsError", "load_settings"]
