"""Printable summaries for Prompt Enhancer configuration.

Updates:
  v0.1.1 - 2026-01-11 - Include retry and history settings.
  v0.1.0 - 2025-12-13 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from config import PromptEnhancerSettings

from .utils import describe_path, mask_secret


def print_settings_summary(settings: PromptEnhancerSettings) -> None:
    """Emit a readable summary of core configuration."""
    db_path_desc = describe_path(
        settings.db_path,
        expect_directory=False,
        allow_missing_file=True,
    )
    drop_params = ", ".join(settings.litellm_drop_params or []) or "none"
    timeout = (
        f"{settings.request_timeout_seconds:g}s"
        if settings.request_timeout_seconds is not None
        else "none"
    )
    lines = [
        "Prompt Enhancer configuration",
        "",
        "Storage",
        f"  Database path ...... {db_path_desc}",
        f"  History limit ...... {settings.history_limit}",
        "",
        "Cache",
        f"  Backend ............ {'redis' if settings.redis_dsn else 'in-memory'}",
        f"  Redis DSN .......... {settings.redis_dsn or 'not set'}",
        f"  TTL ................ {settings.cache_ttl_seconds}s",
        "",
        "LiteLLM",
        f"  Model .............. {settings.litellm_model or 'not set'}",
        f"  API key ............ {mask_secret(settings.litellm_api_key)}",
        f"  API base ........... {settings.litellm_api_base or 'default'}",
        f"  API version ........ {settings.litellm_api_version or 'default'}",
        f"  Drop params ........ {drop_params}",
        f"  Max tokens ......... {settings.litellm_max_tokens}",
        f"  Temperature ........ {settings.litellm_temperature:g}",
        f"  Retries ............ {settings.litellm_retry_attempts} "
        f"(base delay {settings.litellm_retry_delay_seconds:g}s)",
        f"  Request timeout .... {timeout}",
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
