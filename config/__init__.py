"""Configuration helpers for Prompt Enhancer.

Updates: v0.1.0 - 2025-12-13 - Expose settings loader and configuration error types.
"""

from .settings import PromptEnhancerSettings, SettingsError, load_settings

__all__ = ["PromptEnhancerSettings", "SettingsError", "load_settings"]
