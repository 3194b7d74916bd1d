"""Common exception classes for core package.

This module centralises shared exception definitions for the **core**
package. Additional core-level exceptions should be added here rather than
redefining them in individual modules.

All exceptions ultimately inherit from :class:`PromptEnhancerError`, allowing
callers to catch a single base class for any enhancer-related failure while
still distinguishing individual error categories when needed.

Updates:
  v0.3.0 - 2026-01-14 - Add NotFoundError shared by repository lookups.
  v0.2.0 - 2025-12-18 - Carry status code and retryability on ModelCallError.
  v0.1.0 - 2025-12-12 - Created module with validation/enhancement hierarchy.
"""

from __future__ import annotations


class PromptEnhancerError(Exception):
    """Base exception for Prompt Enhancer failures."""


class ValidationError(PromptEnhancerError):
    """Raised when the caller supplies a malformed target or prompt."""


class NotFoundError(PromptEnhancerError):
    """Raised when an update references an identifier that does not exist."""


class EnhancementError(PromptEnhancerError):
    """Raised when an unexpected failure occurs while enhancing a prompt."""


class ModelCallError(PromptEnhancerError):
    """Raised by the language model collaborator for upstream failures."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


__all__ = [
    "EnhancementError",
    "ModelCallError",
    "NotFoundError",
    "PromptEnhancerError",
    "ValidationError",
]
