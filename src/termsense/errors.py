"""Application-level exception types for termsense."""

from __future__ import annotations


class TermsenseError(Exception):
    """Base exception for termsense."""


class ConfigurationError(TermsenseError):
    """Base exception for configuration and startup validation errors."""


class AssistantNotFoundError(ConfigurationError):
    """Raised when no assistant executable is configured or on PATH."""


class TriageError(TermsenseError):
    """Base exception for error triage failures."""


class TriageResponseError(TriageError):
    """Raised when assistant output cannot be unwrapped into a verdict."""
