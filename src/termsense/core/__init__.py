"""Core detection modules for termsense."""

from .known_commands import KnownCommandRegistry
from .not_found import NOT_FOUND_PATTERNS, is_command_not_found, match_not_found
from .override import check_override_prefix
from .subcommands import (
    DEFAULT_SUBCOMMANDS,
    SubcommandRegistry,
    command_has_subcommands,
    get_subcommands,
    has_valid_subcommand,
)
from .types import ClassificationResult, InputVerdict, TriageDecision, TriageRequest, TriageResult, TypoSuggestion
from .typos import detect_typos, find_typo_suggestion

__all__ = [
    "DEFAULT_SUBCOMMANDS",
    "NOT_FOUND_PATTERNS",
    "ClassificationResult",
    "InputVerdict",
    "KnownCommandRegistry",
    "SubcommandRegistry",
    "TriageDecision",
    "TriageRequest",
    "TriageResult",
    "TypoSuggestion",
    "check_override_prefix",
    "command_has_subcommands",
    "detect_typos",
    "find_typo_suggestion",
    "get_subcommands",
    "has_valid_subcommand",
    "is_command_not_found",
    "match_not_found",
]
