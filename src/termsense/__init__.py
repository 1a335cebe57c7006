"""termsense - tell commands from questions, and real failures from noise."""

from .config import Settings
from .core import (
    KnownCommandRegistry,
    SubcommandRegistry,
    check_override_prefix,
    command_has_subcommands,
    detect_typos,
    find_typo_suggestion,
    get_subcommands,
    has_valid_subcommand,
    is_command_not_found,
    match_not_found,
)
from .core.classifier import IntentClassifier
from .triage import ErrorTriageClient, build_triage_prompt, parse_triage_response, triage_error

__version__ = "0.1.0"

__all__ = [
    "ErrorTriageClient",
    "IntentClassifier",
    "KnownCommandRegistry",
    "Settings",
    "SubcommandRegistry",
    "build_triage_prompt",
    "check_override_prefix",
    "command_has_subcommands",
    "detect_typos",
    "find_typo_suggestion",
    "get_subcommands",
    "has_valid_subcommand",
    "is_command_not_found",
    "match_not_found",
    "parse_triage_response",
    "triage_error",
]
