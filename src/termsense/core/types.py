"""Shared core dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Intent = Literal["COMMAND", "NATURAL_LANGUAGE"]
TypoKind = Literal["command", "subcommand"]


@dataclass(frozen=True)
class ClassificationResult:
    """Override prefix parsed from one input line."""

    override: Intent | None
    cleaned_input: str


@dataclass(frozen=True)
class TypoSuggestion:
    """Correction hint for a mistyped command or subcommand."""

    original: str
    suggested: str
    kind: TypoKind
    distance: int
    full_suggestion: str


@dataclass(frozen=True)
class InputVerdict:
    """End-to-end classification of one input line."""

    intent: Intent
    cleaned_input: str
    reason: str  # empty|override|denylist|known_command|subcommand_typo|command_typo|fallback
    suggestion: TypoSuggestion | None = None


@dataclass(frozen=True)
class TriageRequest:
    """Failed command handed to triage. Never stored."""

    command: str | None
    exit_code: int
    recent_output: str
    cwd: str | None = None
    session_id: str = "default"


@dataclass(frozen=True)
class TriageResult:
    """Verdict returned by the assistant."""

    should_notify: bool
    message: str = ""


@dataclass(frozen=True)
class TriageDecision:
    """Final notify/suppress outcome for one failed command."""

    should_notify: bool
    message: str
    reason: str  # disabled|signal|not_found|rate_limited|busy|no_assistant|no_verdict|assistant
