"""End-to-end intent classification and failure triage."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import replace

from loguru import logger

from termsense.config import Settings
from termsense.core.command_detector import is_flag_or_path, split_env_prefix
from termsense.core.commands import split_words
from termsense.core.known_commands import KnownCommandRegistry
from termsense.core.not_found import match_not_found
from termsense.core.override import check_override_prefix
from termsense.core.subcommands import DEFAULT_SUBCOMMANDS, SubcommandRegistry
from termsense.core.types import InputVerdict, TriageDecision, TriageRequest, TypoSuggestion
from termsense.core.typos import detect_typos, is_prose_after_command, suggest_subcommand
from termsense.errors import AssistantNotFoundError
from termsense.triage.client import ErrorTriageClient, TriageHandle
from termsense.triage.prompt import build_triage_prompt, tail_lines

# SIGINT and SIGTERM as reported by the shell.
SIGNAL_EXIT_CODES = frozenset({130, 143})


class IntentClassifier:
    """Decides what a submitted line is and whether a failure deserves a notice."""

    def __init__(
        self,
        known: KnownCommandRegistry,
        subcommands: SubcommandRegistry = DEFAULT_SUBCOMMANDS,
        *,
        settings: Settings | None = None,
        triage_client: ErrorTriageClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.known = known
        self.subcommands = subcommands
        self.settings = settings or Settings()
        self.triage_client = triage_client or ErrorTriageClient.from_settings(self.settings)
        self._clock = clock
        self._pending: dict[str, TriageHandle] = {}
        self._last_triage_at: dict[str, float] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> IntentClassifier:
        assistant_path: str | None
        try:
            assistant_path = settings.resolve_assistant_path()
        except AssistantNotFoundError as exc:
            logger.info("classifier.assistant.missing error={}", exc)
            assistant_path = None
        return cls(
            KnownCommandRegistry.from_settings(settings),
            DEFAULT_SUBCOMMANDS,
            settings=settings,
            triage_client=ErrorTriageClient.from_settings(settings, assistant_path),
        )

    async def initialize(self) -> None:
        await self.known.initialize()

    def classify(self, text: str) -> InputVerdict:
        prefix = check_override_prefix(text)
        if not prefix.cleaned_input.strip():
            return InputVerdict(intent="COMMAND", cleaned_input="", reason="empty")
        if prefix.override is not None:
            return InputVerdict(intent=prefix.override, cleaned_input=prefix.cleaned_input, reason="override")

        line = prefix.cleaned_input
        env_words, command_line = split_env_prefix(line)
        words = split_words(command_line)
        if not words:
            return InputVerdict(intent="NATURAL_LANGUAGE", cleaned_input=line, reason="fallback")

        leading = words[0]
        if leading.casefold() in self.settings.denied_commands:
            return InputVerdict(intent="COMMAND", cleaned_input=line, reason="denylist")

        second = words[1] if len(words) > 1 else None
        if self.known.is_known_command(leading):
            if (
                not self.subcommands.command_has_subcommands(leading)
                or second is None
                or is_flag_or_path(second)
                or self.subcommands.has_valid_subcommand(leading, second)
            ):
                return InputVerdict(intent="COMMAND", cleaned_input=line, reason="known_command")

            suggestion = suggest_subcommand(command_line, self.subcommands)
            if suggestion is None:
                # The table lists common subcommands only; unlisted ones still run.
                logger.debug("classifier.subcommand.miss command={} word={}", leading, second)
                if is_prose_after_command(second):
                    return InputVerdict(intent="NATURAL_LANGUAGE", cleaned_input=line, reason="fallback")
                return InputVerdict(intent="COMMAND", cleaned_input=line, reason="known_command")
            return InputVerdict(
                intent="COMMAND",
                cleaned_input=line,
                reason="subcommand_typo",
                suggestion=_with_env_prefix(suggestion, env_words),
            )

        suggestion = detect_typos(command_line, self.known, self.subcommands)
        if suggestion is None:
            return InputVerdict(intent="NATURAL_LANGUAGE", cleaned_input=line, reason="fallback")
        return InputVerdict(
            intent="COMMAND",
            cleaned_input=line,
            reason=f"{suggestion.kind}_typo",
            suggestion=_with_env_prefix(suggestion, env_words),
        )

    async def triage_failure(self, request: TriageRequest) -> TriageDecision:
        """Decide whether a failed command should surface a notification.

        Cheap local checks run first; the assistant is only spawned when none
        of them settles the question. Any infrastructure failure suppresses.
        """

        if not self.settings.triage_enabled:
            return _suppress("disabled")
        if request.exit_code in SIGNAL_EXIT_CODES:
            return _suppress("signal")

        recent_output = tail_lines(request.recent_output, self.settings.triage_output_lines)
        tag = match_not_found(recent_output)
        if tag is not None:
            logger.debug("triage.skip reason=not_found tag={}", tag)
            return _suppress("not_found")

        session_id = request.session_id
        now = self._clock()
        last = self._last_triage_at.get(session_id)
        if last is not None and now - last < self.settings.triage_rate_limit_seconds:
            logger.debug("triage.skip reason=rate_limited session={}", session_id)
            return _suppress("rate_limited")
        self._record_triage(session_id, now)

        self.cancel_pending(session_id)

        if self.triage_client.assistant_path is None:
            return _suppress("no_assistant")
        if self.triage_client.at_capacity():
            logger.info("triage.skip reason=busy session={}", session_id)
            return _suppress("busy")

        prompt = build_triage_prompt(request.command, request.exit_code, recent_output)
        handle = self.triage_client.triage(prompt, request.cwd)
        self._pending[session_id] = handle
        try:
            result = await handle
        finally:
            if self._pending.get(session_id) is handle:
                del self._pending[session_id]

        if result is None:
            return _suppress("no_verdict")
        logger.info("triage.done session={} notify={}", session_id, result.should_notify)
        return TriageDecision(should_notify=result.should_notify, message=result.message, reason="assistant")

    def cancel_pending(self, session_id: str | None = None) -> None:
        """Cancel in-flight triage for one session, or for all of them."""

        if session_id is None:
            handles = list(self._pending.values())
            self._pending.clear()
        else:
            handle = self._pending.pop(session_id, None)
            handles = [handle] if handle is not None else []
        for handle in handles:
            handle.cancel()

    def _record_triage(self, session_id: str, now: float) -> None:
        window = self.settings.triage_rate_limit_seconds
        expired = [key for key, at in self._last_triage_at.items() if now - at >= window]
        for key in expired:
            del self._last_triage_at[key]
        self._last_triage_at[session_id] = now


def _suppress(reason: str) -> TriageDecision:
    return TriageDecision(should_notify=False, message="", reason=reason)


def _with_env_prefix(suggestion: TypoSuggestion, env_words: list[str]) -> TypoSuggestion:
    if not env_words:
        return suggestion
    return replace(suggestion, full_suggestion=" ".join([*env_words, suggestion.full_suggestion]))
