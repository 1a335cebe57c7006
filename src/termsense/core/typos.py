"""Fuzzy typo suggestions for commands and subcommands."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger
from rapidfuzz.distance import OSA

from termsense.core.command_detector import is_flag_or_path
from termsense.core.commands import replace_word
from termsense.core.subcommands import DEFAULT_SUBCOMMANDS, SubcommandRegistry
from termsense.core.types import TypoSuggestion

if TYPE_CHECKING:
    from termsense.core.known_commands import KnownCommandRegistry

DEFAULT_MAX_DISTANCE = 2
CONTRACTION_RE = re.compile(r"\w'\w")
TRAILING_PUNCTUATION = ".,!?;:'\""

# Words that open questions or chat replies are never command typos.
NL_STARTER_WORDS = frozenset(
    {
        "how", "what", "why", "where", "when", "who", "which", "whose",
        "can", "could", "would", "should", "will", "shall", "may", "might", "must",
        "is", "are", "was", "were", "am", "be", "been", "being",
        "do", "does", "did", "have", "has", "had",
        "i", "you", "he", "she", "it", "we", "they",
        "my", "your", "his", "her", "its", "our", "their",
        "this", "that", "these", "those",
        "please", "help", "show", "tell", "explain", "describe", "list", "find", "search",
        "the", "a", "an",
        "yes", "no", "ok", "okay", "sure", "thanks", "thank", "sorry", "hi", "hello",
        "hey", "great", "good", "nice", "cool", "awesome", "perfect", "fine", "right",
        "yeah", "yep", "nope", "maybe", "probably", "definitely", "absolutely",
    }
)

# Starters that double as real subcommands ("git help", "brew list").
SUBCOMMAND_LIKE_STARTERS = frozenset({"help", "show", "list", "find", "search", "explain", "describe"})


def edit_distance(source: str, target: str, max_distance: int | None = None) -> int:
    """Case-insensitive OSA distance, so ``nmp`` is one edit away from ``npm``."""

    return OSA.distance(source, target, processor=str.casefold, score_cutoff=max_distance)


def find_typo_suggestion(
    word: str,
    candidates: Iterable[str],
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> str | None:
    """Return the closest candidate within ``max_distance``, or None.

    Exact matches are skipped. Among equally close candidates the one sharing
    the first character of ``word`` wins, then the first one seen.
    """

    word_folded = word.casefold()
    best: str | None = None
    best_key: tuple[int, int] | None = None

    for candidate in candidates:
        if abs(len(candidate) - len(word)) > max_distance:
            continue
        candidate_folded = candidate.casefold()
        distance = edit_distance(word_folded, candidate_folded, max_distance)
        if distance == 0 or distance > max_distance:
            continue
        key = (distance, 0 if candidate_folded[:1] == word_folded[:1] else 1)
        if best_key is None or key < best_key:
            best, best_key = candidate, key

    return best


def max_distance_for(word: str) -> int:
    return 1 if len(word) <= 2 else DEFAULT_MAX_DISTANCE


def is_natural_language_start(word: str) -> bool:
    """Whether the first word of a line reads as prose rather than a command."""

    cleaned = word.rstrip(TRAILING_PUNCTUATION).casefold()
    if cleaned in NL_STARTER_WORDS:
        return True
    return CONTRACTION_RE.search(word) is not None


def is_prose_after_command(word: str) -> bool:
    """Whether the word after a real tool opens free text rather than arguments."""

    if word.rstrip(TRAILING_PUNCTUATION).casefold() in SUBCOMMAND_LIKE_STARTERS:
        return False
    return is_natural_language_start(word)


def suggest_subcommand(
    line: str,
    subcommands: SubcommandRegistry = DEFAULT_SUBCOMMANDS,
) -> TypoSuggestion | None:
    """Suggest a correction for the second word of ``tool sub ...``."""

    words = line.split()
    if len(words) < 2:
        return None
    command, second = words[0], words[1]
    if not subcommands.command_has_subcommands(command):
        return None
    if subcommands.has_valid_subcommand(command, second) or is_flag_or_path(second):
        return None

    suggestion = find_typo_suggestion(second, subcommands.ordered_subcommands(command), max_distance_for(second))
    if suggestion is None:
        return None
    return TypoSuggestion(
        original=second,
        suggested=suggestion,
        kind="subcommand",
        distance=edit_distance(second, suggestion),
        full_suggestion=replace_word(line, 1, suggestion),
    )


def suggest_command(
    line: str,
    registry: KnownCommandRegistry,
    subcommands: SubcommandRegistry = DEFAULT_SUBCOMMANDS,
) -> TypoSuggestion | None:
    """Suggest a known command for an unknown first word."""

    words = line.split()
    if not words:
        return None
    first = words[0]
    suggestion = find_typo_suggestion(first, registry.all_commands(), max_distance_for(first))
    if suggestion is None:
        logger.debug("typo.command.miss word={}", first)
        return None

    # "how" -> "w" is not a useful correction.
    if abs(len(first) - len(suggestion)) > 1:
        logger.debug("typo.command.reject word={} suggestion={} reason=length", first, suggestion)
        return None
    # An unknown word should not collapse onto an unrelated short alias ("eza" -> "la").
    if len(suggestion) < len(first) and first[:1].casefold() != suggestion[:1].casefold():
        logger.debug("typo.command.reject word={} suggestion={} reason=prefix", first, suggestion)
        return None
    # "gti how do I revert" must not become "git how do I revert".
    if len(words) > 1 and subcommands.command_has_subcommands(suggestion):
        following = words[1]
        if not subcommands.has_valid_subcommand(suggestion, following) and not is_flag_or_path(following):
            logger.debug("typo.command.reject word={} suggestion={} reason=subcommand", first, suggestion)
            return None

    return TypoSuggestion(
        original=first,
        suggested=suggestion,
        kind="command",
        distance=edit_distance(first, suggestion),
        full_suggestion=replace_word(line, 0, suggestion),
    )


def detect_typos(
    line: str,
    registry: KnownCommandRegistry,
    subcommands: SubcommandRegistry = DEFAULT_SUBCOMMANDS,
) -> TypoSuggestion | None:
    """Detect a mistyped command or subcommand in a whole input line."""

    trimmed = line.strip()
    if not trimmed:
        return None
    first = trimmed.split()[0]
    if is_natural_language_start(first):
        return None

    if not registry.is_known_command(first):
        suggestion = suggest_command(trimmed, registry, subcommands)
        if suggestion is not None:
            logger.debug("typo.command.hit word={} suggestion={}", first, suggestion.suggested)
            return suggestion

    return suggest_subcommand(trimmed, subcommands)
