"""Command line word splitting helpers."""

from __future__ import annotations

import shlex


def parse_command_words(text: str) -> list[str]:
    """Split command text into words using shell rules."""

    try:
        return shlex.split(text)
    except ValueError:
        return []


def split_words(text: str) -> list[str]:
    """Split a line into words, tolerating unbalanced quotes.

    Natural-language input often carries lone apostrophes ("what's up"),
    which shell rules reject. Those lines fall back to whitespace splitting.
    """

    words = parse_command_words(text)
    if words or not text.strip():
        return words
    return text.split()


def replace_word(line: str, index: int, replacement: str) -> str:
    """Rebuild a whitespace-split line with one word replaced."""

    words = line.split()
    if 0 <= index < len(words):
        words[index] = replacement
    return " ".join(words)
