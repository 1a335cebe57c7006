"""Recognize "command not found" style shell errors."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class NotFoundPattern:
    """One tagged pattern of the bank."""

    tag: str
    regex: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


def _pattern(tag: str, expression: str) -> NotFoundPattern:
    return NotFoundPattern(tag=tag, regex=re.compile(expression, re.IGNORECASE | re.MULTILINE))


# Order matters: the most specific phrasing is reported first.
NOT_FOUND_PATTERNS: tuple[NotFoundPattern, ...] = (
    # bash: foo: command not found / zsh: command not found: foo
    _pattern("command_not_found", r"command not found"),
    # sh: 1: foo: not found
    _pattern("colon_not_found", r":\s*not found\s*$"),
    _pattern("not_found", r"\bnot found\b"),
    # fish: Unknown command: foo
    _pattern("unknown_command", r"\bunknown command\b"),
    # 'foo' is not recognized as an internal or external command
    _pattern("not_recognized", r"\bnot recognized\b"),
    _pattern("no_such_file", r"no such file or directory"),
)


def match_not_found(text: str) -> str | None:
    """Return the tag of the first pattern matching ``text``."""

    if not text:
        return None
    for pattern in NOT_FOUND_PATTERNS:
        if pattern.matches(text):
            return pattern.tag
    return None


def is_command_not_found(text: str) -> bool:
    return match_not_found(text) is not None
