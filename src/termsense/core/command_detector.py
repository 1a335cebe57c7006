"""Leading command token detection."""

from __future__ import annotations

import re

ENV_ASSIGN_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
PATH_PREFIXES = ("./", "../", "/", "~/")
FLAG_OR_PATH_PREFIXES = ("-", ".", "/", "~")
MAX_PATH_TOKEN_LENGTH = 240


def split_env_prefix(line: str) -> tuple[list[str], str]:
    """Split ``FOO=bar git status`` into ``(["FOO=bar"], "git status")``.

    A line made only of assignments is returned as the command part.
    """

    parts = line.split()
    index = 0
    while index < len(parts) - 1 and _is_env_assignment(parts[index]):
        index += 1
    if index == 0:
        return [], line.strip()
    return parts[:index], " ".join(parts[index:])


def is_path_like(token: str) -> bool:
    """Whether a token names an executable by path rather than by name."""

    if not token or len(token) > MAX_PATH_TOKEN_LENGTH:
        return False
    if "://" in token:
        return False
    if any(ch in token for ch in ("\n", "\r", "\t")):
        return False
    return token.startswith(PATH_PREFIXES)


def is_flag_or_path(token: str) -> bool:
    return token.startswith(FLAG_OR_PATH_PREFIXES)


def _is_env_assignment(token: str) -> bool:
    if ENV_ASSIGN_RE.match(token) is None:
        return False
    _, value = token.split("=", 1)
    if not value:
        return False
    return "\n" not in value and "\r" not in value and "\t" not in value
