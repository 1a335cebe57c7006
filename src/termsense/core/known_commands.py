"""Process-wide cache of command names known to exist."""

from __future__ import annotations

import asyncio
import contextlib
import re
import shutil
import subprocess
import threading
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from termsense.core.command_detector import is_path_like

if TYPE_CHECKING:
    from termsense.config import Settings

DEFAULT_SHELL = "/bin/bash"
DEFAULT_DISCOVERY_TIMEOUT_SECONDS = 5.0
DEFAULT_NEGATIVE_CACHE_TTL_SECONDS = 30.0
SHELL_LOOKUP_TIMEOUT_SECONDS = 1.0
# The name is passed as "$1" so it is never parsed as shell code.
SHELL_LOOKUP_SCRIPT = 'command -v -- "$1"'
ALIAS_LINE_RE = re.compile(r"^(?:alias\s+)?([^=\s]+)=")
PRIVATE_NAME_PREFIXES = ("_", "-")

SHELL_BUILTINS: tuple[str, ...] = (
    "cd", "echo", "exit", "export", "alias", "source", "pwd", "pushd", "popd",
    "dirs", "set", "unset", "readonly", "declare", "local", "typeset", "return",
    "break", "continue", "shift", "eval", "exec", "trap", "wait", "kill", "jobs",
    "fg", "bg", "test", "[", "[[", "true", "false", "read", "printf", "let",
    "history", "type", "which", "command", "builtin", "hash", "umask", "ulimit",
    "times", "getopts", "enable", "disown", "suspend", "logout", "compgen",
    "complete", "compopt", "mapfile", "readarray",
    # zsh
    "where", "whence", "autoload", "bindkey", "zstyle", "setopt", "unsetopt",
)


class ShellListingError(RuntimeError):
    """Raised when a shell listing command fails."""


def _is_public_name(name: str) -> bool:
    return bool(name) and not name.startswith(PRIVATE_NAME_PREFIXES)


def parse_name_lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if _is_public_name(line.strip())]


def parse_alias_lines(output: str) -> list[str]:
    names: list[str] = []
    for line in output.splitlines():
        match = ALIAS_LINE_RE.match(line.strip())
        if match is not None and _is_public_name(match.group(1)):
            names.append(match.group(1))
    return names


class KnownCommandRegistry:
    """Case-insensitive set of runnable names with lazy PATH discovery.

    Names only ever get added. Writes go through one lock while lookups stay
    lock-free, so terminal sessions can classify concurrently.
    """

    def __init__(
        self,
        *,
        shell: str = DEFAULT_SHELL,
        discovery_timeout_seconds: float = DEFAULT_DISCOVERY_TIMEOUT_SECONDS,
        negative_cache_ttl_seconds: float = DEFAULT_NEGATIVE_CACHE_TTL_SECONDS,
        builtins: Iterable[str] = SHELL_BUILTINS,
        which: Callable[[str], str | None] = shutil.which,
        clock: Callable[[], float] = time.monotonic,
        shell_lookup: bool = True,
    ) -> None:
        self._shell = shell
        self._shell_lookup = shell_lookup
        self._discovery_timeout_seconds = discovery_timeout_seconds
        self._negative_cache_ttl_seconds = negative_cache_ttl_seconds
        self._which = which
        self._clock = clock
        self._names: dict[str, str] = {}
        self._misses: dict[str, float] = {}
        self._write_lock = threading.Lock()
        self._init_lock = asyncio.Lock()
        self._initialized = False
        self.add_many(builtins)

    @classmethod
    def from_settings(cls, settings: Settings) -> KnownCommandRegistry:
        return cls(
            shell=settings.shell,
            discovery_timeout_seconds=settings.discovery_timeout_seconds,
            negative_cache_ttl_seconds=settings.negative_cache_ttl_seconds,
        )

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._names

    async def initialize(self) -> None:
        """Seed the cache from the user's shell. Later calls are no-ops."""

        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            try:
                discovered = await self._discover()
            except (OSError, TimeoutError, ShellListingError) as exc:
                # Marked initialized anyway so a broken shell is not re-run per lookup.
                logger.warning("known_commands.discover.error shell={} error={}", self._shell, exc)
            else:
                self.add_many(discovered)
                logger.info("known_commands.discover.done shell={} names={}", self._shell, len(self._names))
            self._initialized = True

    def is_known_command(self, name: str) -> bool:
        token = name.strip()
        if not token:
            return False
        if is_path_like(token):
            return True

        folded = token.casefold()
        if folded in self._names:
            return True
        if self._is_recent_miss(folded):
            return False

        if self._probe_path(token):
            self.add(token)
            logger.debug("known_commands.path.hit name={}", token)
            return True

        self._remember_miss(folded)
        return False

    def all_commands(self) -> list[str]:
        """All known names in insertion order, builtins first."""
        with self._write_lock:
            return list(self._names.values())

    def add(self, name: str) -> None:
        self.add_many((name,))

    def add_many(self, names: Iterable[str]) -> None:
        with self._write_lock:
            for name in names:
                cleaned = name.strip()
                if not cleaned:
                    continue
                folded = cleaned.casefold()
                self._names.setdefault(folded, cleaned)
                self._misses.pop(folded, None)

    def _probe_path(self, token: str) -> bool:
        if "/" in token:
            return False
        if self._which(token) is not None:
            return True
        return self._shell_lookup and self._probe_shell(token)

    def _probe_shell(self, token: str) -> bool:
        """Last resort for functions and aliases defined after discovery."""
        try:
            completed = subprocess.run(  # noqa: S603
                [self._shell, "-c", SHELL_LOOKUP_SCRIPT, "_", token],
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=SHELL_LOOKUP_TIMEOUT_SECONDS,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.debug("known_commands.shell_lookup.error name={} error={}", token, exc)
            return False
        return completed.returncode == 0 and bool(completed.stdout.strip())

    def _is_recent_miss(self, folded: str) -> bool:
        expires_at = self._misses.get(folded)
        if expires_at is None:
            return False
        if self._clock() < expires_at:
            return True
        with self._write_lock:
            self._misses.pop(folded, None)
        return False

    def _remember_miss(self, folded: str) -> None:
        if self._negative_cache_ttl_seconds <= 0:
            return
        with self._write_lock:
            self._misses[folded] = self._clock() + self._negative_cache_ttl_seconds

    def _is_zsh(self) -> bool:
        return "zsh" in Path(self._shell).name

    async def _discover(self) -> list[str]:
        if self._is_zsh():
            command_listing = ("-c", "print -l ${(k)commands}")
            function_listing = ("-ic", "print -l ${(k)functions}")
        else:
            command_listing = ("-c", "compgen -c")
            function_listing = ("-ic", "declare -F | cut -d' ' -f3")

        names = parse_name_lines(await self._run_listing(command_listing))

        # Aliases and functions need an interactive shell to source rc files; both are optional.
        try:
            names.extend(parse_alias_lines(await self._run_listing(("-ic", "alias"))))
        except (OSError, TimeoutError, ShellListingError) as exc:
            logger.debug("known_commands.discover.aliases.skip error={}", exc)
        try:
            names.extend(parse_name_lines(await self._run_listing(function_listing)))
        except (OSError, TimeoutError, ShellListingError) as exc:
            logger.debug("known_commands.discover.functions.skip error={}", exc)
        return names

    async def _run_listing(self, args: tuple[str, ...]) -> str:
        process = await asyncio.create_subprocess_exec(
            self._shell,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.DEVNULL,
        )
        try:
            async with asyncio.timeout(self._discovery_timeout_seconds):
                stdout_bytes, _ = await process.communicate()
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise
        if process.returncode != 0:
            raise ShellListingError(f"exit={process.returncode}: {' '.join(args)}")
        return (stdout_bytes or b"").decode("utf-8", errors="replace")
