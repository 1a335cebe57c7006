from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from termsense.core.known_commands import KnownCommandRegistry

FIXTURE_COMMANDS = ("cd", "echo", "ls", "cat", "grep", "git", "npm", "docker", "kubectl", "make", "python")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in list(os.environ):
        if key.startswith("TERMSENSE_"):
            monkeypatch.delenv(key, raising=False)
    # Keep a developer's .env out of Settings().
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def no_path() -> Callable[[str], str | None]:
    return lambda _name: None


@pytest.fixture
def registry(no_path: Callable[[str], str | None]) -> KnownCommandRegistry:
    return KnownCommandRegistry(shell_lookup=False, builtins=FIXTURE_COMMANDS, which=no_path)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        path.chmod(0o755)
        return path

    return _write
