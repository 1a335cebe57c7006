from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

import termsense.config as config_module
from termsense.config import Settings, get_settings
from termsense.core.classifier import IntentClassifier
from termsense.errors import AssistantNotFoundError, ConfigurationError
from termsense.triage.client import ErrorTriageClient


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHELL", "/bin/zsh")
    settings = Settings()

    assert settings.assistant_path is None
    assert settings.assistant_model == "haiku"
    assert settings.triage_enabled is True
    assert settings.triage_timeout_seconds == 8.0
    assert settings.triage_max_concurrent == 4
    assert settings.triage_rate_limit_seconds == 3.0
    assert settings.triage_output_lines == 30
    assert settings.negative_cache_ttl_seconds == 30.0
    assert settings.shell == "/bin/zsh"
    assert settings.denied_commands == frozenset()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERMSENSE_TRIAGE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("TERMSENSE_DENYLIST", "vim, SSH,,")
    monkeypatch.setenv("TERMSENSE_TRIAGE_ENABLED", "false")
    settings = Settings()

    assert settings.triage_timeout_seconds == 2.5
    assert settings.denied_commands == frozenset({"vim", "ssh"})
    assert settings.triage_enabled is False


def test_dotenv_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("TERMSENSE_ASSISTANT_MODEL=sonnet\n", encoding="utf-8")
    assert Settings().assistant_model == "sonnet"


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(triage_max_concurrent=0)
    with pytest.raises(ValidationError):
        Settings(triage_timeout_seconds=0)


def test_resolve_assistant_path(monkeypatch: pytest.MonkeyPatch) -> None:
    assert Settings(assistant_path="/opt/claude").resolve_assistant_path() == "/opt/claude"

    monkeypatch.setattr(config_module.shutil, "which", lambda name: f"/usr/local/bin/{name}")
    assert Settings().resolve_assistant_path() == "/usr/local/bin/claude"

    monkeypatch.setattr(config_module.shutil, "which", lambda _name: None)
    with pytest.raises(AssistantNotFoundError) as exc_info:
        Settings().resolve_assistant_path()
    assert isinstance(exc_info.value, ConfigurationError)


def test_client_binds_settings() -> None:
    settings = Settings(assistant_path="/opt/claude", assistant_model="sonnet", triage_max_concurrent=1)
    client = ErrorTriageClient.from_settings(settings)
    assert client.assistant_path == "/opt/claude"
    assert client._model == "sonnet"
    assert client._max_concurrent == 1


def test_classifier_from_settings_without_assistant(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module.shutil, "which", lambda _name: None)
    classifier = IntentClassifier.from_settings(Settings(shell="/bin/sh"))
    assert classifier.triage_client.assistant_path is None
    assert classifier.known._shell == "/bin/sh"


def test_get_settings_configures_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str | None]] = []
    monkeypatch.setattr(config_module, "configure_logging", lambda *, profile, level: calls.append((profile, level)))
    monkeypatch.setenv("TERMSENSE_LOG_LEVEL", "debug")

    settings = get_settings(profile="cli")

    assert settings.log_level == "debug"
    assert calls == [("cli", "debug")]
