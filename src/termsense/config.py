"""Configuration management for termsense."""

from __future__ import annotations

import os
import shutil

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import AssistantNotFoundError
from .logging_utils import LogProfile, configure_logging

DEFAULT_ASSISTANT_EXECUTABLE = "claude"


def _default_shell() -> str:
    return os.environ.get("SHELL") or "/bin/bash"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="TERMSENSE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Error triage
    assistant_path: str | None = Field(None, description="Assistant executable used for error triage")
    assistant_model: str = Field(default="haiku", description="Lightweight model requested from the assistant")
    triage_enabled: bool = Field(default=True, description="Whether failed commands are triaged at all")
    triage_timeout_seconds: float = Field(default=8.0, gt=0, description="Hard limit for one triage subprocess")
    triage_max_concurrent: int = Field(default=4, ge=1, description="Maximum simultaneous triage subprocesses")
    triage_rate_limit_seconds: float = Field(default=3.0, ge=0, description="Minimum gap between triages per session")
    triage_output_lines: int = Field(default=30, ge=1, description="Trailing output lines sent to the assistant")

    # Command detection
    negative_cache_ttl_seconds: float = Field(default=30.0, ge=0, description="Lifetime of PATH lookup misses")
    discovery_timeout_seconds: float = Field(default=5.0, gt=0, description="Timeout for shell command discovery")
    shell: str = Field(default_factory=_default_shell, description="Shell used to discover commands")
    denylist: str = Field(default="", description="Comma-separated first words that always run as commands")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")

    @property
    def denied_commands(self) -> frozenset[str]:
        return frozenset(item.strip().casefold() for item in self.denylist.split(",") if item.strip())

    def resolve_assistant_path(self) -> str:
        """Return the assistant executable, falling back to PATH lookup.

        Raises:
            AssistantNotFoundError: when nothing is configured and nothing is on PATH.
        """
        if self.assistant_path:
            return self.assistant_path
        found = shutil.which(DEFAULT_ASSISTANT_EXECUTABLE)
        if found is None:
            raise AssistantNotFoundError(f"'{DEFAULT_ASSISTANT_EXECUTABLE}' not found on PATH")
        return found


def get_settings(*, profile: LogProfile = "default") -> Settings:
    """Build settings from the environment and configure logging.

    Args:
        profile: Logging profile to install

    Returns:
        Settings instance
    """
    settings = Settings()
    configure_logging(profile=profile, level=settings.log_level)
    return settings
