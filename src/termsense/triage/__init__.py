"""Failed-command triage through an external assistant."""

from termsense.triage.client import (
    TRIAGE_TIMEOUT_SECONDS,
    ErrorTriageClient,
    TriageHandle,
    assistant_argv,
    triage_error,
)
from termsense.triage.prompt import build_triage_prompt, tail_lines
from termsense.triage.response import parse_triage_response

__all__ = [
    "TRIAGE_TIMEOUT_SECONDS",
    "ErrorTriageClient",
    "TriageHandle",
    "assistant_argv",
    "build_triage_prompt",
    "parse_triage_response",
    "tail_lines",
    "triage_error",
]
