"""Parsing of assistant triage output.

``claude --output-format json`` wraps the answer in ``{"result": "..."}``,
and the inner string is sometimes fenced in a markdown code block. Each
unwrap step is tried in order; any failure maps to ``None``.
"""

from __future__ import annotations

import json
import re
from typing import Any

from loguru import logger

from termsense.core.types import TriageResult
from termsense.errors import TriageResponseError

ENVELOPE_RESULT_KEY = "result"
NOTIFY_KEY = "shouldNotify"
MESSAGE_KEY = "message"
FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*\n?")
FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")


def _unwrap_envelope(raw: str) -> str | dict[str, Any]:
    """Return the inner payload string, or an already-decoded direct verdict."""

    try:
        envelope = json.loads(raw)
    except json.JSONDecodeError:
        # Not JSON at all: maybe a bare (possibly fenced) payload.
        return raw
    if isinstance(envelope, dict):
        inner = envelope.get(ENVELOPE_RESULT_KEY)
        if isinstance(inner, str):
            return inner
        if isinstance(envelope.get(NOTIFY_KEY), bool):
            return envelope
    raise TriageResponseError(f"unexpected envelope: {raw[:200]}")


def _strip_code_fence(payload: str) -> str:
    cleaned = payload.strip()
    if cleaned.startswith("```"):
        cleaned = FENCE_CLOSE_RE.sub("", FENCE_OPEN_RE.sub("", cleaned))
    return cleaned


def _decode_verdict(payload: str | dict[str, Any]) -> TriageResult:
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise TriageResponseError(f"payload is not JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise TriageResponseError("payload is not an object")

    should_notify = payload.get(NOTIFY_KEY)
    if not isinstance(should_notify, bool):
        raise TriageResponseError(f"missing boolean {NOTIFY_KEY}")
    message = payload.get(MESSAGE_KEY)
    return TriageResult(should_notify=should_notify, message=str(message) if message else "")


def parse_triage_response(stdout: str) -> TriageResult | None:
    """Turn raw assistant stdout into a verdict, or None when it is unusable."""

    trimmed = stdout.strip()
    if not trimmed:
        return None
    try:
        payload = _unwrap_envelope(trimmed)
        if isinstance(payload, str):
            payload = _strip_code_fence(payload)
        return _decode_verdict(payload)
    except TriageResponseError as exc:
        logger.debug("triage.response.invalid error={} raw={}", exc, trimmed[:500])
        return None
