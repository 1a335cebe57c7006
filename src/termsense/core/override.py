"""Explicit intent override prefixes.

``!ls`` forces command mode and ``?how do I`` forces natural-language mode.
"""

from __future__ import annotations

from termsense.core.types import ClassificationResult, Intent

OVERRIDE_PREFIXES: dict[str, Intent] = {
    "!": "COMMAND",
    "?": "NATURAL_LANGUAGE",
}


def check_override_prefix(text: str) -> ClassificationResult:
    """Strip one leading override marker from trimmed input."""

    trimmed = text.strip()
    if len(trimmed) > 1:
        override = OVERRIDE_PREFIXES.get(trimmed[0])
        if override is not None:
            return ClassificationResult(override=override, cleaned_input=trimmed[1:])
    return ClassificationResult(override=None, cleaned_input=trimmed)
