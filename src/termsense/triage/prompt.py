"""Prompt construction for error triage."""

from __future__ import annotations

DEFAULT_OUTPUT_LINES = 30
UNKNOWN_COMMAND = "unknown"

_RESPONSE_INSTRUCTIONS = """Respond with ONLY a JSON object (no markdown, no explanation):
{"shouldNotify": true/false, "message": "one-sentence contextual help"}

DEFAULT: shouldNotify=true. Most non-zero exit codes indicate real problems the user needs help with.

shouldNotify=false ONLY when:
- The command is explicitly designed to return non-zero (e.g., "false", "test" expressions, "grep" with no matches)
- User intentionally interrupted (Ctrl+C / SIGINT / SIGTERM)
- Build/test watchers that restart on failure (expected workflow)
- The user already received a notification for the same type of error recently (visible in the terminal output above)

shouldNotify=true for ANY real execution error, including but not limited to:
- Module/package not found (require, import, pip, npm errors)
- File or directory not found (ENOENT, "No such file")
- Permission denied
- Syntax errors, parse errors, compilation errors
- Runtime exceptions, crashes, segfaults
- Missing commands or dependencies
- Configuration errors
- Failed tests or assertions
- Network errors, connection refused
- Any error message in the output that indicates something went wrong

When in doubt, notify. It is better to show a notification for a real error than to miss one.

If shouldNotify=false, message can be empty string.
If shouldNotify=true, message should be a brief, actionable one-sentence summary of what went wrong."""


def tail_lines(text: str, limit: int = DEFAULT_OUTPUT_LINES) -> str:
    """Keep only the last ``limit`` lines of terminal output."""

    if limit <= 0:
        return ""
    return "\n".join(text.split("\n")[-limit:])


def build_triage_prompt(command: str | None, exit_code: int, recent_output: str) -> str:
    """Build the prompt asking the assistant whether a failure is notify-worthy."""

    trimmed_output = recent_output.strip()
    return (
        "You are an error triage system. A terminal command just failed.\n"
        "\n"
        f"Command: {command or UNKNOWN_COMMAND}\n"
        f"Exit code: {exit_code}\n"
        f"Recent output (last {DEFAULT_OUTPUT_LINES} lines):\n"
        "```\n"
        f"{trimmed_output}\n"
        "```\n"
        "\n"
        f"{_RESPONSE_INSTRUCTIONS}"
    )
