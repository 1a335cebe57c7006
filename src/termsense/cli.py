"""termsense command line interface."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer

from termsense.config import get_settings
from termsense.core.classifier import IntentClassifier
from termsense.core.not_found import match_not_found
from termsense.core.types import TriageRequest
from termsense.core.typos import DEFAULT_MAX_DISTANCE, find_typo_suggestion

app = typer.Typer(
    name="termsense",
    help="Tell commands from questions, and real failures from noise.",
    add_completion=False,
)


@app.command()
def classify(
    text: str = typer.Argument(..., help="One line of user input"),
    discover: bool = typer.Option(True, "--discover/--no-discover", help="Seed known commands from the shell first"),
) -> None:
    """Classify input as a shell command or a natural-language question."""

    settings = get_settings(profile="cli")
    classifier = IntentClassifier.from_settings(settings)
    if discover:
        asyncio.run(classifier.initialize())

    verdict = classifier.classify(text)
    typer.echo(f"intent: {verdict.intent}")
    typer.echo(f"reason: {verdict.reason}")
    typer.echo(f"input: {verdict.cleaned_input}")
    if verdict.suggestion is not None:
        typer.echo(f"suggestion: {verdict.suggestion.full_suggestion}")


@app.command()
def suggest(
    word: str = typer.Argument(..., help="Possibly mistyped word"),
    candidates: list[str] = typer.Argument(..., help="Candidate spellings"),  # noqa: B008
    max_distance: int = typer.Option(DEFAULT_MAX_DISTANCE, "--max-distance", min=0, help="Largest edit distance"),
) -> None:
    """Print the closest candidate, or exit 1 when none is close enough."""

    suggestion = find_typo_suggestion(word, candidates, max_distance)
    if suggestion is None:
        raise typer.Exit(1)
    typer.echo(suggestion)


@app.command("not-found")
def not_found(
    text: str | None = typer.Argument(None, help="Terminal output; read from stdin when omitted"),
) -> None:
    """Print the matching not-found tag, or exit 1."""

    output = sys.stdin.read() if text is None else text
    tag = match_not_found(output)
    if tag is None:
        raise typer.Exit(1)
    typer.echo(tag)


@app.command()
def triage(
    exit_code: int = typer.Option(..., "--exit-code", help="Exit code of the failed command"),
    command: str | None = typer.Option(None, "--command", help="The command that failed"),
    output_file: Path | None = typer.Option(None, "--output-file", help="Recent terminal output"),  # noqa: B008
    cwd: Path | None = typer.Option(None, "--cwd", help="Working directory for the assistant"),  # noqa: B008
) -> None:
    """Decide whether a failed command deserves a notification."""

    settings = get_settings(profile="cli")
    if output_file is not None:
        try:
            recent_output = output_file.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            typer.echo(f"cannot read {output_file}: {exc}", err=True)
            raise typer.Exit(2) from exc
    else:
        recent_output = ""

    classifier = IntentClassifier.from_settings(settings)
    request = TriageRequest(
        command=command,
        exit_code=exit_code,
        recent_output=recent_output,
        cwd=str(cwd) if cwd is not None else None,
    )
    decision = asyncio.run(classifier.triage_failure(request))
    typer.echo(f"notify: {str(decision.should_notify).lower()}")
    typer.echo(f"reason: {decision.reason}")
    if decision.message:
        typer.echo(f"message: {decision.message}")
