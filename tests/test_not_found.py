import pytest

from termsense.core.not_found import NOT_FOUND_PATTERNS, is_command_not_found, match_not_found


@pytest.mark.parametrize(
    ("text", "tag"),
    [
        ("bash: foo: command not found", "command_not_found"),
        ("zsh: command not found: foo", "command_not_found"),
        ("sh: 1: foo: not found", "colon_not_found"),
        ("fish: Unknown command: foo", "unknown_command"),
        ("'foo' is not recognized as an internal or external command", "not_recognized"),
        ("cat: missing.txt: No such file or directory", "no_such_file"),
    ],
)
def test_match_not_found_tags(text: str, tag: str) -> None:
    assert match_not_found(text) == tag


def test_first_pattern_wins() -> None:
    assert NOT_FOUND_PATTERNS[0].tag == "command_not_found"
    assert match_not_found("zsh: command not found: gti\nsomething not found") == "command_not_found"


def test_case_insensitive_and_multiline() -> None:
    assert is_command_not_found("BASH: FOO: COMMAND NOT FOUND")
    assert is_command_not_found("building...\nsh: 1: nmp: not found\n$ ")


def test_ansi_escapes_do_not_hide_the_phrase() -> None:
    assert is_command_not_found("\x1b[31mbash: foo: command not found\x1b[0m")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Permission denied",
        "SyntaxError: invalid syntax",
        "curl: (7) Failed to connect: Connection refused",
        "error: build failed",
        "All tests passed",
    ],
)
def test_other_failures_do_not_match(text: str) -> None:
    assert is_command_not_found(text) is False
