import pytest

from termsense.core.override import check_override_prefix


def test_bang_forces_command_mode() -> None:
    result = check_override_prefix("!git status")
    assert result.override == "COMMAND"
    assert result.cleaned_input == "git status"


def test_question_mark_forces_natural_language() -> None:
    result = check_override_prefix("?how do I undo a commit")
    assert result.override == "NATURAL_LANGUAGE"
    assert result.cleaned_input == "how do I undo a commit"


def test_only_the_marker_is_removed() -> None:
    assert check_override_prefix("! ls").cleaned_input == " ls"
    assert check_override_prefix("!!ls").cleaned_input == "!ls"

    mixed = check_override_prefix("!?x")
    assert mixed.override == "COMMAND"
    assert mixed.cleaned_input == "?x"


def test_input_is_trimmed_before_checking() -> None:
    result = check_override_prefix("   ?why  ")
    assert result.override == "NATURAL_LANGUAGE"
    assert result.cleaned_input == "why"


@pytest.mark.parametrize("text", ["!", "?", "  !  "])
def test_lone_marker_is_not_an_override(text: str) -> None:
    result = check_override_prefix(text)
    assert result.override is None
    assert result.cleaned_input == text.strip()


def test_marker_elsewhere_is_ignored() -> None:
    result = check_override_prefix("echo hi!")
    assert result.override is None
    assert result.cleaned_input == "echo hi!"


def test_empty_input() -> None:
    result = check_override_prefix("   ")
    assert result.override is None
    assert result.cleaned_input == ""
