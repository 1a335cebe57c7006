from termsense.core.command_detector import is_flag_or_path, is_path_like, split_env_prefix
from termsense.core.commands import parse_command_words, replace_word, split_words


def test_plain_line_has_no_env_prefix() -> None:
    assert split_env_prefix("echo hello") == ([], "echo hello")


def test_env_prefixed_command_is_split() -> None:
    env, command = split_env_prefix("FOO=bar BAZ=1 git status")
    assert env == ["FOO=bar", "BAZ=1"]
    assert command == "git status"


def test_lone_assignment_stays_the_command() -> None:
    assert split_env_prefix("FOO=bar") == ([], "FOO=bar")


def test_empty_assignment_value_is_not_skipped() -> None:
    assert split_env_prefix("FOO= git status") == ([], "FOO= git status")


def test_path_like_tokens() -> None:
    assert is_path_like("./run.sh")
    assert is_path_like("~/bin/tool")
    assert not is_path_like("git")
    assert not is_path_like("file:///tmp/x")


def test_very_long_path_is_not_path_like() -> None:
    assert not is_path_like("/" + "a/" * 400)


def test_flag_or_path() -> None:
    for token in ("-v", "--help", ".", "/tmp", "~"):
        assert is_flag_or_path(token)
    assert not is_flag_or_path("status")


def test_split_words_tolerates_apostrophes() -> None:
    assert parse_command_words("what's up") == []
    assert split_words("what's up") == ["what's", "up"]
    assert split_words('git commit -m "fix it"') == ["git", "commit", "-m", "fix it"]
    assert split_words("  ") == []


def test_replace_word() -> None:
    assert replace_word("gti  status", 0, "git") == "git status"
    assert replace_word("git", 5, "x") == "git"
