from termsense.triage.prompt import build_triage_prompt, tail_lines


def test_prompt_carries_command_and_exit_code() -> None:
    prompt = build_triage_prompt("npm test", 1, "\n  Error: Cannot find module 'x'\n")
    assert "Command: npm test" in prompt
    assert "Exit code: 1" in prompt
    assert "```\nError: Cannot find module 'x'\n```" in prompt
    assert "DEFAULT: shouldNotify=true" in prompt
    assert "When in doubt, notify" in prompt


def test_prompt_lists_suppress_and_notify_cases() -> None:
    prompt = build_triage_prompt(None, 2, "")
    assert "Command: unknown" in prompt
    for phrase in ("Ctrl+C", "grep", "Module/package not found", "Permission denied", "Syntax errors"):
        assert phrase in prompt


def test_prompt_is_deterministic() -> None:
    assert build_triage_prompt("make", 2, "boom") == build_triage_prompt("make", 2, "boom")


def test_tail_lines() -> None:
    text = "\n".join(str(i) for i in range(50))
    assert tail_lines(text, 3) == "47\n48\n49"
    assert tail_lines("a\nb", 30) == "a\nb"
    assert tail_lines("a\nb", 0) == ""
