import json

import pytest

from termsense.triage.response import parse_triage_response


def test_claude_envelope() -> None:
    inner = json.dumps({"shouldNotify": True, "message": "Install the missing module."})
    result = parse_triage_response(json.dumps({"type": "result", "result": inner}))
    assert result is not None
    assert result.should_notify is True
    assert result.message == "Install the missing module."


def test_fenced_payload_inside_envelope() -> None:
    inner = '```json\n{"shouldNotify": false, "message": ""}\n```'
    result = parse_triage_response(json.dumps({"result": inner}))
    assert result is not None
    assert result.should_notify is False
    assert result.message == ""


def test_direct_verdict_object() -> None:
    result = parse_triage_response('{"shouldNotify": true, "message": "Check the path."}')
    assert result is not None
    assert result.message == "Check the path."


def test_bare_fenced_payload() -> None:
    result = parse_triage_response('```\n{"shouldNotify": true}\n```')
    assert result is not None
    assert result.should_notify is True
    assert result.message == ""


def test_non_string_message_is_coerced() -> None:
    result = parse_triage_response('{"shouldNotify": true, "message": 42}')
    assert result is not None
    assert result.message == "42"


@pytest.mark.parametrize(
    "stdout",
    [
        "",
        "   ",
        "not json at all",
        '{"result": "sorry, I cannot help"}',
        '{"result": 3}',
        '{"shouldNotify": "yes"}',
        '{"result": "{\\"message\\": \\"no flag\\"}"}',
        "[1, 2, 3]",
    ],
)
def test_unusable_output_gives_none(stdout: str) -> None:
    assert parse_triage_response(stdout) is None
