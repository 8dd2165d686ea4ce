import json

import pytest

from latinium.extractor import (
    extract_json,
    from_brace_bounds,
    from_code_block,
    from_object_pattern,
    parse_as_is,
)

from tests.utils import GALLIA_RESULT, fenced


def test_bare_json_is_returned_unchanged():
    raw = '  {"words": []}  '
    assert extract_json(raw) == raw


def test_json_scalars_count_as_valid_json():
    assert extract_json("42") == "42"


def test_fenced_block_with_language_tag():
    raw = 'Sure!\n```json\n{"words": [{"word": "est"}]}\n```'
    assert extract_json(raw) == '{"words": [{"word": "est"}]}'


def test_fenced_block_without_language_tag():
    raw = '```\n{"words": []}\n```'
    assert extract_json(raw) == '{"words": []}'


def test_object_embedded_in_prose():
    raw = 'The analysis follows: {"words": [{"word": "tres"}]} Let me know.'
    assert extract_json(raw) == '{"words": [{"word": "tres"}]}'


def test_object_pattern_is_greedy():
    raw = 'first {"a": 1} and then {"b": 2} done'
    assert from_object_pattern(raw) == '{"a": 1} and then {"b": 2}'


def test_brace_bounds_strips_backticks():
    assert from_brace_bounds('``{"a": `1`}``') == '{"a": 1}'


def test_brace_bounds_requires_ordered_braces():
    assert from_brace_bounds("} nothing {") is None


def test_empty_fence_falls_through():
    assert from_code_block("``````") is None


def test_parse_as_is_rejects_prose():
    assert parse_as_is("Gallia est omnis divisa") is None


def test_prose_without_braces_is_returned_as_is():
    raw = "I am sorry, I cannot analyze this text."
    assert extract_json(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "plain prose",
        "```",
        "``` ```",
        "{",
        "}",
        "}{",
        "`{`}`",
        '```json\n{"unterminated": \n```',
        "\x00\x01 binary-ish",
        "{" * 50 + "}" * 3,
    ],
)
def test_extract_never_raises(raw):
    assert isinstance(extract_json(raw), str)


def test_extract_tolerates_none():
    assert extract_json(None) == ""


def test_fenced_result_round_trips():
    assert json.loads(extract_json(fenced(GALLIA_RESULT))) == GALLIA_RESULT
