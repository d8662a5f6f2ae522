"""
Tests for tolerant JSON parsing of model output.
"""

import pytest

from counsel_ai.exceptions import ResponseParseError
from counsel_ai.utils import parse_json_object, strip_code_fence


def test_plain_json():
    assert parse_json_object('{"rating": 4}') == {"rating": 4}


def test_json_with_surrounding_whitespace():
    assert parse_json_object('\n  {"rating": 4}  \n') == {"rating": 4}


def test_json_fence():
    text = '```json\n{"rating": 5, "sentiment": "positive"}\n```'
    assert parse_json_object(text) == {"rating": 5, "sentiment": "positive"}


def test_bare_fence():
    assert parse_json_object('```\n{"rating": 2}\n```') == {"rating": 2}


def test_single_line_fence():
    assert parse_json_object('```json {"rating": 1}```') == {"rating": 1}


def test_not_json_raises():
    with pytest.raises(ResponseParseError):
        parse_json_object("The student seems happy with the session.")


def test_fenced_garbage_raises():
    with pytest.raises(ResponseParseError):
        parse_json_object("```json\nnot json at all\n```")


def test_array_is_rejected():
    """Only JSON objects are accepted."""
    with pytest.raises(ResponseParseError):
        parse_json_object("[1, 2, 3]")


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_json_object("")


def test_strip_code_fence_without_fence():
    assert strip_code_fence("  plain text ") == "plain text"


def test_unclosed_fence():
    assert parse_json_object('```json\n{"rating": 5, "summary": "Good."}') == {"rating": 5, "summary": "Good."}


def test_trailing_fence_only():
    assert parse_json_object('{"rating": 5, "summary": "Good."}\n```') == {"rating": 5, "summary": "Good."}


@pytest.mark.parametrize(
    "text,expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```json\n{"a": 1}', '{"a": 1}'),
        ('{"a": 1}\n```', '{"a": 1}'),
        ("```\n```", ""),
    ],
)
def test_strip_code_fence_markers_independently(text, expected):
    assert strip_code_fence(text) == expected
