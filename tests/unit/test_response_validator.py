"""Unit tests for turning raw model replies into mood classifications

Tests cover:
- Code fence stripping
- Mood normalization (case, whitespace, unknown values)
- Fallback on unparseable replies
- Schema violations on parseable-but-incomplete replies
"""

from __future__ import annotations

import pytest

from moodjournal.analysis.errors import SchemaViolationError
from moodjournal.analysis.schemas import (
    FALLBACK_REFLECTION,
    FallbackClassification,
    Mood,
    ParsedClassification,
    VALID_MOODS,
)
from moodjournal.analysis.validator import (
    normalize_mood,
    strip_code_fences,
    validate_mood_response,
)


def test_fenced_reply_is_parsed():
    """A ```json fenced reply with an upper-case mood is accepted"""
    raw = '```json\n{"mood":"HAPPY","response":"Great!"}\n```'

    result = validate_mood_response(raw)

    assert isinstance(result, ParsedClassification)
    assert result.mood == Mood.HAPPY
    assert result.response == "Great!"


def test_bare_fence_without_language_tag():
    raw = '```\n{"mood": "sad", "response": "Be gentle with yourself."}\n```'
    assert validate_mood_response(raw).mood == Mood.SAD


def test_strip_code_fences_is_idempotent():
    raw = '```json\n{"mood": "sad"}\n```'
    once = strip_code_fences(raw)
    assert strip_code_fences(once) == once == '{"mood": "sad"}'


@pytest.mark.parametrize(
    "value, expected",
    [
        ("happy", Mood.HAPPY),
        ("  Nervous ", Mood.NERVOUS),
        ("EXCITING", Mood.EXCITING),
        ("angry", Mood.NEUTRAL),
        ("", Mood.NEUTRAL),
        (None, Mood.NEUTRAL),
        (3, Mood.NEUTRAL),
    ],
)
def test_normalize_mood(value, expected):
    assert normalize_mood(value) == expected


def test_normalize_mood_is_idempotent():
    for value in ["Happy", "furious", " sad "]:
        once = normalize_mood(value)
        assert normalize_mood(once.value) == once


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"mood":"HAPPY","response":"Great!"}\n```',
        "I think you sound happy today!",
    ],
)
def test_validate_mood_response_is_idempotent(raw):
    assert validate_mood_response(raw) == validate_mood_response(raw)


def test_normalize_mood_accepts_enum_members():
    assert normalize_mood(Mood.SAD) is Mood.SAD


def test_unknown_mood_is_coerced_to_neutral():
    result = validate_mood_response('{"mood": "angry", "response": "Breathe."}')

    assert isinstance(result, ParsedClassification)
    assert result.mood == Mood.NEUTRAL
    assert result.mood.value in VALID_MOODS


def test_prose_reply_falls_back():
    """Non-JSON output degrades to the neutral fallback instead of failing"""
    result = validate_mood_response("I think you sound happy today!")

    assert isinstance(result, FallbackClassification)
    assert result.kind == "fallback"
    assert result.mood == Mood.NEUTRAL
    assert result.response == FALLBACK_REFLECTION


@pytest.mark.parametrize(
    "raw",
    [
        '{"response": "No mood here"}',
        '{"mood": "happy"}',
        '{"mood": "happy", "response": ""}',
        '{"mood": "happy", "response": "   "}',
        '{"mood": "happy", "response": 42}',
        '["happy", "nice"]',
    ],
)
def test_incomplete_object_is_schema_violation(raw):
    with pytest.raises(SchemaViolationError) as exc_info:
        validate_mood_response(raw)

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Invalid response format from AI"
