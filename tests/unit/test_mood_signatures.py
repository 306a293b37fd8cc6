"""Unit tests for mood-signature learning

Tests cover:
- Phrase extraction boundaries and the per-entry cap
- Insert-then-increment upsert with last-write-wins mood
- Background entry point never raising
"""

from __future__ import annotations

import uuid

import pytest

from moodjournal.analysis.db import (
    delete_mood_signatures,
    get_mood_signature,
    get_top_mood_signatures,
)
from moodjournal.analysis.schemas import Mood
from moodjournal.analysis.signatures import (
    extract_phrases,
    learn_mood_signatures,
    record_mood_signatures,
)


@pytest.mark.parametrize(
    "fragment, kept",
    [
        ("abc", False),
        ("abcd", True),
        ("a" * 49, True),
        ("a" * 50, False),
    ],
)
def test_phrase_length_boundaries(fragment, kept):
    assert (fragment in extract_phrases(f"{fragment}.")) is kept


def test_phrases_are_lowercased_and_trimmed():
    phrases = extract_phrases("Long day at Work!  Went for a RUN;\nfelt better")
    assert phrases == ["long day at work", "went for a run", "felt better"]


def test_at_most_five_phrases_in_order():
    text = "one thing. two thing. three thing. four thing. five thing. six thing."
    assert extract_phrases(text) == [
        "one thing", "two thing", "three thing", "four thing", "five thing"
    ]


def test_empty_text_yields_no_phrases():
    assert extract_phrases("") == []
    assert extract_phrases("ok. no. hi!") == []


def test_first_sighting_inserts_with_confidence_one(db, user):
    record_mood_signatures(db, user.id, "Long day at work.", Mood.SAD)

    signature = get_mood_signature(db, user.id, "long day at work")
    assert signature.associated_mood == Mood.SAD
    assert signature.confidence_score == 1


def test_resighting_increments_and_overwrites_mood(db, user):
    """Mood is last-write-wins, confidence keeps counting"""
    record_mood_signatures(db, user.id, "Long day at work.", Mood.SAD)
    record_mood_signatures(db, user.id, "long day at work!", Mood.HAPPY)

    db.expire_all()
    signature = get_mood_signature(db, user.id, "long day at work")
    assert signature.associated_mood == Mood.HAPPY
    assert signature.confidence_score == 2


def test_signatures_are_per_user(db, user):
    other_user_id = uuid.uuid4()
    record_mood_signatures(db, user.id, "Went hiking.", Mood.HAPPY)
    record_mood_signatures(db, other_user_id, "Went hiking.", Mood.SAD)

    db.expire_all()
    assert get_mood_signature(db, user.id, "went hiking").confidence_score == 1
    assert get_mood_signature(db, other_user_id, "went hiking").associated_mood == Mood.SAD


def test_top_signatures_ordered_by_confidence(db, user):
    record_mood_signatures(db, user.id, "coffee with friends. gym session", Mood.HAPPY)
    record_mood_signatures(db, user.id, "gym session", Mood.EXCITING)

    top = get_top_mood_signatures(db, user.id, limit=1)
    assert [s.phrase for s in top] == ["gym session"]


def test_delete_signatures(db, user):
    record_mood_signatures(db, user.id, "coffee with friends. gym session", Mood.HAPPY)

    assert delete_mood_signatures(db, user.id) == 2
    assert get_top_mood_signatures(db, user.id) == []


def test_learning_runs_in_its_own_session(session_factory, db, user):
    learn_mood_signatures(session_factory, user.id, "Quiet evening reading.", Mood.NEUTRAL)

    assert get_mood_signature(db, user.id, "quiet evening reading").confidence_score == 1


def test_learning_failure_is_logged_not_raised(user, caplog):
    def broken_factory():
        raise RuntimeError("database unavailable")

    learn_mood_signatures(broken_factory, user.id, "Quiet evening reading.", Mood.NEUTRAL)

    assert "Error updating mood signatures" in caplog.text
