"""Unit tests for people/intent extraction and outreach drafts

Tests cover:
- Crisis short-circuit (no AI call)
- Name cap and shape validation of AI replies
- Local heuristic fallback
- Conflict detection and outreach message generation
- Template drafts and WhatsApp links
"""

from __future__ import annotations

import json

import pytest

from moodjournal.analysis.errors import (
    ConfigurationError,
    GatewayError,
    InputError,
    RateLimitedError,
)
from moodjournal.analysis.outreach import (
    compose_draft,
    contains_crisis_language,
    detect_conflict,
    extract_names_intent,
    fallback_extraction,
    generate_outreach_message,
    heuristic_people,
    whatsapp_deeplink,
)
from tests.fakes import FakeGateway


@pytest.mark.parametrize(
    "text",
    [
        "Some days I want to die.",
        "I thought about SUICIDE again",
        "There is no reason to live anymore",
        "I keep wanting to hurt myself",
    ],
)
def test_crisis_language_skips_ai(text):
    gateway = FakeGateway()

    result = extract_names_intent(gateway, text)

    assert result.is_crisis is True
    assert result.people == []
    assert result.intent == "none"
    assert gateway.calls == []


def test_crisis_check_is_case_insensitive():
    assert contains_crisis_language("I Want To Die")
    assert not contains_crisis_language("I want to dive into this book")


def test_ai_names_are_capped_at_three():
    reply = json.dumps({"people": ["Ann", "Ben", "Cat", "Dan", "Eve"], "intent": "share"})
    gateway = FakeGateway(reply)

    result = extract_names_intent(gateway, "Dinner with Ann, Ben, Cat, Dan and Eve was fun")

    assert result.people == ["Ann", "Ben", "Cat"]
    assert result.intent == "share"
    assert result.is_crisis is False
    assert gateway.calls[0]["temperature"] == 0.2


def test_fenced_ai_reply_is_accepted():
    gateway = FakeGateway('```json\n{"people": ["Priya"], "intent": "apologize"}\n```')

    result = extract_names_intent(gateway, "I snapped at Priya")

    assert result.people == ["Priya"]
    assert result.intent == "apologize"


@pytest.mark.parametrize(
    "reply",
    [
        "Sarah seems important here",
        '{"people": "Sarah", "intent": "share"}',
        '{"people": ["Sarah"], "intent": "celebrate"}',
        '{"intent": "share"}',
    ],
)
def test_bad_ai_reply_uses_heuristic(reply):
    gateway = FakeGateway(reply)

    result = extract_names_intent(gateway, "Today I had so much fun with Sarah at the park")

    assert result.people == ["Sarah"]
    assert result.intent == "share"


def test_gateway_failure_uses_heuristic():
    gateway = FakeGateway(GatewayError("AI gateway error: 500"))

    result = extract_names_intent(gateway, "Had a fight with Jordan about chores.")

    assert result.people == ["Jordan"]
    assert result.intent == "apologize"


def test_rate_limit_uses_heuristic():
    gateway = FakeGateway(RateLimitedError())
    result = extract_names_intent(gateway, "Went out with Maya.")
    assert result.people == ["Maya"]
    assert result.intent == "none"


def test_missing_credential_is_not_masked():
    gateway = FakeGateway(ConfigurationError("AI_GATEWAY_API_KEY is not configured"))
    with pytest.raises(ConfigurationError):
        extract_names_intent(gateway, "Lunch with Maya.")


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_text_is_input_error(text):
    with pytest.raises(InputError):
        extract_names_intent(FakeGateway(), text)


def test_heuristic_skips_first_word_and_stopwords():
    text = "Sarah said Monday that Tom and Tom, plus Lee, Al and Mom. Then Kim joined"
    assert heuristic_people(text) == ["Tom", "Lee", "Kim"]


def test_heuristic_caps_names():
    text = "Met Ann, Ben, Cat, Dan and Eve."
    assert heuristic_people(text) == ["Ann", "Ben", "Cat"]


def test_heuristic_apology_beats_celebration():
    result = fallback_extraction("Great party with Nina but I am sorry I left early")
    assert result.intent == "apologize"


def test_heuristic_celebration_requires_a_name():
    result = fallback_extraction("the party was so much fun")
    assert result.people == []
    assert result.intent == "none"


def test_heuristic_keywords_match_whole_words():
    result = fallback_extraction("went to a funeral with Grace")
    assert result.intent == "none"


def test_conflict_detection_passes_ai_draft_through():
    reply = json.dumps(
        {
            "hasConflict": True,
            "hasPositive": False,
            "personName": "Sarah",
            "conflictType": "argument",
            "message": "hey, sorry about earlier",
        }
    )
    gateway = FakeGateway(reply)

    result = detect_conflict(gateway, "Argued with Sarah about the trip")

    assert result.has_conflict is True
    assert result.person_name == "Sarah"
    assert result.conflict_type == "argument"
    assert result.message == "hey, sorry about earlier"
    assert gateway.calls[0]["temperature"] == 0.3


def test_conflict_detection_neither():
    gateway = FakeGateway('{"hasConflict": false, "hasPositive": false}')

    result = detect_conflict(gateway, "Did laundry and read a book.")

    assert result.has_conflict is False
    assert result.has_positive is False
    assert result.person_name is None


def test_conflict_detection_falls_back_to_heuristic():
    gateway = FakeGateway('{"hasConflict": true}')

    result = detect_conflict(gateway, "Had the best day with Leo at the beach, so much fun")

    assert result.has_positive is True
    assert result.has_conflict is False
    assert result.person_name == "Leo"
    assert result.message.startswith("Hey Leo")


def test_conflict_detection_crisis_short_circuit():
    gateway = FakeGateway()
    result = detect_conflict(gateway, "I want to end my life")
    assert result.is_crisis is True
    assert gateway.calls == []


def test_outreach_message_from_action():
    gateway = FakeGateway("  hey Sam, sorry for snapping earlier  ")

    result = generate_outreach_message(
        gateway, person_name="Sam", action_type="apologize", interaction_type="conflict"
    )

    assert result.message == "hey Sam, sorry for snapping earlier"
    prompt = gateway.calls[0]["messages"][0]["content"]
    assert "Sam" in prompt
    assert gateway.calls[0]["temperature"] == 0.8


def test_outreach_message_with_explicit_prompt():
    gateway = FakeGateway("sure thing")
    generate_outreach_message(gateway, prompt="Write a thank-you text to Jo")
    assert gateway.calls[0]["messages"] == [{"role": "user", "content": "Write a thank-you text to Jo"}]


def test_outreach_message_requires_target():
    with pytest.raises(InputError):
        generate_outreach_message(FakeGateway(), action_type="talk")


def test_outreach_message_surfaces_rate_limit():
    with pytest.raises(RateLimitedError):
        generate_outreach_message(FakeGateway(RateLimitedError()), person_name="Sam")


def test_outreach_message_crisis():
    gateway = FakeGateway()
    result = generate_outreach_message(gateway, person_name="Sam", journal_text="I want to die")
    assert result.is_crisis is True
    assert result.message is None
    assert gateway.calls == []


def test_compose_draft_tones():
    assert "I'm sorry" in compose_draft("Sam", "apologize")
    assert "I'm sorry" in compose_draft("Sam", "none", mood="Nervous")
    assert "nice time" in compose_draft("Sam", "share", mood="happy")


def test_whatsapp_deeplink_encoding():
    url = whatsapp_deeplink("Hey Sam, it's fun & great?")
    assert url == "https://wa.me/?text=Hey+Sam%2C+it's+fun+%26+great%3F"
