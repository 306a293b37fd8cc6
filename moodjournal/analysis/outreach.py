"""
People/intent extraction for the "send a note" flow.

Two call sites share the same primitives:

* `extract_names_intent` answers whether to offer a drafted message and to whom.
* `detect_conflict` classifies the entry as a conflict or a positive moment and
  drafts the message in one call.

Both check for crisis language first and never reach the model when it is
present. When the model fails or answers with the wrong shape, a local
capitalized-word heuristic takes over.
"""

import logging
import re
from typing import Any, List, Optional, Tuple
from urllib.parse import quote

import moodjournal.analysis.prompts.outreach_prompts_templates as prompts
from moodjournal.analysis.ai_providers.openai import (
    CONFLICT_TEMPERATURE,
    EXTRACTION_TEMPERATURE,
    OUTREACH_TEMPERATURE,
    ChatGateway,
)
from moodjournal.analysis.errors import GatewayError, InputError
from moodjournal.analysis.schemas import (
    ConflictDetection,
    Intent,
    NamesIntentResult,
    OutreachMessage,
)
from moodjournal.analysis.validator import normalize_mood, parse_json_reply

logger = logging.getLogger(__name__)

VALID_INTENTS = ("share", "apologize", "none")
_NAME_RE = re.compile(r"^[A-Z][a-z]+$")
_TRAILING_PUNCT_RE = re.compile(r"[.,!?;:]+$")


# Shared primitives
def contains_crisis_language(text: str) -> bool:
    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in prompts.CRISIS_KEYWORDS)


def _mentions_any(text: str, keywords: Tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(k)}\b", lowered) for k in keywords)


def _cap_people(people: List[str]) -> List[str]:
    out: List[str] = []
    for person in people:
        name = person.strip()
        if name and name not in out:
            out.append(name)
    return out[: prompts.MAX_PEOPLE]


def heuristic_people(text: str) -> List[str]:
    """
    Capitalized words that are probably names.

    The first word is skipped since sentences start with a capital anyway.
    """
    names: List[str] = []
    for raw in (text or "").split()[1:]:
        word = _TRAILING_PUNCT_RE.sub("", raw)
        if len(word) > 2 and _NAME_RE.match(word) and word not in prompts.NAME_STOPWORDS:
            if word not in names:
                names.append(word)
        if len(names) == prompts.MAX_PEOPLE:
            break
    return names


def heuristic_intent(text: str, people: List[str]) -> Intent:
    """Apology language outranks celebration; sharing needs someone to share with."""
    if _mentions_any(text, prompts.APOLOGY_KEYWORDS):
        return "apologize"
    if people and _mentions_any(text, prompts.CELEBRATION_KEYWORDS):
        return "share"
    return "none"


def fallback_extraction(text: str) -> NamesIntentResult:
    people = heuristic_people(text)
    return NamesIntentResult(people=people, intent=heuristic_intent(text, people), is_crisis=False)


def _require_text(journal_text: Optional[str]) -> str:
    if not journal_text or not journal_text.strip():
        raise InputError("journalText is required")
    return journal_text


# Name + intent extraction
def _validate_names_intent(data: Any) -> Optional[NamesIntentResult]:
    if not isinstance(data, dict):
        return None
    people = data.get("people")
    intent = data.get("intent")
    if not isinstance(people, list) or intent not in VALID_INTENTS:
        return None
    names = [p for p in people if isinstance(p, str)]
    return NamesIntentResult(people=_cap_people(names), intent=intent, is_crisis=False)


def extract_names_intent(gateway: ChatGateway, journal_text: Optional[str]) -> NamesIntentResult:
    """
    Finds up to three people in the entry and whether the user may want to
    share a moment with them or apologize.

    Raises:
        InputError: No journal text.
        ConfigurationError: AI credential missing (crisis text never gets here).
    """
    text = _require_text(journal_text)
    if contains_crisis_language(text):
        logger.info("Crisis language detected, skipping name/intent extraction")
        return NamesIntentResult(people=[], intent="none", is_crisis=True)

    messages = [
        {"role": "system", "content": prompts.NAMES_INTENT_SYSTEM_PROMPT},
        {"role": "user", "content": prompts.NAMES_INTENT_USER_TEMPLATE.format(journal_text=text)},
    ]
    try:
        raw = gateway.complete(messages, temperature=EXTRACTION_TEMPERATURE)
        result = _validate_names_intent(parse_json_reply(raw))
    except GatewayError as e:
        logger.warning(f"Name/intent extraction failed, using heuristic: {e}")
        return fallback_extraction(text)
    except ValueError as e:
        logger.warning(f"Name/intent reply was not JSON, using heuristic: {e}")
        return fallback_extraction(text)

    if result is None:
        logger.warning("Name/intent reply had the wrong shape, using heuristic")
        return fallback_extraction(text)
    return result


# Conflict / positive-moment detection
def _validate_conflict(data: Any) -> Optional[ConflictDetection]:
    if not isinstance(data, dict):
        return None
    has_conflict = data.get("hasConflict", False)
    has_positive = data.get("hasPositive", False)
    if not isinstance(has_conflict, bool) or not isinstance(has_positive, bool):
        return None
    if not (has_conflict or has_positive):
        return ConflictDetection()

    person = data.get("personName")
    if not isinstance(person, str) or not person.strip():
        return None
    message = data.get("message")
    conflict_type = data.get("conflictType")
    return ConflictDetection(
        has_conflict=has_conflict,
        has_positive=has_positive and not has_conflict,
        person_name=person.strip(),
        conflict_type=conflict_type if has_conflict and isinstance(conflict_type, str) else None,
        message=message.strip() if isinstance(message, str) and message.strip() else None,
    )


def _fallback_conflict(text: str) -> ConflictDetection:
    extraction = fallback_extraction(text)
    if not extraction.people or extraction.intent == "none":
        return ConflictDetection()
    person = extraction.people[0]
    return ConflictDetection(
        has_conflict=extraction.intent == "apologize",
        has_positive=extraction.intent == "share",
        person_name=person,
        message=compose_draft(person, extraction.intent),
    )


def detect_conflict(gateway: ChatGateway, journal_text: Optional[str]) -> ConflictDetection:
    """
    Detects a conflict or positive interaction with a named person and drafts
    a casual message to them.
    """
    text = _require_text(journal_text)
    if contains_crisis_language(text):
        logger.info("Crisis language detected, skipping conflict detection")
        return ConflictDetection(is_crisis=True)

    messages = [{"role": "user", "content": prompts.CONFLICT_DETECTION_TEMPLATE.format(journal_text=text)}]
    try:
        raw = gateway.complete(messages, temperature=CONFLICT_TEMPERATURE)
        result = _validate_conflict(parse_json_reply(raw))
    except GatewayError as e:
        logger.warning(f"Conflict detection failed, using heuristic: {e}")
        return _fallback_conflict(text)
    except ValueError as e:
        logger.warning(f"Conflict detection reply was not JSON, using heuristic: {e}")
        return _fallback_conflict(text)

    if result is None:
        logger.warning("Conflict detection reply had the wrong shape, using heuristic")
        return _fallback_conflict(text)

    if result.person_name and not result.message:
        intent: Intent = "apologize" if result.has_conflict else "share"
        result.message = compose_draft(result.person_name, intent)
    return result


# Message generation
def build_outreach_prompt(
    person_name: str,
    action_type: Optional[str],
    interaction_type: Optional[str] = None,
    journal_text: Optional[str] = None,
    mood: Optional[str] = None,
) -> str:
    action = prompts.OUTREACH_ACTIONS.get(action_type or "", "reach out")
    interaction = interaction_type if interaction_type in ("conflict", "positive") else "recent"
    return prompts.OUTREACH_MESSAGE_TEMPLATE.format(
        person_name=person_name,
        journal_text=(journal_text or "").strip(),
        interaction=interaction,
        mood=normalize_mood(mood).value if mood else "neutral",
        action=action,
    )


def generate_outreach_message(
    gateway: ChatGateway,
    *,
    prompt: Optional[str] = None,
    person_name: Optional[str] = None,
    action_type: Optional[str] = None,
    interaction_type: Optional[str] = None,
    journal_text: Optional[str] = None,
    mood: Optional[str] = None,
) -> OutreachMessage:
    """
    Writes the message the user picked an action for. Either a ready-made
    `prompt` or a `person_name` (plus action/context) is required.

    Raises:
        InputError: Neither a prompt nor a person name was supplied.
        GatewayError: Upstream failures are surfaced, not masked.
    """
    if journal_text and contains_crisis_language(journal_text):
        logger.info("Crisis language detected, not drafting an outreach message")
        return OutreachMessage(is_crisis=True)

    if not prompt:
        if not person_name or not person_name.strip():
            raise InputError("prompt or personName is required")
        prompt = build_outreach_prompt(person_name.strip(), action_type, interaction_type, journal_text, mood)

    raw = gateway.complete([{"role": "user", "content": prompt}], temperature=OUTREACH_TEMPERATURE)
    return OutreachMessage(message=raw.strip())


# Local drafts & sharing
def compose_draft(name: str, intent: Intent, mood: Optional[str] = None) -> str:
    """Template message used when no AI draft is available."""
    if intent == "apologize" or (mood and mood.strip().lower() in ("sad", "nervous")):
        return (
            f"Hey {name}, I realized I might've come off a bit off earlier. I'm sorry. "
            "You matter to me. Could we chat when you're free?"
        )
    return f"Hey {name}, I had a really nice time today! Thanks for making my day 😊 Want to do this again soon?"


def whatsapp_deeplink(message: str) -> str:
    """`https://wa.me/` share link; URI-encoded with spaces as '+'."""
    encoded = quote(message, safe="-_.!~*'()").replace("%20", "+")
    return f"https://wa.me/?text={encoded}"
