"""
Incremental mood-signature learning.

After an entry is classified, short phrases are cut from its text and each one
is associated with the resolved mood. The phrase's confidence grows every time
it is seen again; its mood is always the most recent classification
(last-write-wins, not a majority vote), so a single re-classification can flip
a long-standing signature.
"""

import datetime
import logging
import re
from typing import Callable, List
from uuid import UUID

from sqlalchemy.orm import Session

from moodjournal.analysis.db import upsert_mood_signature
from moodjournal.analysis.schemas import Mood

logger = logging.getLogger(__name__)

PHRASE_DELIMITERS = re.compile(r"[.,!?;:\n]")
MIN_PHRASE_EXCLUSIVE = 3
MAX_PHRASE_EXCLUSIVE = 50
MAX_PHRASES_PER_ENTRY = 5


def extract_phrases(journal_text: str) -> List[str]:
    """
    Splits journal text into candidate phrases.

    Fragments are lowercased and trimmed; only those strictly longer than 3 and
    strictly shorter than 50 characters survive, and only the first 5 in order
    of appearance are kept.
    """
    fragments = (f.strip() for f in PHRASE_DELIMITERS.split((journal_text or "").lower()))
    phrases = [f for f in fragments if MIN_PHRASE_EXCLUSIVE < len(f) < MAX_PHRASE_EXCLUSIVE]
    return phrases[:MAX_PHRASES_PER_ENTRY]


def record_mood_signatures(db: Session, user_id: UUID, journal_text: str, mood: Mood) -> List[str]:
    """
    Upserts one signature per extracted phrase and commits.

    Returns:
        List[str]: The phrases that were recorded.
    """
    phrases = extract_phrases(journal_text)
    if not phrases:
        return []

    seen_at = datetime.datetime.now(datetime.timezone.utc)
    for phrase in phrases:
        upsert_mood_signature(db, user_id, phrase, mood, seen_at=seen_at)
    db.commit()
    return phrases


def learn_mood_signatures(
    session_factory: Callable[[], Session],
    user_id: UUID,
    journal_text: str,
    mood: Mood,
) -> None:
    """
    Background-task entry point: opens its own session, records signatures,
    and logs (never raises) on failure so learning cannot affect the entry
    that triggered it.
    """
    try:
        with session_factory() as db:
            phrases = record_mood_signatures(db, user_id, journal_text, mood)
        logger.info(f"Updated {len(phrases)} mood signatures for user {user_id}")
    except Exception as e:
        logger.error(f"Error updating mood signatures for user {user_id}: {e}")
