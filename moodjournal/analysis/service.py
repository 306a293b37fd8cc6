import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from moodjournal.analysis.ai_providers.openai import REFLECTION_TEMPERATURE, ChatGateway
from moodjournal.analysis.errors import InputError
from moodjournal.analysis.personalization import build_system_prompt
from moodjournal.analysis.schemas import ClassificationResult, ParsedClassification
from moodjournal.analysis.validator import validate_mood_response

logger = logging.getLogger(__name__)


def parse_user_id(raw: Optional[str]) -> Optional[UUID]:
    """
    Parses a client-supplied user id. An unparseable id is treated as
    anonymous rather than rejected.
    """
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        logger.warning(f"Ignoring malformed user id {raw!r}")
        return None


def classify_journal_text(
    db: Optional[Session],
    gateway: ChatGateway,
    journal_text: Optional[str],
    user_id: Optional[UUID] = None,
) -> ClassificationResult:
    """
    Classifies one journal entry into a mood and a short supportive reflection.

    Args:
        db (Optional[Session]): SQLAlchemy session for personalization reads.
        gateway (ChatGateway): Chat completion gateway.
        journal_text (Optional[str]): The entry to classify.
        user_id (Optional[UUID]): Owner, enables the personalized prompt.

    Returns:
        ClassificationResult: Parsed reply or the neutral fallback.

    Raises:
        InputError: Empty journal text.
        ConfigurationError / GatewayError / SchemaViolationError from the
        gateway and validator.
    """
    if not journal_text or not journal_text.strip():
        raise InputError("Journal text is required")

    system_prompt = build_system_prompt(db, user_id)
    raw = gateway.complete(
        [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": journal_text},
        ],
        temperature=REFLECTION_TEMPERATURE,
    )
    result = validate_mood_response(raw)
    logger.info(f"Classified entry as {result.mood.value} ({result.kind})")
    return result


def should_learn(result: ClassificationResult, user_id: Optional[UUID]) -> bool:
    """Only a real classification for a known user feeds the signature learner."""
    return user_id is not None and isinstance(result, ParsedClassification)
