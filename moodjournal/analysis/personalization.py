"""
Builds the system prompt for mood classification.

Without a user the fixed base prompt is used. With a user, the profile,
interests, comfort habits and strongest learned mood signatures are loaded and,
if any of them exist, rendered into a personalized prompt. Loading is
best-effort: any failure falls back to the base prompt.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

import moodjournal.analysis.prompts.mood_prompts_templates as prompts
from moodjournal.analysis.db import get_top_mood_signatures
from moodjournal.analysis.schemas import PersonalizationContext, SignatureHint
from moodjournal.profiles.db import get_profile, get_user_habits, get_user_interests

logger = logging.getLogger(__name__)


def load_personalization_context(db: Session, user_id: UUID) -> PersonalizationContext:
    """
    Reads everything the personalized prompt needs for one user.

    Raises:
        Any database error; callers treat personalization as optional.
    """
    profile = get_profile(db, user_id)
    interests = get_user_interests(db, user_id)
    habits = get_user_habits(db, user_id)
    signatures = get_top_mood_signatures(db, user_id, limit=prompts.MAX_SIGNATURES_IN_PROMPT)

    return PersonalizationContext(
        name=(profile.name or None) if profile else None,
        journaling_goals=(profile.journaling_goals or None) if profile else None,
        has_profile=profile is not None,
        interests=[i.interest for i in interests],
        habits=[h.description for h in habits],
        signatures=[SignatureHint.model_validate(s) for s in signatures],
    )


def render_personalized_prompt(context: PersonalizationContext) -> str:
    name = context.name or "there"

    lines = []
    if context.interests:
        lines.append(f"Their interests: {', '.join(context.interests)}")
    if context.habits:
        lines.append(f"Things that help them feel better: {', '.join(context.habits)}")
    if context.journaling_goals:
        lines.append(f"What they hope to get from journaling: {context.journaling_goals}")
    context_lines = "".join(f"{line}\n" for line in lines)

    signature_block = ""
    if context.signatures:
        signature_lines = "\n".join(
            prompts.SIGNATURE_LINE_TEMPLATE.format(
                phrase=s.phrase, mood=s.associated_mood.value, score=s.confidence_score
            )
            for s in context.signatures
        )
        signature_block = prompts.SIGNATURE_BLOCK_TEMPLATE.format(
            name_upper=name.upper(), signature_lines=signature_lines
        )

    return prompts.PERSONALIZED_MOOD_SYSTEM_TEMPLATE.format(
        name=name, context_lines=context_lines, signature_block=signature_block
    )


def build_system_prompt(db: Optional[Session], user_id: Optional[UUID]) -> str:
    """
    Returns the system prompt for classifying one journal entry.

    Args:
        db (Optional[Session]): SQLAlchemy session, only needed with a user.
        user_id (Optional[UUID]): Owner of the entry, if known.

    Returns:
        str: The personalized prompt when the user has any profile data,
        otherwise the base prompt.
    """
    if user_id is None or db is None:
        return prompts.MOOD_SYSTEM_PROMPT

    try:
        context = load_personalization_context(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching personalization context for user {user_id}: {e}")
        db.rollback()
        return prompts.MOOD_SYSTEM_PROMPT

    if context.is_empty():
        return prompts.MOOD_SYSTEM_PROMPT

    logger.info(
        f"Using personalized prompt for user {user_id} "
        f"({len(context.interests)} interests, {len(context.habits)} habits, "
        f"{len(context.signatures)} signatures)"
    )
    return render_personalized_prompt(context)
