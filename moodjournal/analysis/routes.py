from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session, sessionmaker
from uuid import UUID
from typing import Any, Dict, List, Optional

import logging

logger = logging.getLogger(__name__)

from moodjournal.core.database import get_db, get_session_factory
from moodjournal.core.dependency import get_chat_gateway
from moodjournal.auth.service import get_current_user_id, get_optional_user_id
from moodjournal.analysis.ai_providers.openai import ChatGateway
from moodjournal.analysis.db import delete_mood_signatures, get_top_mood_signatures
from moodjournal.analysis.errors import InputError
from moodjournal.analysis.outreach import (
    compose_draft,
    detect_conflict,
    extract_names_intent,
    generate_outreach_message,
    whatsapp_deeplink,
)
from moodjournal.analysis.schemas import (
    DraftMessage,
    DraftMessageRequest,
    MoodRequest,
    MoodResponse,
    MoodSignatureOut,
    NamesIntentRequest,
    NamesIntentResult,
)
from moodjournal.analysis.service import classify_journal_text, parse_user_id, should_learn
from moodjournal.analysis.signatures import learn_mood_signatures
from moodjournal.analysis.weekly import summarize_week

router = APIRouter(prefix="/analysis", tags=["Analysis"])

_ERROR_RESPONSES = {
    400: {"description": "Missing or empty input."},
    402: {"description": "AI usage limit reached."},
    429: {"description": "AI rate limit reached."},
    500: {"description": "AI gateway error or malformed AI reply."},
    503: {"description": "AI gateway not configured."},
}


def _resolve_user(body_user_id: Optional[str], token_user_id: Optional[UUID]) -> Optional[UUID]:
    """
    The body's `userId` enables personalization; when a bearer token is also
    sent, both must name the same user.
    """
    user_id = parse_user_id(body_user_id)
    if user_id is not None and token_user_id is not None and user_id != token_user_id:
        raise HTTPException(status_code=403, detail="userId does not match the authenticated user")
    return user_id or token_user_id


@router.post(
    "/mood",
    response_model=Dict[str, Any],
    summary="Classify a journal entry or run a related analysis",
    description="""
                Without `type`, classifies `journalText` into one of five moods and returns a
                short supportive reflection, personalized when `userId` is known.
                `type` selects the other pipelines: `weekly-reflection`,
                `conflict-detection` and `conflict-resolution` (alias `message-generation`).
                """,
    responses={200: {"description": "Analysis completed successfully."}, **_ERROR_RESPONSES},
)
def mood_route(
    request: MoodRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    gateway: ChatGateway = Depends(get_chat_gateway),
    session_factory: sessionmaker = Depends(get_session_factory),
    token_user_id: Optional[UUID] = Security(get_optional_user_id),
) -> Dict[str, Any]:
    kind = request.type or None

    if kind == "weekly-reflection":
        return summarize_week(gateway, request.entries or []).model_dump(mode="json")

    if kind == "conflict-detection":
        result = detect_conflict(gateway, request.journal_text)
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)

    if kind in ("conflict-resolution", "message-generation"):
        result = generate_outreach_message(
            gateway,
            prompt=request.prompt,
            person_name=request.person_name,
            action_type=request.action_type,
            interaction_type=request.interaction_type,
            journal_text=request.journal_text,
            mood=request.mood,
        )
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)

    if kind is not None:
        raise InputError(f"Unknown analysis type: {kind}")

    user_id = _resolve_user(request.user_id, token_user_id)
    result = classify_journal_text(db, gateway, request.journal_text, user_id)
    if should_learn(result, user_id):
        background_tasks.add_task(
            learn_mood_signatures, session_factory, user_id, request.journal_text, result.mood
        )
    return MoodResponse(mood=result.mood, response=result.response).model_dump(mode="json")


@router.post(
    "/extract-names-intent",
    response_model=NamesIntentResult,
    summary="Find people mentioned in an entry and what the user may want to tell them",
    responses={200: {"description": "Extraction completed."}, **_ERROR_RESPONSES},
)
def extract_names_intent_route(
    request: NamesIntentRequest,
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> NamesIntentResult:
    return extract_names_intent(gateway, request.journal_text)


@router.post(
    "/draft-message",
    response_model=DraftMessage,
    summary="Draft a message to a person without calling the AI",
    description="Returns a template message and a WhatsApp share link for it.",
    responses={200: {"description": "Draft created."}},
)
def draft_message_route(request: DraftMessageRequest) -> DraftMessage:
    name = request.person_name.strip()
    if not name:
        raise InputError("personName is required")
    message = compose_draft(name, request.intent, request.mood)
    return DraftMessage(message=message, whatsapp_url=whatsapp_deeplink(message))


@router.get(
    "/signatures",
    response_model=List[MoodSignatureOut],
    summary="List learned mood patterns",
    description="The phrases the system has associated with a mood for the current user, strongest first.",
    responses={
        200: {"description": "Signatures retrieved."},
        401: {"description": "Unauthorized."},
    },
)
def list_signatures_route(
    limit: int = 20,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[MoodSignatureOut]:
    try:
        return get_top_mood_signatures(db, user_id, limit=limit)
    except Exception as e:
        logger.error(f"Error fetching mood signatures for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch mood signatures")


@router.delete(
    "/signatures",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Forget learned mood patterns",
    responses={
        204: {"description": "Signatures deleted."},
        401: {"description": "Unauthorized."},
    },
)
def delete_signatures_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    deleted = delete_mood_signatures(db, user_id)
    logger.info(f"Deleted {deleted} mood signatures for user {user_id}")
