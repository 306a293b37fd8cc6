from uuid import UUID
from typing import List
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session, sessionmaker

from moodjournal.analysis.ai_providers.openai import ChatGateway
from moodjournal.analysis.errors import AnalysisError
from moodjournal.analysis.schemas import MANUAL_REFLECTION, WeeklyEntry, WeeklyReflection
from moodjournal.analysis.service import classify_journal_text, should_learn
from moodjournal.analysis.signatures import learn_mood_signatures
from moodjournal.analysis.weekly import summarize_week, window_start
from moodjournal.auth.service import get_current_user_id
from moodjournal.core.database import get_db, get_session_factory
from moodjournal.core.dependency import get_chat_gateway
from moodjournal.journals.schemas import JournalEntryBase, JournalEntryCreate
from moodjournal.journals.db import (
    create_journal,
    delete_journal,
    get_journal,
    get_user_journals,
    get_user_journals_since,
)

router = APIRouter(prefix="/journals", tags=["Journals"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[JournalEntryBase],
    summary="Get all journal entries",
    description="Retrieve a paginated list of the user's journal entries, newest day first.",
    responses={
        200: {"description": "Journal entries retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve journal entries."},
    },
)
def get_journals_route(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[JournalEntryBase]:
    try:
        return get_user_journals(db, user_id, skip, limit)
    except Exception as e:
        logger.error(f"Error fetching journals for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch journal entries")


@router.post(
    "",
    response_model=JournalEntryBase,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new journal entry",
    description="""
                Save a journal entry. Without a manual mood, the entry is classified and
                a short reflection is generated; the user's mood patterns are then
                updated in the background.
                """,
    responses={
        201: {"description": "Journal created successfully."},
        400: {"description": "Empty journal text."},
        401: {"description": "Unauthorized."},
        429: {"description": "AI rate limit reached."},
        402: {"description": "AI usage limit reached."},
        503: {"description": "AI gateway not configured."},
    },
)
def create_journal_route(
    journal: JournalEntryCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    gateway: ChatGateway = Depends(get_chat_gateway),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> JournalEntryBase:
    if journal.mood is not None:
        mood, reflection = journal.mood, MANUAL_REFLECTION
    else:
        result = classify_journal_text(db, gateway, journal.entry_text, user_id)
        mood, reflection = result.mood, result.response
        if should_learn(result, user_id):
            background_tasks.add_task(
                learn_mood_signatures, session_factory, user_id, journal.entry_text, mood
            )

    try:
        return create_journal(db, user_id, journal.entry_text, mood, reflection, journal.entry_date)
    except Exception as e:
        logger.error(f"Error creating journal for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to create journal")


@router.get(
    "/weekly-reflection",
    response_model=WeeklyReflection,
    summary="Summarize the past week",
    description="Generate a short reflection over the user's entries from the last seven days.",
    responses={
        200: {"description": "Summary generated (null when there were no entries)."},
        401: {"description": "Unauthorized."},
    },
)
def weekly_reflection_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> WeeklyReflection:
    journals = get_user_journals_since(db, user_id, window_start())
    entries = [WeeklyEntry.model_validate(j) for j in journals]
    try:
        return summarize_week(gateway, entries)
    except AnalysisError:
        raise
    except Exception as e:
        logger.error(f"Weekly reflection failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate weekly reflection")


@router.get(
    "/{journal_id}",
    response_model=JournalEntryBase,
    summary="Get a journal by ID",
    responses={
        200: {"description": "Journal retrieved successfully."},
        401: {"description": "Unauthorized."},
        404: {"description": "Journal not found."},
    },
)
def read_journal_route(
    journal_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> JournalEntryBase:
    journal = get_journal(db, journal_id, user_id)
    if journal is None:
        raise HTTPException(status_code=404, detail="Journal not found")
    return journal


@router.delete(
    "/{journal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a journal by ID",
    responses={
        204: {"description": "Journal deleted."},
        401: {"description": "Unauthorized."},
        404: {"description": "Journal not found."},
    },
)
def delete_journal_route(
    journal_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
):
    if delete_journal(db, journal_id, user_id) is None:
        raise HTTPException(status_code=404, detail="Journal not found")
    logger.info(f"Deleted journal {journal_id} for user {user_id}")
