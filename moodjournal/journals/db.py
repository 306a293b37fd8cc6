import datetime
from uuid import UUID, uuid4
from typing import Optional, List

from sqlalchemy.orm import Session
from moodjournal.analysis.schemas import Mood
from moodjournal.journals.models import JournalEntry


# Journal Entry CRUD
def get_journal(db: Session, journal_id: UUID, user_id: UUID) -> Optional[JournalEntry]:
    """
    Retrieves a journal entry by its ID for a given user.

    Args:
        db (Session): SQLAlchemy session.
        journal_id (UUID): ID of the journal.
        user_id (UUID): ID of the owner.

    Returns:
        Optional[JournalEntry]: The journal if found, else None.
    """
    return db.query(JournalEntry).filter(
        JournalEntry.id == journal_id,
        JournalEntry.user_id == user_id
    ).first()


def get_user_journals(db: Session, user_id: UUID, skip: int = 0, limit: int = 100) -> List[JournalEntry]:
    """
    Retrieves a paginated list of journal entries for a user, newest day first.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.
        skip (int): Pagination offset.
        limit (int): Pagination limit.

    Returns:
        List[JournalEntry]: List of journal entries.
    """
    return (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id)
        .order_by(JournalEntry.entry_date.desc(), JournalEntry.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_user_journals_since(db: Session, user_id: UUID, since: datetime.date) -> List[JournalEntry]:
    return (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id, JournalEntry.entry_date >= since)
        .order_by(JournalEntry.entry_date.asc())
        .all()
    )


def create_journal(
    db: Session,
    user_id: UUID,
    entry_text: str,
    mood: Mood,
    reflection: Optional[str],
    entry_date: Optional[datetime.date] = None,
) -> JournalEntry:
    """
    Creates a new journal entry for a user.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.
        entry_text (str): Journal text.
        mood (Mood): Classified or manually chosen mood.
        reflection (Optional[str]): Supportive reflection shown with the entry.
        entry_date (Optional[date]): Calendar day, defaults to today.

    Returns:
        JournalEntry: The created journal.
    """
    new_journal = JournalEntry(
        id=uuid4(),
        user_id=user_id,
        entry_date=entry_date or datetime.date.today(),
        entry_text=entry_text,
        mood=mood,
        reflection=reflection,
    )
    db.add(new_journal)
    db.commit()
    db.refresh(new_journal)
    return new_journal


def delete_journal(db: Session, journal_id: UUID, user_id: UUID) -> Optional[JournalEntry]:
    """
    Deletes a journal entry for a user.

    Returns:
        Optional[JournalEntry]: The deleted journal or None if not found.
    """
    journal = get_journal(db, journal_id, user_id)
    if journal:
        db.delete(journal)
        db.commit()
        return journal
    return None
