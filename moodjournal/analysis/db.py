import datetime
from uuid import UUID, uuid4
from typing import List, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from moodjournal.analysis.models import MoodSignature
from moodjournal.analysis.schemas import Mood


def get_top_mood_signatures(db: Session, user_id: UUID, limit: int = 20) -> List[MoodSignature]:
    """
    Retrieves a user's strongest learned phrase/mood associations.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): ID of the user.
        limit (int): Max number of signatures.

    Returns:
        List[MoodSignature]: Signatures ordered by confidence, highest first.
    """
    return (
        db.query(MoodSignature)
        .filter(MoodSignature.user_id == user_id)
        .order_by(MoodSignature.confidence_score.desc(), MoodSignature.last_seen_at.desc())
        .limit(limit)
        .all()
    )


def get_mood_signature(db: Session, user_id: UUID, phrase: str) -> Optional[MoodSignature]:
    """
    Point lookup of a single signature by (user, phrase).
    """
    return db.query(MoodSignature).filter(
        MoodSignature.user_id == user_id,
        MoodSignature.phrase == phrase
    ).first()


def _insert_for(db: Session):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert
    if dialect == "sqlite":
        return sqlite.insert
    raise NotImplementedError(f"Mood signature upsert is not supported on '{dialect}'")


def upsert_mood_signature(
    db: Session,
    user_id: UUID,
    phrase: str,
    mood: Mood,
    seen_at: Optional[datetime.datetime] = None,
) -> None:
    """
    Inserts a new signature with confidence 1, or, when (user, phrase) already
    exists, overwrites its mood with the latest one and increments confidence.

    A single `INSERT ... ON CONFLICT DO UPDATE` statement is used, so two
    concurrent writers of the same phrase both end up counted: the unique
    constraint turns the losing insert into an increment.

    Notes:
        Does not commit; the caller owns the transaction.
    """
    seen_at = seen_at or datetime.datetime.now(datetime.timezone.utc)
    table = MoodSignature.__table__
    insert = _insert_for(db)

    stmt = insert(table).values(
        id=uuid4(),
        user_id=user_id,
        phrase=phrase,
        associated_mood=mood,
        confidence_score=1,
        last_seen_at=seen_at,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[table.c.user_id, table.c.phrase],
        set_={
            "associated_mood": stmt.excluded.associated_mood,
            "confidence_score": table.c.confidence_score + 1,
            "last_seen_at": stmt.excluded.last_seen_at,
        },
    )
    db.execute(stmt)


def delete_mood_signatures(db: Session, user_id: UUID) -> int:
    """
    Forgets everything learned for a user.

    Returns:
        int: Number of deleted signatures.
    """
    deleted = db.query(MoodSignature).filter(
        MoodSignature.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted
