import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from moodjournal.core.database import Base
from moodjournal.core.types import MoodType


class MoodSignature(Base):
    """Learned phrase → mood association for a single user."""

    __tablename__ = "mood_signatures"
    __table_args__ = (UniqueConstraint("user_id", "phrase", name="uq_mood_signatures_user_phrase"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)

    phrase = Column(String(49), nullable=False)
    associated_mood = Column(MoodType, nullable=False)
    confidence_score = Column(Integer, nullable=False, default=1)
    last_seen_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="mood_signatures")
