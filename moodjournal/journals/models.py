import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from moodjournal.core.database import Base
from moodjournal.core.types import MoodType


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Uuid, primary_key=True, index=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)

    entry_date = Column(Date, nullable=False, index=True)  # user-selected calendar day
    entry_text = Column(String, nullable=False)
    mood = Column(MoodType, nullable=False)
    reflection = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="journals")
