import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from moodjournal.core.database import Base


class User(Base):
    """Account and profile in one row: the display name and journaling goals
    feed prompt personalization."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=True)
    journaling_goals = Column(String, nullable=True)
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    journals = relationship("JournalEntry", back_populates="user", cascade="all, delete-orphan")
    interests = relationship("UserInterest", back_populates="user", cascade="all, delete-orphan")
    habits = relationship("UserHabit", back_populates="user", cascade="all, delete-orphan")
    mood_signatures = relationship("MoodSignature", back_populates="user", cascade="all, delete-orphan")
