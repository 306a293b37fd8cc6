import uuid
from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from moodjournal.core.database import Base


class UserInterest(Base):
    __tablename__ = "user_interests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    interest = Column(String, nullable=False)

    user = relationship("User", back_populates="interests")


class UserHabit(Base):
    __tablename__ = "user_habits"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    description = Column(String, nullable=False)
    habit_type = Column(String, nullable=False, default="comfort")
    time_preference = Column(String, nullable=True)  # e.g., "morning", "evening"
    location_preference = Column(String, nullable=True)  # "indoor" | "outdoor"

    user = relationship("User", back_populates="habits")
