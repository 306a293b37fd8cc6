from typing import Optional
from uuid import UUID
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field

from moodjournal.analysis.schemas import Mood


class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class JournalEntryBase(BaseSchema):
    id: UUID
    user_id: UUID
    entry_date: date
    entry_text: str
    mood: Mood
    reflection: Optional[str] = None
    created_at: datetime


class JournalEntryCreate(BaseSchema):
    entry_text: str = Field(min_length=1)
    entry_date: Optional[date] = None
    mood: Optional[Mood] = None  # manual override skips classification
