# schemas.py
import enum
from typing import Any, List, Literal, Optional, Union
from uuid import UUID
from datetime import date
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class Mood(str, enum.Enum):
    HAPPY = "happy"
    SAD = "sad"
    EXCITING = "exciting"
    NERVOUS = "nervous"
    NEUTRAL = "neutral"


VALID_MOODS = frozenset(m.value for m in Mood)


def normalize_mood(value: Any) -> Mood:
    """Lowercase and trim; anything outside the five moods becomes neutral."""
    if isinstance(value, Mood):
        return value
    mood = str(value).strip().lower()
    return Mood(mood) if mood in VALID_MOODS else Mood.NEUTRAL


FALLBACK_REFLECTION = "Thank you for sharing. Your feelings are valid."
MANUAL_REFLECTION = "Thank you for sharing. Your feelings are important."

Intent = Literal["share", "apologize", "none"]


# Classification results
class ParsedClassification(BaseSchema):
    """The model returned a well-formed `{mood, response}` object."""

    kind: Literal["parsed"] = "parsed"
    mood: Mood
    response: str


class FallbackClassification(BaseSchema):
    """The model output could not be parsed; safe default substituted."""

    kind: Literal["fallback"] = "fallback"
    mood: Mood = Mood.NEUTRAL
    response: str = FALLBACK_REFLECTION


ClassificationResult = Union[ParsedClassification, FallbackClassification]


class MoodResponse(BaseSchema):
    mood: Mood
    response: str


# Personalization
class SignatureHint(BaseSchema):
    phrase: str
    associated_mood: Mood
    confidence_score: int


class PersonalizationContext(BaseSchema):
    name: Optional[str] = None
    journaling_goals: Optional[str] = None
    has_profile: bool = False
    interests: List[str] = []
    habits: List[str] = []
    signatures: List[SignatureHint] = []

    def is_empty(self) -> bool:
        return not (self.has_profile or self.interests or self.habits or self.signatures)


# Endpoint payloads
class WeeklyEntry(BaseSchema):
    entry_date: date
    entry_text: str
    mood: Mood

    @field_validator("mood", mode="before")
    @classmethod
    def _normalize_mood(cls, value: Any) -> Mood:
        return normalize_mood(value)


class MoodRequest(BaseSchema):
    """Body of `POST /analysis/mood`; `type` selects the pipeline."""

    type: Optional[str] = None
    journal_text: Optional[str] = Field(default=None, alias="journalText")
    user_id: Optional[str] = Field(default=None, alias="userId")
    entries: Optional[List[WeeklyEntry]] = None
    person_name: Optional[str] = Field(default=None, alias="personName")
    action_type: Optional[str] = Field(default=None, alias="actionType")
    interaction_type: Optional[str] = Field(default=None, alias="interactionType")
    mood: Optional[str] = None
    prompt: Optional[str] = None


class NamesIntentRequest(BaseSchema):
    journal_text: Optional[str] = Field(default=None, alias="journalText")


class NamesIntentResult(BaseSchema):
    people: List[str] = []
    intent: Intent = "none"
    is_crisis: bool = Field(default=False, alias="isCrisis")


class ConflictDetection(BaseSchema):
    has_conflict: bool = Field(default=False, alias="hasConflict")
    has_positive: bool = Field(default=False, alias="hasPositive")
    person_name: Optional[str] = Field(default=None, alias="personName")
    conflict_type: Optional[str] = Field(default=None, alias="conflictType")
    message: Optional[str] = None
    is_crisis: bool = Field(default=False, alias="isCrisis")


class OutreachMessage(BaseSchema):
    message: Optional[str] = None
    is_crisis: bool = Field(default=False, alias="isCrisis")


class WeeklyReflection(BaseSchema):
    summary: Optional[str] = None


class DraftMessageRequest(BaseSchema):
    person_name: str = Field(alias="personName")
    intent: Intent = "none"
    mood: Optional[str] = None


class DraftMessage(BaseSchema):
    message: str
    whatsapp_url: str = Field(alias="whatsappUrl")


class MoodSignatureOut(BaseSchema):
    id: UUID
    phrase: str
    associated_mood: Mood
    confidence_score: int
