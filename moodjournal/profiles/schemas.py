from typing import List, Literal, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ProfileOut(BaseSchema):
    id: UUID
    email: str
    name: Optional[str] = None
    journaling_goals: Optional[str] = None
    onboarding_completed: bool = False


class ProfileUpdate(BaseSchema):
    name: Optional[str] = None
    journaling_goals: Optional[str] = None


class InterestCreate(BaseSchema):
    interest: str = Field(min_length=1)


class InterestOut(BaseSchema):
    id: UUID
    interest: str


class HabitCreate(BaseSchema):
    description: str = Field(min_length=1)
    habit_type: str = "comfort"
    time_preference: Optional[str] = None
    location_preference: Optional[Literal["indoor", "outdoor"]] = None


class HabitOut(BaseSchema):
    id: UUID
    description: str
    habit_type: str
    time_preference: Optional[str] = None
    location_preference: Optional[str] = None


class OnboardingRequest(BaseSchema):
    name: str = Field(min_length=1)
    interests: List[str] = []
    habits: List[str] = []
    time_preference: Optional[str] = None
    location_preference: Optional[Literal["indoor", "outdoor"]] = None
