from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from uuid import UUID


class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseSchema):
    email: EmailStr
    password: str = Field(min_length=6)
    name: Optional[str] = None


class UserOut(BaseSchema):
    id: UUID
    email: str
    name: Optional[str] = None
    onboarding_completed: bool = False


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
