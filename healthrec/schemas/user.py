from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=3, max_length=255)


class UserRecord(UserBase):
    """User as persisted in the store. Carries the password hash, never returned to clients."""

    id: str
    hashed_password: str
    active: bool = True
    created_at: datetime
    updated_at: datetime


class UserProfile(UserBase):
    id: str
    active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
