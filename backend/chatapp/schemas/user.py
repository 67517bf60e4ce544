"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel, Field, field_serializer, field_validator
from typing import Optional
from datetime import datetime
from chatapp.core.utils import as_utc
from chatapp.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for admin user registration."""
    username: str = Field(..., max_length=50)
    password: Optional[str] = Field(None, min_length=1)  # Generated when omitted
    role: UserRole = UserRole.USER

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        """Accept "user" / "admin" in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int
    username: str
    role: UserRole
    created_at: datetime

    @field_serializer("created_at", when_used="json")
    def serialize_created_at(self, value: datetime) -> str:
        return as_utc(value).isoformat()

    class Config:
        from_attributes = True


class UserRegisteredResponse(UserResponse):
    """Registration response. one_time_password is only set when the server generated it."""
    one_time_password: Optional[str] = None


class UserStats(BaseModel):
    """Per-user message statistics."""
    username: str
    message_count: int
    first_message_time: Optional[datetime] = None
    last_message_time: Optional[datetime] = None
    average_content_length: float = 0.0
    last_message_content: str = ""

    @field_serializer("first_message_time", "last_message_time", when_used="json")
    def serialize_message_time(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return as_utc(value).isoformat()
