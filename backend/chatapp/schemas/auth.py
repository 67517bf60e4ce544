"""
Pydantic schemas for authentication.
"""
from pydantic import BaseModel
from chatapp.models.user import UserRole


class LoginRequest(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class Token(BaseModel):
    """Schema for JWT token response."""
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class Principal(BaseModel):
    """Identity and role read from a verified token, scoped to one request."""
    username: str
    role: UserRole

    class Config:
        frozen = True
