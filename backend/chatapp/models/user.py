"""
User model for authentication and user management.
"""
from sqlalchemy import Column, String, Enum as SQLEnum
from chatapp.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)  # NULL means the account cannot log in
    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)
