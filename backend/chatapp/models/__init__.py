"""Models package - Import all models for SQLAlchemy registration."""
from chatapp.models.user import User, UserRole
from chatapp.models.message import Message

__all__ = [
    "User",
    "UserRole",
    "Message",
]
