"""
Pydantic schemas for Message entity.
"""
from pydantic import BaseModel, field_serializer
from datetime import datetime
from chatapp.core.utils import as_utc


class MessageCreate(BaseModel):
    """Schema for posting a message. Emptiness is checked by the chat service."""
    content: str


class MessageView(BaseModel):
    """A message as shown to clients, with the author's current username."""
    username: str
    content: str
    timestamp: datetime

    @field_serializer("timestamp", when_used="json")
    def serialize_timestamp(self, value: datetime) -> str:
        # Stored naive; always UTC
        return as_utc(value).isoformat()
