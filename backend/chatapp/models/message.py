"""
Message model for the shared chat channel.
"""
from sqlalchemy import Column, Integer, Text, DateTime
from chatapp.db.base import BaseModel
from chatapp.core.utils import utc_now


class Message(BaseModel):
    """A chat message. author_user_id is a plain column so authors can be reassigned in bulk."""
    __tablename__ = "messages"

    author_user_id = Column(Integer, nullable=False, index=True)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime, default=utc_now, nullable=False, index=True)
