from typing import List
from sqlalchemy.orm import Session, aliased
from sqlalchemy import func

from chatapp.models.message import Message
from chatapp.models.user import User
from chatapp.core.utils import utc_now


class MessageRepository:
    """Data access for messages. Writes are flushed only, the caller owns the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, author_user_id: int, content: str) -> Message:
        message = Message(
            author_user_id=author_user_id,
            content=content,
            timestamp=utc_now()
        )
        self.db.add(message)
        self.db.flush()
        return message

    def get_all_newest_first(self) -> List[Message]:
        """All messages, newest first; equal timestamps keep the later insertion first."""
        return self.db.query(Message).order_by(
            Message.timestamp.desc(),
            Message.id.desc()
        ).all()

    def reassign_author(self, old_user_id: int, new_user_id: int) -> int:
        """Point every message of old_user_id at new_user_id. Returns the number of rows changed."""
        return self.db.query(Message).filter(
            Message.author_user_id == old_user_id
        ).update(
            {Message.author_user_id: new_user_id},
            synchronize_session=False
        )

    def count(self) -> int:
        return self.db.query(func.count(Message.id)).scalar() or 0

    def get_user_statistics_rows(self) -> list:
        """
        One row per user, ascending by user id:
        (username, count, first time, last time, average content length, last content).

        Users without messages get count 0 and NULL for the other aggregates.
        """
        latest = aliased(Message)
        last_content = self.db.query(latest.content).filter(
            latest.author_user_id == User.id
        ).order_by(
            latest.timestamp.desc(),
            latest.id.desc()
        ).limit(1).correlate(User).scalar_subquery()

        return self.db.query(
            User.username,
            func.count(Message.id),
            func.min(Message.timestamp),
            func.max(Message.timestamp),
            func.avg(func.length(Message.content)),
            last_content,
        ).outerjoin(
            Message, Message.author_user_id == User.id
        ).group_by(
            User.id, User.username
        ).order_by(
            User.id.asc()
        ).all()
