"""
Chat service for posting and listing messages in the shared channel.
"""
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import ObjectDeletedError
from typing import List
import logging
from chatapp.core.config import settings
from chatapp.core.exceptions import EmptyContentError, UserNotFoundError
from chatapp.models.user import User
from chatapp.repositories.message_repository import MessageRepository
from chatapp.repositories.user_repository import UserRepository
from chatapp.schemas.message import MessageView

logger = logging.getLogger(__name__)


def post_message(user: User, content: str, db: Session) -> MessageView:
    """
    Store a message from user, stamped with the server time.

    The author row is re-read after the insert, in the same transaction, so a
    user deleted since the caller loaded them never ends up owning a message.
    Raises UserNotFoundError in that case and stores nothing.
    """
    if content is None or not content.strip():
        raise EmptyContentError()

    try:
        user_id = user.id
        username = user.username
    except ObjectDeletedError:
        raise UserNotFoundError()

    message = MessageRepository(db).create(author_user_id=user_id, content=content)
    if UserRepository(db).lock_by_id(user_id) is None:
        db.rollback()
        logger.warning(f"Rejected message from deleted user '{username}'")
        raise UserNotFoundError()

    db.commit()
    db.refresh(message)

    logger.debug(f"User '{username}' posted message {message.id}")
    return MessageView(
        username=username,
        content=message.content,
        timestamp=message.timestamp
    )


def list_messages(db: Session) -> List[MessageView]:
    """All messages, newest first, with the author's current username."""
    messages = MessageRepository(db).get_all_newest_first()
    usernames = UserRepository(db).get_usernames(m.author_user_id for m in messages)

    return [
        MessageView(
            username=usernames.get(m.author_user_id, settings.ANONYMOUS_USERNAME),
            content=m.content,
            timestamp=m.timestamp
        )
        for m in messages
    ]
