"""
User service for registration, deletion with message reassignment, and statistics.
"""
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
import logging
import secrets
from chatapp.core.config import settings
from chatapp.core.exceptions import (
    AnonymousUserNotFoundError,
    CannotDeleteAnonymousError,
    InvalidInputError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from chatapp.core.security import get_password_hash
from chatapp.models.user import User, UserRole
from chatapp.repositories.message_repository import MessageRepository
from chatapp.repositories.user_repository import UserRepository
from chatapp.schemas.user import UserStats

logger = logging.getLogger(__name__)

ONE_TIME_PASSWORD_BYTES = 12


def register_user(
    username: str,
    db: Session,
    password: Optional[str] = None,
    role: UserRole = UserRole.USER
) -> Tuple[User, Optional[str]]:
    """
    Create a user.

    When no password is supplied a random one is generated and returned
    alongside the user so it can be handed over once; otherwise the second
    element is None.
    """
    username = (username or "").strip()
    if not username:
        raise InvalidInputError("Username is required")

    user_repo = UserRepository(db)
    if user_repo.exists_by_username(username):
        raise UserAlreadyExistsError()

    one_time_password = None
    if password is None:
        one_time_password = secrets.token_urlsafe(ONE_TIME_PASSWORD_BYTES)
        password = one_time_password

    try:
        user = user_repo.create(
            username=username,
            hashed_password=get_password_hash(password),
            role=role
        )
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same name
        db.rollback()
        raise UserAlreadyExistsError()

    db.refresh(user)
    logger.info(f"Registered user '{user.username}' with role {user.role.value}")
    return user, one_time_password


def get_user_by_username(username: str, db: Session) -> User:
    """Get user by username or raise UserNotFoundError."""
    user = UserRepository(db).get_by_username(username)
    if not user:
        raise UserNotFoundError(f"User not found: {username}")
    return user


def delete_user(username: str, db: Session) -> None:
    """
    Delete a user and hand their messages over to the anonymous user.

    The reassignment and the delete commit together or not at all.
    """
    if username == settings.ANONYMOUS_USERNAME:
        raise CannotDeleteAnonymousError()

    user_repo = UserRepository(db)
    message_repo = MessageRepository(db)

    user = user_repo.get_by_username(username, for_update=True)
    if not user:
        raise UserNotFoundError()

    anonymous = user_repo.get_by_username(settings.ANONYMOUS_USERNAME)
    if not anonymous:
        raise AnonymousUserNotFoundError()

    try:
        reassigned = message_repo.reassign_author(user.id, anonymous.id)
        user_repo.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Deleting user '{username}' failed, transaction rolled back", exc_info=True)
        raise

    logger.info(f"Deleted user '{username}', reassigned {reassigned} message(s) to '{anonymous.username}'")


def get_user_statistics(db: Session) -> List[UserStats]:
    """Message statistics for every user, ascending by user id."""
    rows = MessageRepository(db).get_user_statistics_rows()

    stats = []
    for username, count, first_time, last_time, avg_length, last_content in rows:
        stats.append(UserStats(
            username=username,
            message_count=count or 0,
            first_message_time=first_time,
            last_message_time=last_time,
            average_content_length=float(avg_length) if avg_length is not None else 0.0,
            last_message_content=last_content or ""
        ))
    return stats
