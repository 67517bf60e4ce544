"""
Authentication service: credential checks and token validation.
"""
from sqlalchemy.orm import Session
import logging
from chatapp.core.exceptions import InvalidCredentialsError, TokenError, UnauthorizedError
from chatapp.core.security import create_access_token, decode_access_token, verify_password
from chatapp.repositories.user_repository import UserRepository
from chatapp.schemas.auth import Principal

logger = logging.getLogger(__name__)


def login(username: str, password: str, db: Session) -> str:
    """Check credentials and issue a token with the user's current role."""
    user = UserRepository(db).get_by_username(username)
    hashed_password = user.hashed_password if user else None

    if not verify_password(password, hashed_password) or not user:
        logger.warning(f"Failed login attempt for '{username}'")
        raise InvalidCredentialsError()

    logger.info(f"User '{user.username}' logged in")
    return create_access_token(user.username, user.role)


def authenticate(token: str) -> Principal:
    """Resolve a bearer token to a Principal. Every failure looks the same to the caller."""
    try:
        return decode_access_token(token)
    except TokenError as e:
        logger.debug(f"Rejected token ({type(e).__name__}): {e}")
        raise UnauthorizedError("Could not validate credentials")
