"""
Security utilities for JWT authentication and password hashing.

Tokens are stateless: the username and role are read back from the signed
claims and never re-checked against the database, so a role change takes
effect on the next login.
"""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional
import hashlib
import logging
import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from chatapp.core.config import settings
from chatapp.core.exceptions import TokenExpiredError, TokenMalformedError, TokenSignatureError
from chatapp.models.user import UserRole
from chatapp.schemas.auth import Principal

logger = logging.getLogger(__name__)


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


@lru_cache(maxsize=None)
def _dummy_hash() -> bytes:
    """Hash checked against when an account has no password, at the configured cost."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_pre_hash_password("dummy-password"), salt)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    Accounts without a hash never match, but still pay for one bcrypt check so
    unknown and password-less accounts answer as slowly as real ones.
    """
    pre_hashed = _pre_hash_password(plain_password)
    if not hashed_password:
        bcrypt.checkpw(pre_hashed, _dummy_hash())
        return False
    try:
        return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash has an invalid format")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


def create_access_token(username: str, role: UserRole, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT carrying the username and role."""
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": username,
        "role": UserRole(role).value,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Principal:
    """
    Decode and verify a JWT token.

    Raises TokenMalformedError, TokenSignatureError or TokenExpiredError.
    """
    try:
        jwt.get_unverified_claims(token)
    except JWTError as e:
        raise TokenMalformedError(str(e)) from e

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpiredError(str(e)) from e
    except JWTClaimsError as e:
        raise TokenMalformedError(str(e)) from e
    except JWTError as e:
        raise TokenSignatureError(str(e)) from e

    username = payload.get("sub")
    role = payload.get("role")
    if not username or not role:
        raise TokenMalformedError("Token is missing the subject or role claim")
    try:
        role = UserRole(role)
    except ValueError as e:
        raise TokenMalformedError(f"Unknown role '{role}'") from e

    return Principal(username=username, role=role)
