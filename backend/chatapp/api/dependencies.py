"""
Request dependencies: bearer token resolution and role guards.
"""
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from chatapp.core.exceptions import ForbiddenError, UnauthorizedError, UserNotFoundError
from chatapp.db.session import get_db
from chatapp.models.user import User, UserRole
from chatapp.schemas.auth import Principal
from chatapp.services import auth_service, user_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Principal:
    """Resolve the Authorization header into a Principal."""
    if credentials is None:
        raise UnauthorizedError()
    return auth_service.authenticate(credentials.credentials)


def require_roles(*roles: UserRole):
    """Build a dependency that lets only the given roles through."""
    allowed = frozenset(roles)

    def guard(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in allowed:
            raise ForbiddenError()
        return principal

    return guard


require_member = require_roles(UserRole.USER, UserRole.ADMIN)
require_admin = require_roles(UserRole.ADMIN)


def get_current_user(
    principal: Principal = Depends(require_member),
    db: Session = Depends(get_db)
) -> User:
    """Load the user behind the principal. A token for a deleted user is no longer valid."""
    try:
        return user_service.get_user_by_username(principal.username, db)
    except UserNotFoundError:
        raise UnauthorizedError("User no longer exists")
