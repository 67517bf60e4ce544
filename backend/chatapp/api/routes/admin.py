"""
Admin routes: user provisioning, deletion and statistics.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from chatapp.db.session import get_db
from chatapp.schemas.auth import Principal
from chatapp.schemas.user import UserCreate, UserRegisteredResponse, UserStats
from chatapp.api.dependencies import require_admin
from chatapp.services import user_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/users", response_model=UserRegisteredResponse)
def register_user(
    user_data: UserCreate,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    Register a new user.

    If no password is given one is generated and returned once in
    one_time_password.
    """
    user, one_time_password = user_service.register_user(
        user_data.username,
        db,
        password=user_data.password,
        role=user_data.role
    )
    return UserRegisteredResponse(
        id=user.id,
        username=user.username,
        role=user.role,
        created_at=user.created_at,
        one_time_password=one_time_password
    )


@router.delete("/users/{username}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    username: str,
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Delete a user and reassign their messages to the anonymous user."""
    user_service.delete_user(username, db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats", response_model=List[UserStats])
def get_user_stats(
    principal: Principal = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """Get message statistics for all users."""
    return user_service.get_user_statistics(db)
