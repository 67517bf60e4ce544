"""
Authentication routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from chatapp.core.config import settings
from chatapp.db.session import get_db
from chatapp.schemas.auth import LoginRequest, Token
from chatapp.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    token = auth_service.login(credentials.username, credentials.password, db)
    return {
        "token": token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    }
