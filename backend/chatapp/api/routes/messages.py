"""
Chat message routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from chatapp.core.exceptions import UnauthorizedError, UserNotFoundError
from chatapp.db.session import get_db
from chatapp.models.user import User
from chatapp.schemas.auth import Principal
from chatapp.schemas.message import MessageCreate, MessageView
from chatapp.api.dependencies import get_current_user, require_member
from chatapp.services import chat_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=List[MessageView])
def get_messages(
    principal: Principal = Depends(require_member),
    db: Session = Depends(get_db)
):
    """Get all messages, newest first."""
    return chat_service.list_messages(db)


@router.post("", response_model=MessageView)
def post_message(
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Post a new message as the current user."""
    try:
        return chat_service.post_message(current_user, message_data.content, db)
    except UserNotFoundError:
        raise UnauthorizedError("User no longer exists")
