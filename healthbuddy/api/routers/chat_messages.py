# healthbuddy/api/routers/chat_messages.py

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from healthbuddy.core.config import get_db
from healthbuddy.core.security import get_current_user
from healthbuddy.services.chat_message import chat_message_service, MAX_HISTORY
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.chat import ChatMessageCreate, ChatMessageOut

router = APIRouter(prefix="/api/chat-messages", tags=["Chat History"])


@router.post(
    "",
    response_model=ChatMessageOut,
    status_code=status.HTTP_201_CREATED,
    summary="Store a chat exchange",
)
def record_exchange(
    data: ChatMessageCreate,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Append one user message and its reply. Rows are never edited.
    """
    return chat_message_service.record_exchange(db=db, data=data, requesting_user=current_user)


@router.get("", response_model=List[ChatMessageOut], summary="Recent chat exchanges")
def recent_exchanges(
    limit: int = Query(MAX_HISTORY, ge=1, le=MAX_HISTORY),
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return chat_message_service.recent_exchanges(db=db, requesting_user=current_user, limit=limit)
