# services/chat_message.py
from typing import List
from sqlalchemy.orm import Session

from healthbuddy.crud.chat_message import crud_chat_message
from healthbuddy.models.chat_message import ChatMessage
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.chat import ChatMessageCreate

MAX_HISTORY = 100


class ChatMessageService:
    """Append-only chat log."""

    def __init__(self):
        self.crud = crud_chat_message

    def record_exchange(
        self, db: Session, data: ChatMessageCreate, requesting_user: UserAuth
    ) -> ChatMessage:
        return self.crud.create(
            db,
            user_id=requesting_user.id,
            user_message=data.user_message,
            bot_response=data.bot_response,
            timestamp=data.timestamp,
        )

    def recent_exchanges(
        self, db: Session, requesting_user: UserAuth, limit: int = MAX_HISTORY
    ) -> List[ChatMessage]:
        return self.crud.list_recent(
            db, user_id=requesting_user.id, limit=min(limit, MAX_HISTORY)
        )


chat_message_service = ChatMessageService()
