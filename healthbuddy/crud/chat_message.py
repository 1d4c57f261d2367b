# crud/chat_message.py

from typing import List, Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy import desc
from sqlalchemy.orm import Session

from healthbuddy.models.chat_message import ChatMessage


class CRUDChatMessage:
    """Append-only log of chat exchanges. No update or delete."""

    def create(
        self,
        db: Session,
        *,
        user_id: UUID,
        user_message: str,
        bot_response: str,
        timestamp: Optional[datetime] = None,
    ) -> ChatMessage:
        db_obj = ChatMessage(
            user_id=user_id,
            user_message=user_message,
            bot_response=bot_response,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def list_recent(self, db: Session, *, user_id: UUID, limit: int = 100) -> List[ChatMessage]:
        """Most recent exchanges first."""
        return (
            db.query(ChatMessage)
            .filter(ChatMessage.user_id == user_id)
            .order_by(desc(ChatMessage.timestamp))
            .limit(limit)
            .all()
        )


crud_chat_message = CRUDChatMessage()
