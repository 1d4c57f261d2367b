# models/chat_message.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from healthbuddy.core.config import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, unique=True, index=True)
    user_id = Column(Uuid, ForeignKey("user_auth.id", ondelete="CASCADE"), nullable=False, index=True)

    # One user turn and the assistant's reply; append-only
    user_message = Column(Text, nullable=False)
    bot_response = Column(Text, nullable=False)

    timestamp = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    user = relationship("UserAuth", back_populates="chat_messages")
