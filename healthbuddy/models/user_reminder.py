# models/user_reminder.py
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from healthbuddy.core.config import Base


class UserReminder(Base):
    __tablename__ = "user_reminders"

    # One free-text blob per user
    user_id = Column(
        Uuid,
        ForeignKey("user_auth.id", ondelete="CASCADE"),
        primary_key=True,
        unique=True,
        index=True,
        nullable=False
    )

    reminders = Column(Text, nullable=False, default="")

    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    user = relationship("UserAuth", back_populates="reminder", uselist=False)
