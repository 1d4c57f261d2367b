# models/activity.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from healthbuddy.core.config import Base


class Activity(Base):
    """
    A single logged activity ("30 minute walk", "drank 2L water").
    Listed newest first by `date`, which is stored as naive UTC.
    """

    __tablename__ = "activities"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, unique=True, index=True)
    user_id = Column(Uuid, ForeignKey("user_auth.id", ondelete="CASCADE"), nullable=False, index=True)

    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("UserAuth", back_populates="activities")
