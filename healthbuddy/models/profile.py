# models/profile.py
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from healthbuddy.core.config import Base


class Profile(Base):
    __tablename__ = "profiles"

    # One-to-One PK link with user_auth
    id = Column(
        Uuid,
        ForeignKey("user_auth.id", ondelete="CASCADE"),
        primary_key=True,
        unique=True,
        index=True,
        nullable=False
    )

    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)

    # Gates the one-time welcome modal; flipped once on dismissal
    has_seen_welcome = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("UserAuth", back_populates="profile", uselist=False)
