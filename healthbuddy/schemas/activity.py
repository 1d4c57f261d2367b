# schemas/activity.py
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Description cannot be empty")
    return v


def to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Dates are stored as naive UTC; offset-aware input is converted first."""
    if v is None or v.tzinfo is None:
        return v
    return v.astimezone(timezone.utc).replace(tzinfo=None)


def from_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is None or v.tzinfo is not None:
        return v
    return v.replace(tzinfo=timezone.utc)


class ActivityCreate(BaseModel):
    description: str = Field(..., description="Free-text description of the activity")
    date: Optional[datetime] = Field(
        None, description="When the activity happened; defaults to creation time"
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class ActivityUpdate(BaseModel):
    """Edit-dialog payload. Only provided fields are changed."""
    description: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class ActivityOut(BaseModel):
    """Dates always leave the server as UTC-aware values."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    description: str
    date: datetime
    created_at: Optional[datetime] = None

    @field_validator("date", "created_at")
    @classmethod
    def mark_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return from_naive_utc(v)
