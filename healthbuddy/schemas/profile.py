# schemas/profile.py
from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: Optional[str] = None
    email: Optional[str] = None
    has_seen_welcome: bool = False
    created_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
