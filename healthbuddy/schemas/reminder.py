# schemas/reminder.py
from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReminderSave(BaseModel):
    """Upsert body. `userId` is optional; the caller's token decides ownership."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[UUID] = Field(None, alias="userId")
    reminders: str = ""


class ReminderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    reminders: str
    updated_at: Optional[datetime] = None


class RemindersText(BaseModel):
    reminders: str = ""
