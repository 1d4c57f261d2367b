# schemas/chat.py
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ----------------------
# Completion proxy
# ----------------------

class ContextActivity(BaseModel):
    description: str
    date: Optional[datetime] = None


class ContextGoal(BaseModel):
    description: str


class ChatContext(BaseModel):
    """Free-form context the client assembles for each proxy call."""
    model_config = ConfigDict(populate_by_name=True)

    recent_activities: List[ContextActivity] = Field(default_factory=list, alias="recentActivities")
    things_to_keep_in_mind: Optional[str] = Field(None, alias="thingsToKeepInMind")
    goals: List[ContextGoal] = Field(default_factory=list)
    day_of_week: Optional[str] = Field(None, alias="dayOfWeek")
    time_of_day: Optional[str] = Field(None, alias="timeOfDay")


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = None
    user_id: Optional[UUID] = Field(None, alias="userId")
    context: ChatContext = Field(default_factory=ChatContext)
    system_prompt: Optional[str] = Field(None, alias="systemPrompt")


class ChatResponse(BaseModel):
    message: str


class ChatErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


# ----------------------
# Persisted exchanges
# ----------------------

class ChatMessageCreate(BaseModel):
    user_message: str
    bot_response: str
    timestamp: Optional[datetime] = None


class ChatMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    user_message: str
    bot_response: str
    timestamp: datetime
