# schemas/goal.py
from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class GoalBase(BaseModel):
    goal_text: str

    @field_validator("goal_text")
    @classmethod
    def validate_goal_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Goal text cannot be empty")
        return v


class GoalCreate(GoalBase):
    pass


class GoalUpdate(GoalBase):
    pass


class GoalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    goal_text: str
    created_at: Optional[datetime] = None
