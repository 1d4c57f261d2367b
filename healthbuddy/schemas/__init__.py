# healthbuddy/schemas/__init__.py

from .user_auth import (
    UserAuthOut,
    SignUpRequest,
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    SuccessResponse,
)
from .profile import ProfileOut, ProfileUpdate
from .activity import ActivityCreate, ActivityUpdate, ActivityOut
from .goal import GoalCreate, GoalUpdate, GoalOut
from .reminder import ReminderSave, ReminderOut, RemindersText
from .chat import (
    ContextActivity,
    ContextGoal,
    ChatContext,
    ChatRequest,
    ChatResponse,
    ChatErrorResponse,
    ChatMessageCreate,
    ChatMessageOut,
)


__all__ = [
    # Auth
    "UserAuthOut", "SignUpRequest", "LoginRequest", "TokenResponse",
    "RefreshTokenRequest", "SuccessResponse",

    # Profile
    "ProfileOut", "ProfileUpdate",

    # Activities, goals, reminders
    "ActivityCreate", "ActivityUpdate", "ActivityOut",
    "GoalCreate", "GoalUpdate", "GoalOut",
    "ReminderSave", "ReminderOut", "RemindersText",

    # Chat
    "ContextActivity", "ContextGoal", "ChatContext", "ChatRequest",
    "ChatResponse", "ChatErrorResponse", "ChatMessageCreate", "ChatMessageOut",
]
