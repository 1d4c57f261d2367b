# healthbuddy/client/__init__.py

from .api import HealthBuddyAPI
from .auth import AuthEvent, AuthSession, Session
from .activity_store import ActivityStore
from .conversation import ConversationController, ConversationState, Message
from .profile import ProfileEditor
from .errors import (
    ClientError,
    ValidationError,
    ApiError,
    ActivityNotFoundError,
)

__all__ = [
    "HealthBuddyAPI",
    "AuthEvent", "AuthSession", "Session",
    "ActivityStore",
    "ConversationController", "ConversationState", "Message",
    "ProfileEditor",
    "ClientError", "ValidationError",
    "ApiError", "ActivityNotFoundError",
]
