# healthbuddy/models/__init__.py

from healthbuddy.core.config import Base

# Import all models here so create_all and app-wide imports see every table
from .user_auth import UserAuth
from .profile import Profile
from .activity import Activity
from .goal import Goal
from .user_reminder import UserReminder
from .chat_message import ChatMessage

__all__ = [
    "Base",
    "UserAuth",
    "Profile",
    "Activity",
    "Goal",
    "UserReminder",
    "ChatMessage",
]
