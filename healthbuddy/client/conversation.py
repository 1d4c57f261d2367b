# healthbuddy/client/conversation.py
"""
Conversation controller for the chat view.

Owns the transcript, the typing indicator, the one-time welcome message
and the send loop. Welcome delivery is guarded by a single state field:

    UNAUTHENTICATED -> IDLE -> WELCOME_REQUESTED -> ACTIVE

The IDLE -> WELCOME_REQUESTED step happens before the first await, so
concurrent ensure_welcome() calls fire at most one proxy request. Auth
notifications only schedule the welcome as a task; the sign-in that
triggered it returns without waiting for the completion call.
"""
import asyncio
import enum
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field

from healthbuddy.client.activity_store import ActivityStore
from healthbuddy.client.api import HealthBuddyAPI
from healthbuddy.client.auth import AuthEvent, AuthSession, Session
from healthbuddy.client.config import client_settings
from healthbuddy.client.errors import ApiError
from healthbuddy.schemas.activity import ActivityOut
from healthbuddy.schemas.goal import GoalOut

logger = logging.getLogger(__name__)

USER = "You"
ASSISTANT = "HealthBuddy"

CANNED_GREETING = (
    "Hey there, welcome to VitaBuddy! 🎉\n"
    "I'm here to help you feel your best, and the more I get to know you, "
    "the better I can support you on your journey.\n"
    "Tap the Profile tab to create an account or log in, and let's get started!\n"
    "Can't wait to team up with you! 💪✨"
)
NEW_USER_GREETING = "Hi! I'm your AI health buddy. How can I help you today?"
RETURNING_GREETING = "Welcome back! How can I help you today?"

LOGIN_REQUIRED = "Please log in to continue"
WELCOME_FAILED = "Failed to send welcome message. Please try again."
SEND_FAILED = "Failed to send message. Please try again."


class ConversationState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    IDLE = "idle"
    WELCOME_REQUESTED = "welcome_requested"
    ACTIVE = "active"


class Message(BaseModel):
    sender: str
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# =====================================================================
# CONTEXT & PROMPTS
# =====================================================================

def describe_time(now: datetime) -> Tuple[str, str]:
    """("Monday", "9:05 AM") for the given local time."""
    hour = now.hour % 12 or 12
    meridiem = "AM" if now.hour < 12 else "PM"
    return now.strftime("%A"), f"{hour}:{now.minute:02d} {meridiem}"


def _short_date(value: datetime) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def assemble_context(
    activities: List[ActivityOut],
    things_to_keep_in_mind: str = "",
    goals: Optional[List[GoalOut]] = None,
) -> Dict[str, Any]:
    """Wire-format context for /api/chat. `activities` must already be trimmed."""
    context: Dict[str, Any] = {
        "recentActivities": [
            {"description": a.description, "date": a.date.isoformat()} for a in activities
        ],
        "thingsToKeepInMind": things_to_keep_in_mind,
    }
    if goals is not None:
        context["goals"] = [{"description": g.goal_text} for g in goals]
    return context


def welcome_prompt(day_of_week: str, time_of_day: str) -> str:
    return (
        "You are a supportive, positive, and energetic AI health buddy. "
        "Your role is to help users maintain and improve their long-term and "
        "sustainable healthy habits. You have access to their recent activities.\n"
        f"It's currently {day_of_week} at {time_of_day}. Start with some brief "
        "small talk based on day of week and time of day and celebrate any recent "
        "wins to motivate them. Keep response to 2-3 sentences max."
    )


def coach_prompt(
    goals: List[GoalOut], things_to_keep_in_mind: str, activities: List[ActivityOut]
) -> str:
    lines = [
        "You are a supportive and knowledgeable AI health coach. Your communication style is:",
        "- Friendly and encouraging, but professional",
        "- Focused on sustainable, long-term health habits",
        "- Personalized to the user's goals and preferences",
        "- Evidence-based while remaining accessible",
        "- ALWAYS keep responses to 2-3 sentences maximum",
        "",
        "User Context:",
    ]
    if goals:
        lines.append("Goals:")
        lines.extend(f"- {g.goal_text}" for g in goals)
    else:
        lines.append("No goals set yet")
    if things_to_keep_in_mind:
        lines.append("Things to keep in mind:")
        lines.append(things_to_keep_in_mind)
    if activities:
        lines.append("Recent activities:")
        lines.extend(f"- {a.description} ({_short_date(a.date)})" for a in activities)
    else:
        lines.append("No recent activities")
    lines.append("")
    lines.append(
        "Use this information to provide relevant, personalized guidance. Reference "
        "specific goals and activities when appropriate."
    )
    return "\n".join(lines)


# =====================================================================
# CONTROLLER
# =====================================================================

class ConversationController:
    """State and behaviour behind the chat view."""

    def __init__(
        self,
        api: HealthBuddyAPI,
        auth: AuthSession,
        activity_store: ActivityStore,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        recent_limit: Optional[int] = None,
    ):
        self.api = api
        self.auth = auth
        self.activity_store = activity_store
        self._clock = clock or (lambda: datetime.now().astimezone())
        self.recent_limit = recent_limit or client_settings.RECENT_ACTIVITY_LIMIT

        self.state = ConversationState.UNAUTHENTICATED
        self.user_id: Optional[UUID] = None
        self.transcript: List[Message] = [Message(sender=ASSISTANT, content=CANNED_GREETING)]
        self.is_typing = False
        self.error: Optional[str] = None
        self.show_welcome_modal = False
        self.goals: List[GoalOut] = []
        self.things_to_keep_in_mind = ""
        self.history: List[Dict[str, str]] = []

        self._pending_calls = 0
        self._sending = False
        self._welcome_task: Optional[asyncio.Task] = None
        self._unsubscribe = auth.on_auth_state_change(self.handle_auth_change)

    def close(self) -> None:
        self._unsubscribe()

    @property
    def is_sending(self) -> bool:
        return self._sending

    # =====================================================================
    # AUTH TRANSITIONS
    # =====================================================================

    async def start(self) -> None:
        """Mount: read the current session and greet accordingly."""
        session = await self.auth.get_session()
        await self.handle_auth_change(AuthEvent.INITIAL_SESSION, session)

    async def handle_auth_change(self, event: AuthEvent, session: Optional[Session]) -> None:
        if session is None:
            self._reset_unauthenticated()
            return

        if self.state is ConversationState.UNAUTHENTICATED or session.user.id != self.user_id:
            logger.info(f"Conversation ready for user {session.user.id} ({event.value})")
            self.state = ConversationState.IDLE
            self.user_id = session.user.id
            self.error = None
        self._schedule_welcome()

    def _reset_unauthenticated(self) -> None:
        self.state = ConversationState.UNAUTHENTICATED
        self.user_id = None
        self.transcript = [Message(sender=ASSISTANT, content=CANNED_GREETING)]
        self.show_welcome_modal = False
        self.goals = []
        self.things_to_keep_in_mind = ""
        self.history = []
        self.activity_store.clear()

    # =====================================================================
    # WELCOME
    # =====================================================================

    def _claim_welcome(self) -> Optional[UUID]:
        """IDLE -> WELCOME_REQUESTED. Returns the user to greet, or None if already claimed."""
        if self.state is not ConversationState.IDLE:
            return None
        self.state = ConversationState.WELCOME_REQUESTED
        return self.user_id

    def _schedule_welcome(self) -> None:
        user_id = self._claim_welcome()
        if user_id is None:
            return
        self._welcome_task = asyncio.create_task(self._run_welcome(user_id))
        self._welcome_task.add_done_callback(self._welcome_done)

    @staticmethod
    def _welcome_done(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Welcome task crashed: {task.exception()!r}")

    async def wait_for_welcome(self) -> None:
        """Wait for a scheduled welcome, if any, to finish."""
        if self._welcome_task is not None:
            await asyncio.gather(self._welcome_task, return_exceptions=True)

    async def ensure_welcome(self) -> bool:
        """Fire the welcome call once per signed-in session. True if this call fired it."""
        user_id = self._claim_welcome()
        if user_id is None:
            return False
        await self._run_welcome(user_id)
        return True

    async def _run_welcome(self, user_id: UUID) -> None:
        self._begin_call()
        try:
            await self._deliver_welcome(user_id)
        except ApiError as e:
            logger.error(f"Welcome message failed for user {user_id}: {e}")
            if self._still_current(user_id):
                self.error = WELCOME_FAILED
        finally:
            self._end_call()
            if self._still_current(user_id):
                self.state = ConversationState.ACTIVE

    async def _deliver_welcome(self, user_id: UUID) -> None:
        profile = await self.api.get_profile()
        is_new_user = not profile.has_seen_welcome
        if is_new_user:
            self.show_welcome_modal = True

        await self.activity_store.load()
        await self.refresh_context()

        day_of_week, time_of_day = describe_time(self._clock())
        context = assemble_context(self.activity_store.recent(self.recent_limit))
        context.pop("thingsToKeepInMind")
        context.update({"dayOfWeek": day_of_week, "timeOfDay": time_of_day})

        reply = await self.api.chat(
            NEW_USER_GREETING if is_new_user else RETURNING_GREETING,
            user_id=user_id,
            context=context,
            system_prompt=welcome_prompt(day_of_week, time_of_day),
        )
        if self._still_current(user_id):
            self.transcript = [Message(sender=ASSISTANT, content=reply)]

    def _still_current(self, user_id: UUID) -> bool:
        return self.state is ConversationState.WELCOME_REQUESTED and self.user_id == user_id

    async def dismiss_welcome_modal(self) -> None:
        """Hide the modal and record that it was seen. Persistence failure is logged only."""
        try:
            if self.user_id is not None:
                await self.api.mark_welcome_seen()
        except ApiError as e:
            logger.warning(f"Error updating welcome status: {e}")
        finally:
            self.show_welcome_modal = False

    # =====================================================================
    # CONTEXT
    # =====================================================================

    async def refresh_context(self) -> None:
        """Reload goals and reminders for the signed-in user."""
        if self.user_id is None:
            return
        self.goals = await self.api.list_goals()
        self.things_to_keep_in_mind = await self.api.get_reminders(self.user_id)

    def build_context(self) -> Dict[str, Any]:
        return assemble_context(
            self.activity_store.recent(self.recent_limit),
            self.things_to_keep_in_mind,
            self.goals,
        )

    async def load_history(self, limit: Optional[int] = None) -> List[Dict[str, str]]:
        """Rebuild [{role, content}] from persisted exchanges, oldest first."""
        if self.user_id is None:
            return []
        rows = await self.api.list_chat_messages(limit or client_settings.HISTORY_LIMIT)
        history: List[Dict[str, str]] = []
        for row in reversed(rows):
            if row.user_message:
                history.append({"role": "user", "content": row.user_message})
            if row.bot_response:
                history.append({"role": "assistant", "content": row.bot_response})
        self.history = history
        return history

    # =====================================================================
    # SEND LOOP
    # =====================================================================

    def _begin_call(self) -> None:
        self._pending_calls += 1
        self.is_typing = True

    def _end_call(self) -> None:
        self._pending_calls -= 1
        self.is_typing = self._pending_calls > 0

    async def send(self, text: str) -> bool:
        """
        Send one user message. Returns True when a reply was appended.

        Blank input and sends while another is outstanding are ignored.
        """
        text = (text or "").strip()
        if not text:
            return False

        if self.state is ConversationState.UNAUTHENTICATED:
            self.error = LOGIN_REQUIRED
            return False

        if self._sending or self.state is not ConversationState.ACTIVE:
            return False

        user_id = self.user_id
        self._sending = True
        self.error = None
        self.transcript.append(Message(sender=USER, content=text))

        self._begin_call()
        try:
            # Goals and reminders may have been edited since the welcome
            try:
                await self.refresh_context()
            except ApiError as e:
                logger.warning(f"Context refresh failed, using cached goals/reminders: {e}")

            recent = self.activity_store.recent(self.recent_limit)
            reply = await self.api.chat(
                text,
                user_id=user_id,
                context=self.build_context(),
                system_prompt=coach_prompt(self.goals, self.things_to_keep_in_mind, recent),
            )
        except ApiError as e:
            logger.error(f"Error in chat: {e}")
            if self.user_id == user_id:
                self.error = SEND_FAILED
            return False
        finally:
            self._end_call()
            self._sending = False

        if self.state is not ConversationState.ACTIVE or self.user_id != user_id:
            return False

        self.transcript.append(Message(sender=ASSISTANT, content=reply))
        await self._persist_exchange(text, reply)
        return True

    async def _persist_exchange(self, user_message: str, bot_response: str) -> None:
        try:
            await self.api.record_chat_message(user_message, bot_response)
        except ApiError as e:
            logger.warning(f"Error storing chat message: {e}")
