# healthbuddy/client/profile.py
import logging
from typing import List, Optional
from uuid import UUID

from healthbuddy.client.api import HealthBuddyAPI
from healthbuddy.client.auth import AuthEvent, AuthSession, Session
from healthbuddy.client.errors import ApiError
from healthbuddy.schemas.goal import GoalOut

logger = logging.getLogger(__name__)


class ProfileEditor:
    """
    Profile tab: account forms, goals list and the reminders text.

    Every action returns True on success and otherwise sets `error` to a
    banner message; nothing is raised to the caller.
    """

    def __init__(self, api: HealthBuddyAPI, auth: AuthSession):
        self.api = api
        self.auth = auth
        self.goals: List[GoalOut] = []
        self.reminders = ""
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self.loading = False
        self._unsubscribe = auth.on_auth_state_change(self.handle_auth_change)

    def close(self) -> None:
        self._unsubscribe()

    @property
    def is_authenticated(self) -> bool:
        return self.auth.session is not None

    @property
    def user_id(self) -> Optional[UUID]:
        return self.auth.user.id if self.auth.user else None

    def _reset_banners(self) -> None:
        self.error = None
        self.success = None

    async def handle_auth_change(self, event: AuthEvent, session: Optional[Session]) -> None:
        if session is None:
            self.goals = []
            self.reminders = ""
            return
        if event in (AuthEvent.SIGNED_IN, AuthEvent.INITIAL_SESSION):
            await self.load()

    async def load(self) -> None:
        """Fetch goals and reminders. Failures are logged, not surfaced."""
        if self.user_id is None:
            return
        try:
            self.goals = await self.api.list_goals()
        except ApiError as e:
            logger.error(f"Error fetching goals: {e}")
        try:
            self.reminders = await self.api.get_reminders(self.user_id)
        except ApiError as e:
            logger.error(f"Error fetching reminders: {e}")

    # =====================================================================
    # ACCOUNT
    # =====================================================================

    async def sign_up(self, email: str, password: str, name: Optional[str] = None) -> bool:
        self._reset_banners()
        self.loading = True
        try:
            await self.auth.sign_up(email, password, name)
        except ApiError as e:
            logger.error(f"Sign-up failed: {e}")
            self.error = e.detail
            return False
        finally:
            self.loading = False
        self.success = "Account created! You can now sign in."
        return True

    async def sign_in(self, email: str, password: str) -> bool:
        self._reset_banners()
        self.loading = True
        try:
            await self.auth.sign_in(email, password)
        except ApiError as e:
            logger.error(f"Sign-in failed: {e}")
            self.error = e.detail
            return False
        finally:
            self.loading = False
        return True

    async def sign_out(self) -> None:
        self._reset_banners()
        await self.auth.sign_out()

    # =====================================================================
    # GOALS
    # =====================================================================

    async def save_goal(self, goal_text: str, goal_id: Optional[UUID] = None) -> bool:
        """Create a goal, or edit `goal_id` when given."""
        self._reset_banners()
        if not self.is_authenticated:
            self.error = "User not authenticated"
            return False
        goal_text = (goal_text or "").strip()
        if not goal_text:
            self.error = "Please enter a goal"
            return False

        try:
            if goal_id is not None:
                updated = await self.api.update_goal(goal_id, goal_text)
                self.goals = [updated if g.id == goal_id else g for g in self.goals]
            else:
                created = await self.api.create_goal(goal_text)
                self.goals = [created] + self.goals
        except ApiError as e:
            logger.error(f"Error saving goal: {e}")
            self.error = e.detail or "Failed to save goal. Please try again."
            return False

        self.success = "Goal saved successfully!"
        return True

    async def delete_goal(self, goal_id: UUID) -> bool:
        self._reset_banners()
        try:
            await self.api.delete_goal(goal_id)
        except ApiError as e:
            logger.error(f"Error deleting goal: {e}")
            self.error = "Failed to delete goal. Please try again."
            return False

        self.goals = [g for g in self.goals if g.id != goal_id]
        self.success = "Goal deleted successfully!"
        return True

    # =====================================================================
    # REMINDERS
    # =====================================================================

    async def save_reminders(self, reminders: str) -> bool:
        self._reset_banners()
        if self.user_id is None:
            self.error = "User not authenticated"
            return False

        try:
            saved = await self.api.save_reminders(self.user_id, reminders)
        except ApiError as e:
            logger.error(f"Error saving reminders: {e}")
            self.error = "Failed to save reminders. Please try again."
            return False

        self.reminders = saved.reminders
        self.success = "Reminders saved successfully!"
        return True
