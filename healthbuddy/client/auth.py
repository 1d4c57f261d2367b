# healthbuddy/client/auth.py
import enum
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

from pydantic import BaseModel

from healthbuddy.client.api import HealthBuddyAPI
from healthbuddy.client.errors import ApiError
from healthbuddy.schemas.user_auth import TokenResponse, UserAuthOut

logger = logging.getLogger(__name__)


class AuthEvent(str, enum.Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class Session(BaseModel):
    access_token: str
    refresh_token: str
    user: UserAuthOut


AuthListener = Callable[[AuthEvent, Optional[Session]], Union[None, Awaitable[None]]]


class AuthSession:
    """
    Client-side mirror of the signed-in state.

    Subscribers are notified of every transition, in subscription order.
    Listeners may be plain functions or coroutines.
    """

    def __init__(self, api: HealthBuddyAPI):
        self.api = api
        self.session: Optional[Session] = None
        self._listeners: List[AuthListener] = []

    @property
    def user(self) -> Optional[UserAuthOut]:
        return self.session.user if self.session else None

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Subscribe to auth transitions. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self, event: AuthEvent) -> None:
        for listener in list(self._listeners):
            result = listener(event, self.session)
            if inspect.isawaitable(result):
                await result

    def _set_session(self, tokens: TokenResponse) -> None:
        self.session = Session(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user=tokens.user,
        )
        self.api.access_token = tokens.access_token

    def _clear(self) -> None:
        self.session = None
        self.api.access_token = None

    # =====================================================================
    # OPERATIONS
    # =====================================================================

    async def get_session(self) -> Optional[Session]:
        """Return the current session if the server still accepts it."""
        if self.session is None:
            return None
        try:
            await self.api.get_session_user()
        except ApiError as e:
            if e.status_code in (401, 403):
                logger.info("Stored session rejected; signing out locally")
                self._clear()
                return None
            raise
        return self.session

    async def sign_up(self, email: str, password: str, name: Optional[str] = None) -> UserAuthOut:
        """Create the account and its profile. Does not sign in."""
        return await self.api.sign_up(email, password, name)

    async def sign_in(self, email: str, password: str) -> Session:
        tokens = await self.api.sign_in(email, password)
        self._set_session(tokens)
        logger.info(f"Signed in as {tokens.user.id}")
        await self._notify(AuthEvent.SIGNED_IN)
        return self.session

    async def refresh(self) -> Session:
        if self.session is None:
            raise ApiError(401, "No session to refresh")
        tokens = await self.api.refresh(self.session.refresh_token)
        self._set_session(tokens)
        await self._notify(AuthEvent.TOKEN_REFRESHED)
        return self.session

    async def sign_out(self) -> None:
        """Drop the local session. A failed server acknowledgment is only logged."""
        if self.session is not None:
            try:
                await self.api.sign_out()
            except ApiError as e:
                logger.warning(f"Sign-out acknowledgment failed: {e}")
        self._clear()
        await self._notify(AuthEvent.SIGNED_OUT)
