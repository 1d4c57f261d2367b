# healthbuddy/client/api.py
"""
Async HTTP client for the HealthBuddy backend.

One method per endpoint. Responses are parsed into the same pydantic
schemas the server returns; any non-2xx status raises ApiError.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

import httpx

from healthbuddy.client.config import client_settings
from healthbuddy.client.errors import ApiError
from healthbuddy.schemas.activity import ActivityOut
from healthbuddy.schemas.chat import ChatMessageOut
from healthbuddy.schemas.goal import GoalOut
from healthbuddy.schemas.profile import ProfileOut
from healthbuddy.schemas.reminder import ReminderOut
from healthbuddy.schemas.user_auth import TokenResponse, UserAuthOut

logger = logging.getLogger(__name__)


def _error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        return ApiError(response.status_code, response.text or response.reason_phrase)

    if isinstance(body, dict):
        detail = body.get("detail") or body.get("error") or response.reason_phrase
        if not isinstance(detail, str):
            detail = str(detail)
        return ApiError(response.status_code, detail, body.get("details"))
    return ApiError(response.status_code, str(body))


class HealthBuddyAPI:
    """Thin async wrapper over the backend's REST endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # No timeout: an in-flight completion call is never cut short
        self._http = httpx.AsyncClient(
            base_url=base_url or client_settings.SERVER_URL,
            transport=transport,
            timeout=None,
        )
        self.access_token: Optional[str] = None

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "HealthBuddyAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # =====================================================================
    # TRANSPORT
    # =====================================================================

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(None, f"Request failed: {e}") from e

        if response.is_error:
            error = _error_from_response(response)
            logger.warning(f"{method} {path} -> {response.status_code}: {error.detail}")
            raise error
        return response.json()

    # =====================================================================
    # AUTH
    # =====================================================================

    async def sign_up(self, email: str, password: str, name: Optional[str] = None) -> UserAuthOut:
        data = await self._request(
            "POST", "/auth/sign-up", json={"email": email, "password": password, "name": name}
        )
        return UserAuthOut.model_validate(data)

    async def sign_in(self, email: str, password: str) -> TokenResponse:
        data = await self._request(
            "POST", "/auth/sign-in", json={"email": email, "password": password}
        )
        return TokenResponse.model_validate(data)

    async def refresh(self, refresh_token: str) -> TokenResponse:
        data = await self._request(
            "POST", "/auth/refresh", json={"refresh_token": refresh_token}
        )
        return TokenResponse.model_validate(data)

    async def sign_out(self) -> None:
        await self._request("POST", "/auth/sign-out")

    async def get_session_user(self) -> UserAuthOut:
        return UserAuthOut.model_validate(await self._request("GET", "/auth/session"))

    # =====================================================================
    # ACTIVITIES
    # =====================================================================

    async def list_activities(self) -> List[ActivityOut]:
        data = await self._request("GET", "/api/activities")
        return [ActivityOut.model_validate(row) for row in data]

    async def create_activity(
        self, description: str, date: Optional[datetime] = None
    ) -> ActivityOut:
        body: Dict[str, Any] = {"description": description}
        if date is not None:
            body["date"] = date.isoformat()
        return ActivityOut.model_validate(
            await self._request("POST", "/api/activities", json=body)
        )

    async def update_activity(
        self,
        activity_id: UUID,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> ActivityOut:
        body: Dict[str, Any] = {}
        if description is not None:
            body["description"] = description
        if date is not None:
            body["date"] = date.isoformat()
        return ActivityOut.model_validate(
            await self._request("PUT", f"/api/activities/{activity_id}", json=body)
        )

    async def delete_activity(self, activity_id: UUID) -> None:
        await self._request("DELETE", f"/api/activities/{activity_id}")

    # =====================================================================
    # GOALS
    # =====================================================================

    async def list_goals(self) -> List[GoalOut]:
        data = await self._request("GET", "/api/goals")
        return [GoalOut.model_validate(row) for row in data]

    async def create_goal(self, goal_text: str) -> GoalOut:
        return GoalOut.model_validate(
            await self._request("POST", "/api/goals", json={"goal_text": goal_text})
        )

    async def update_goal(self, goal_id: UUID, goal_text: str) -> GoalOut:
        return GoalOut.model_validate(
            await self._request("PUT", f"/api/goals/{goal_id}", json={"goal_text": goal_text})
        )

    async def delete_goal(self, goal_id: UUID) -> None:
        await self._request("DELETE", f"/api/goals/{goal_id}")

    # =====================================================================
    # REMINDERS & PROFILE
    # =====================================================================

    async def get_reminders(self, user_id: UUID) -> str:
        data = await self._request("GET", f"/api/reminders/{user_id}")
        return data.get("reminders") or ""

    async def save_reminders(self, user_id: UUID, reminders: str) -> ReminderOut:
        data = await self._request(
            "POST", "/api/reminders", json={"userId": str(user_id), "reminders": reminders}
        )
        return ReminderOut.model_validate(data)

    async def get_profile(self) -> ProfileOut:
        return ProfileOut.model_validate(await self._request("GET", "/api/profiles/me"))

    async def mark_welcome_seen(self) -> ProfileOut:
        return ProfileOut.model_validate(
            await self._request("POST", "/api/profiles/me/welcome-seen")
        )

    # =====================================================================
    # CHAT
    # =====================================================================

    async def chat(
        self,
        message: str,
        *,
        user_id: Optional[UUID] = None,
        context: Optional[Dict[str, Any]] = None,
        system_prompt: Optional[str] = None,
    ) -> str:
        body: Dict[str, Any] = {"message": message, "context": context or {}}
        if user_id is not None:
            body["userId"] = str(user_id)
        if system_prompt:
            body["systemPrompt"] = system_prompt

        data = await self._request("POST", "/api/chat", json=body)
        reply = data.get("message") if isinstance(data, dict) else None
        if not reply:
            raise ApiError(200, "Invalid response from server")
        return reply

    async def record_chat_message(self, user_message: str, bot_response: str) -> ChatMessageOut:
        data = await self._request(
            "POST",
            "/api/chat-messages",
            json={"user_message": user_message, "bot_response": bot_response},
        )
        return ChatMessageOut.model_validate(data)

    async def list_chat_messages(self, limit: int = 100) -> List[ChatMessageOut]:
        data = await self._request("GET", "/api/chat-messages", params={"limit": limit})
        return [ChatMessageOut.model_validate(row) for row in data]
