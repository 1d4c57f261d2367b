"""
Shared fixtures.

The app runs against a fresh in-memory SQLite database per test and a fake
completion client, wired in through FastAPI dependency overrides.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from healthbuddy.core.config import Base, get_db
from healthbuddy.client.api import HealthBuddyAPI
from healthbuddy.client.errors import ApiError
from healthbuddy.schemas.activity import ActivityOut
from healthbuddy.schemas.chat import ChatMessageOut
from healthbuddy.schemas.goal import GoalOut
from healthbuddy.schemas.profile import ProfileOut
from healthbuddy.schemas.reminder import ReminderOut
from healthbuddy.schemas.user_auth import TokenResponse, UserAuthOut
from healthbuddy.services.completion_client import get_completion_client


# =============================================================================
# Backend fixtures
# =============================================================================

class FakeCompletionClient:
    """Records every prompt; replies with `reply` or raises `error`."""

    def __init__(self):
        self.calls: List[List[Dict[str, str]]] = []
        self.reply = "Keep it up!"
        self.error: Optional[Exception] = None

    def complete(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def completion():
    return FakeCompletionClient()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def app_overrides(session_factory, completion):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_client] = lambda: completion
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_overrides):
    with TestClient(app_overrides) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Sign up and sign in; returns (auth headers, user id)."""

    def _register(email: str = "sam@example.com", password: str = "secret123", name: str = "Sam"):
        response = client.post(
            "/auth/sign-up", json={"email": email, "password": password, "name": name}
        )
        assert response.status_code == 201, response.text
        login = client.post("/auth/sign-in", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        body = login.json()
        return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]["id"]

    return _register


@pytest.fixture
def make_api(app_overrides):
    """HealthBuddyAPI instances that talk to the app in-process."""

    def _make_api() -> HealthBuddyAPI:
        return HealthBuddyAPI(
            "http://testserver", transport=httpx.ASGITransport(app=app_overrides)
        )

    return _make_api


# =============================================================================
# Client-side fake
# =============================================================================

def _now():
    return datetime.now(timezone.utc)


class FakeAPI:
    """
    In-memory stand-in for HealthBuddyAPI used by controller tests.

    `chat_gate`, when set to an asyncio.Event, holds every chat call until
    the event fires.
    """

    def __init__(self, has_seen_welcome: bool = False):
        self.user = UserAuthOut(id=uuid.uuid4(), email="sam@example.com")
        self.access_token = None
        self.profile = ProfileOut(id=self.user.id, name="Sam", has_seen_welcome=has_seen_welcome)
        self.activities: List[ActivityOut] = []
        self.goals: List[GoalOut] = []
        self.reminders = ""
        self.chat_messages: List[ChatMessageOut] = []
        self.chat_calls: List[dict] = []
        self.chat_reply = "Great to see you!"
        self.chat_error: Optional[ApiError] = None
        self.record_error: Optional[ApiError] = None
        self.welcome_seen_error: Optional[ApiError] = None
        self.chat_gate = None
        self.welcome_seen_calls = 0
        self.calls: List[str] = []

    def add_activity(self, description: str, date: datetime) -> ActivityOut:
        activity = ActivityOut(
            id=uuid.uuid4(), user_id=self.user.id, description=description, date=date
        )
        self.activities.append(activity)
        return activity

    async def sign_in(self, email, password):
        self.calls.append("sign_in")
        return TokenResponse(access_token="access", refresh_token="refresh", user=self.user)

    async def sign_out(self):
        self.calls.append("sign_out")

    async def get_session_user(self):
        self.calls.append("get_session_user")
        return self.user

    async def get_profile(self):
        self.calls.append("get_profile")
        return self.profile

    async def mark_welcome_seen(self):
        self.calls.append("mark_welcome_seen")
        if self.welcome_seen_error is not None:
            raise self.welcome_seen_error
        self.welcome_seen_calls += 1
        self.profile = self.profile.model_copy(update={"has_seen_welcome": True})
        return self.profile

    async def list_activities(self):
        self.calls.append("list_activities")
        return sorted(self.activities, key=lambda a: a.date, reverse=True)

    async def list_goals(self):
        self.calls.append("list_goals")
        return list(self.goals)

    async def get_reminders(self, user_id):
        self.calls.append("get_reminders")
        return self.reminders

    async def save_reminders(self, user_id, reminders):
        self.reminders = reminders
        return ReminderOut(user_id=user_id, reminders=reminders)

    async def chat(self, message, *, user_id=None, context=None, system_prompt=None):
        self.calls.append("chat")
        self.chat_calls.append(
            {"message": message, "user_id": user_id, "context": context, "system_prompt": system_prompt}
        )
        if self.chat_gate is not None:
            await self.chat_gate.wait()
        if self.chat_error is not None:
            raise self.chat_error
        return self.chat_reply

    async def record_chat_message(self, user_message, bot_response):
        self.calls.append("record_chat_message")
        if self.record_error is not None:
            raise self.record_error
        row = ChatMessageOut(
            id=uuid.uuid4(),
            user_id=self.user.id,
            user_message=user_message,
            bot_response=bot_response,
            timestamp=_now(),
        )
        self.chat_messages.append(row)
        return row

    async def list_chat_messages(self, limit=100):
        return sorted(self.chat_messages, key=lambda m: m.timestamp, reverse=True)[:limit]


@pytest.fixture
def make_fake_api():
    return FakeAPI


@pytest.fixture
def fake_api():
    return FakeAPI()
