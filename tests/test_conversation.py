import asyncio
import logging
import uuid
from datetime import datetime, timedelta, timezone

from healthbuddy.client import (
    ActivityStore,
    ApiError,
    AuthEvent,
    AuthSession,
    ConversationController,
    ConversationState,
    ProfileEditor,
)
from healthbuddy.client.conversation import (
    ASSISTANT,
    CANNED_GREETING,
    LOGIN_REQUIRED,
    NEW_USER_GREETING,
    RETURNING_GREETING,
    SEND_FAILED,
    USER,
    WELCOME_FAILED,
    assemble_context,
    coach_prompt,
    describe_time,
)
from healthbuddy.schemas.goal import GoalOut

FRIDAY_MORNING = datetime(2025, 3, 7, 9, 5)


def build(api):
    auth = AuthSession(api)
    store = ActivityStore(api)
    controller = ConversationController(api, auth, store, clock=lambda: FRIDAY_MORNING)
    return auth, store, controller


async def wait_for(predicate):
    for _ in range(100):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


async def sign_in(auth, controller):
    """Sign in and wait for the welcome it schedules."""
    await auth.sign_in("sam@example.com", "secret123")
    await controller.wait_for_welcome()


class TestHelpers:
    def test_describe_time(self):
        assert describe_time(FRIDAY_MORNING) == ("Friday", "9:05 AM")
        assert describe_time(datetime(2025, 3, 7, 0, 30)) == ("Friday", "12:30 AM")
        assert describe_time(datetime(2025, 3, 7, 13, 0)) == ("Friday", "1:00 PM")

    def test_assemble_context_uses_wire_names(self):
        goal = GoalOut(id=uuid.uuid4(), user_id=uuid.uuid4(), goal_text="Sleep 8h")
        context = assemble_context([], "Bad knee", [goal])
        assert context == {
            "recentActivities": [],
            "thingsToKeepInMind": "Bad knee",
            "goals": [{"description": "Sleep 8h"}],
        }

    def test_coach_prompt_placeholders(self):
        prompt = coach_prompt([], "", [])
        assert "No goals set yet" in prompt
        assert "No recent activities" in prompt


class TestWelcome:
    def test_unauthenticated_shows_canned_greeting(self, fake_api):
        _, _, controller = build(fake_api)
        asyncio.run(controller.start())

        assert controller.state is ConversationState.UNAUTHENTICATED
        assert [m.content for m in controller.transcript] == [CANNED_GREETING]
        assert fake_api.calls == []

    def test_new_user_gets_one_welcome_and_modal(self, fake_api):
        auth, _, controller = build(fake_api)
        fake_api.chat_reply = "Happy Friday, Sam!"
        asyncio.run(sign_in(auth, controller))

        assert len(fake_api.chat_calls) == 1
        call = fake_api.chat_calls[0]
        assert call["message"] == NEW_USER_GREETING
        assert call["user_id"] == fake_api.user.id
        assert call["context"]["dayOfWeek"] == "Friday"
        assert call["context"]["timeOfDay"] == "9:05 AM"
        assert "It's currently Friday at 9:05 AM" in call["system_prompt"]
        assert controller.show_welcome_modal is True
        assert controller.state is ConversationState.ACTIVE
        assert controller.is_typing is False
        assert [(m.sender, m.content) for m in controller.transcript] == [
            (ASSISTANT, "Happy Friday, Sam!")
        ]

    def test_sign_in_returns_before_welcome_reply(self, fake_api):
        auth, _, controller = build(fake_api)
        editor = ProfileEditor(fake_api, auth)

        async def scenario():
            fake_api.chat_gate = asyncio.Event()
            assert await editor.sign_in("sam@example.com", "secret123") is True
            assert editor.loading is False

            await wait_for(lambda: fake_api.chat_calls)
            assert controller.state is ConversationState.WELCOME_REQUESTED
            assert controller.is_typing is True
            assert [m.content for m in controller.transcript] == [CANNED_GREETING]

            fake_api.chat_gate.set()
            await controller.wait_for_welcome()

        asyncio.run(scenario())
        assert controller.state is ConversationState.ACTIVE
        assert controller.is_typing is False
        assert controller.transcript[0].content == fake_api.chat_reply

    def test_dismiss_failure_is_logged_as_warning(self, fake_api, caplog):
        auth, _, controller = build(fake_api)
        fake_api.welcome_seen_error = ApiError(500, "db down")

        async def scenario():
            await sign_in(auth, controller)
            await controller.dismiss_welcome_modal()

        with caplog.at_level(logging.WARNING):
            asyncio.run(scenario())

        assert controller.show_welcome_modal is False
        records = [r for r in caplog.records if "Error updating welcome status" in r.getMessage()]
        assert [r.levelno for r in records] == [logging.WARNING]

    def test_returning_user_gets_returning_greeting(self, make_fake_api):
        api = make_fake_api(has_seen_welcome=True)
        auth, _, controller = build(api)
        asyncio.run(sign_in(auth, controller))

        assert api.chat_calls[0]["message"] == RETURNING_GREETING
        assert controller.show_welcome_modal is False

    def test_dismissed_modal_does_not_return(self, fake_api):
        auth, _, controller = build(fake_api)

        async def scenario():
            await sign_in(auth, controller)
            assert controller.show_welcome_modal is True
            await controller.dismiss_welcome_modal()
            assert controller.show_welcome_modal is False

            await auth.sign_out()
            await sign_in(auth, controller)

        asyncio.run(scenario())
        assert fake_api.welcome_seen_calls == 1
        assert controller.show_welcome_modal is False
        assert [c["message"] for c in fake_api.chat_calls] == [NEW_USER_GREETING, RETURNING_GREETING]

    def test_concurrent_triggers_fire_once(self, fake_api):
        auth, _, controller = build(fake_api)

        async def scenario():
            fake_api.chat_gate = asyncio.Event()
            # Session exists but no listener has heard about it yet
            auth._set_session(await fake_api.sign_in("sam@example.com", "secret123"))
            session = auth.session
            results = asyncio.gather(
                controller.handle_auth_change(AuthEvent.SIGNED_IN, session),
                controller.handle_auth_change(AuthEvent.INITIAL_SESSION, session),
                controller.ensure_welcome(),
                controller.ensure_welcome(),
            )
            await wait_for(lambda: fake_api.chat_calls)
            fake_api.chat_gate.set()
            await results
            await controller.wait_for_welcome()

        asyncio.run(scenario())
        assert len(fake_api.chat_calls) == 1
        assert controller.state is ConversationState.ACTIVE

    def test_later_auth_events_do_not_refire(self, fake_api):
        auth, _, controller = build(fake_api)

        async def scenario():
            await sign_in(auth, controller)
            await controller.handle_auth_change(AuthEvent.TOKEN_REFRESHED, auth.session)
            await controller.start()
            await controller.wait_for_welcome()

        asyncio.run(scenario())
        assert len(fake_api.chat_calls) == 1

    def test_welcome_failure_sets_error(self, fake_api):
        auth, _, controller = build(fake_api)
        fake_api.chat_error = ApiError(500, "Failed to process chat request")
        asyncio.run(sign_in(auth, controller))

        assert controller.error == WELCOME_FAILED
        assert controller.state is ConversationState.ACTIVE
        assert controller.is_typing is False

    def test_sign_out_during_welcome_discards_reply(self, fake_api):
        auth, store, controller = build(fake_api)

        async def scenario():
            fake_api.chat_gate = asyncio.Event()
            await auth.sign_in("sam@example.com", "secret123")
            await wait_for(lambda: fake_api.chat_calls)
            await auth.sign_out()
            fake_api.chat_gate.set()
            await controller.wait_for_welcome()

        asyncio.run(scenario())
        assert controller.state is ConversationState.UNAUTHENTICATED
        assert [m.content for m in controller.transcript] == [CANNED_GREETING]
        assert store.activities == []


class TestSend:
    def _signed_in(self, api):
        auth, store, controller = build(api)
        asyncio.run(sign_in(auth, controller))
        return auth, store, controller

    def test_send_appends_reply_and_persists(self, fake_api):
        base = datetime(2025, 3, 1, tzinfo=timezone.utc)
        for day in range(7):
            fake_api.add_activity(f"Activity {day}", base + timedelta(days=day))
        fake_api.goals = [GoalOut(id=uuid.uuid4(), user_id=fake_api.user.id, goal_text="Sleep 8h")]
        fake_api.reminders = "Bad knee"
        _, _, controller = self._signed_in(fake_api)

        fake_api.chat_reply = "Nice work!"
        assert asyncio.run(controller.send("  I ran today  ")) is True

        assert [(m.sender, m.content) for m in controller.transcript[1:]] == [
            (USER, "I ran today"),
            (ASSISTANT, "Nice work!"),
        ]
        call = fake_api.chat_calls[-1]
        assert call["message"] == "I ran today"
        context = call["context"]
        assert [a["description"] for a in context["recentActivities"]] == [
            "Activity 6", "Activity 5", "Activity 4", "Activity 3", "Activity 2",
        ]
        assert context["thingsToKeepInMind"] == "Bad knee"
        assert context["goals"] == [{"description": "Sleep 8h"}]
        assert "- Sleep 8h" in call["system_prompt"]
        assert fake_api.chat_messages[0].user_message == "I ran today"
        assert fake_api.chat_messages[0].bot_response == "Nice work!"
        assert controller.is_typing is False

    def test_persistence_failure_is_only_logged(self, fake_api, caplog):
        _, _, controller = self._signed_in(fake_api)
        fake_api.record_error = ApiError(500, "disk full")

        with caplog.at_level(logging.WARNING):
            assert asyncio.run(controller.send("hello")) is True

        assert controller.transcript[-1].content == fake_api.chat_reply
        assert controller.error is None
        assert "Error storing chat message" in caplog.text

    def test_send_failure_keeps_user_message(self, fake_api):
        _, _, controller = self._signed_in(fake_api)
        fake_api.chat_error = ApiError(500, "Failed to process chat request")

        assert asyncio.run(controller.send("hello")) is False
        assert controller.transcript[-1].sender == USER
        assert controller.error == SEND_FAILED
        assert controller.is_typing is False

    def test_blank_send_is_ignored(self, fake_api):
        _, _, controller = self._signed_in(fake_api)
        calls = len(fake_api.chat_calls)

        assert asyncio.run(controller.send("   ")) is False
        assert len(fake_api.chat_calls) == calls
        assert len(controller.transcript) == 1

    def test_send_requires_login(self, fake_api):
        _, _, controller = build(fake_api)

        assert asyncio.run(controller.send("hello")) is False
        assert controller.error == LOGIN_REQUIRED
        assert fake_api.chat_calls == []

    def test_second_send_blocked_while_outstanding(self, fake_api):
        _, _, controller = self._signed_in(fake_api)

        async def scenario():
            fake_api.chat_gate = asyncio.Event()
            first = asyncio.create_task(controller.send("first"))
            await wait_for(lambda: controller.is_sending)
            assert controller.is_typing is True
            assert await controller.send("second") is False
            fake_api.chat_gate.set()
            return await first

        assert asyncio.run(scenario()) is True
        assert [c["message"] for c in fake_api.chat_calls[1:]] == ["first"]

    def test_load_history_is_oldest_first(self, fake_api):
        _, _, controller = self._signed_in(fake_api)

        async def scenario():
            await fake_api.record_chat_message("q1", "a1")
            fake_api.chat_messages[0].timestamp -= timedelta(minutes=1)
            await fake_api.record_chat_message("q2", "a2")
            return await controller.load_history()

        assert asyncio.run(scenario()) == [
            {"role": "user", "content": "q1"},
            {"role": "assistant", "content": "a1"},
            {"role": "user", "content": "q2"},
            {"role": "assistant", "content": "a2"},
        ]


    def test_send_picks_up_goals_and_reminders_saved_later(self, fake_api):
        _, _, controller = self._signed_in(fake_api)
        fake_api.goals = [GoalOut(id=uuid.uuid4(), user_id=fake_api.user.id, goal_text="Drink 2L water")]
        fake_api.reminders = "Vegetarian"

        assert asyncio.run(controller.send("What should I eat?")) is True

        context = fake_api.chat_calls[-1]["context"]
        assert context["goals"] == [{"description": "Drink 2L water"}]
        assert context["thingsToKeepInMind"] == "Vegetarian"
        assert "- Drink 2L water" in fake_api.chat_calls[-1]["system_prompt"]

    def test_send_falls_back_to_cached_context(self, fake_api, caplog):
        fake_api.reminders = "Bad knee"
        _, _, controller = self._signed_in(fake_api)

        async def failing_reminders(user_id):
            raise ApiError(None, "Request failed: connection reset")

        fake_api.get_reminders = failing_reminders
        with caplog.at_level(logging.WARNING):
            assert asyncio.run(controller.send("hello")) is True

        assert fake_api.chat_calls[-1]["context"]["thingsToKeepInMind"] == "Bad knee"
        assert "Context refresh failed" in caplog.text
