import asyncio

from healthbuddy.client import AuthEvent, AuthSession, ProfileEditor


class TestProfileEditor:
    def test_sign_up_then_sign_in_loads_data(self, make_api):
        async def scenario():
            async with make_api() as api:
                auth = AuthSession(api)
                editor = ProfileEditor(api, auth)
                events = []
                auth.on_auth_state_change(lambda event, session: events.append(event))

                assert await editor.sign_up("sam@example.com", "secret123", "Sam") is True
                assert editor.success == "Account created! You can now sign in."
                assert auth.session is None

                assert await editor.sign_in("sam@example.com", "secret123") is True
                assert events == [AuthEvent.SIGNED_IN]
                assert editor.goals == []
                assert editor.reminders == ""

        asyncio.run(scenario())

    def test_bad_credentials_set_error(self, make_api):
        async def scenario():
            async with make_api() as api:
                editor = ProfileEditor(api, AuthSession(api))
                assert await editor.sign_in("nobody@example.com", "secret123") is False
                assert editor.error == "Invalid email or password"
                assert editor.loading is False

        asyncio.run(scenario())

    def test_goals_and_reminders(self, make_api):
        async def scenario():
            async with make_api() as api:
                auth = AuthSession(api)
                editor = ProfileEditor(api, auth)
                await editor.sign_up("sam@example.com", "secret123", "Sam")
                await editor.sign_in("sam@example.com", "secret123")

                assert await editor.save_goal("   ") is False
                assert editor.error == "Please enter a goal"

                assert await editor.save_goal("Sleep 8h") is True
                goal_id = editor.goals[0].id
                assert await editor.save_goal("Sleep 7.5h", goal_id=goal_id) is True
                assert [g.goal_text for g in editor.goals] == ["Sleep 7.5h"]

                assert await editor.save_reminders("Bad knee") is True
                assert editor.reminders == "Bad knee"

                # A fresh editor sees the persisted state after load()
                other = ProfileEditor(api, auth)
                await other.load()
                assert [g.goal_text for g in other.goals] == ["Sleep 7.5h"]
                assert other.reminders == "Bad knee"

                assert await editor.delete_goal(goal_id) is True
                assert editor.goals == []

        asyncio.run(scenario())

    def test_sign_out_clears_state(self, make_api):
        async def scenario():
            async with make_api() as api:
                auth = AuthSession(api)
                editor = ProfileEditor(api, auth)
                await editor.sign_up("sam@example.com", "secret123", "Sam")
                await editor.sign_in("sam@example.com", "secret123")
                await editor.save_reminders("Bad knee")

                await editor.sign_out()
                assert auth.session is None
                assert api.access_token is None
                assert editor.reminders == ""
                assert await editor.save_goal("Sleep 8h") is False
                assert editor.error == "User not authenticated"

        asyncio.run(scenario())

    def test_expired_session_is_dropped(self, make_api):
        async def scenario():
            async with make_api() as api:
                auth = AuthSession(api)
                await auth.sign_up("sam@example.com", "secret123", "Sam")
                await auth.sign_in("sam@example.com", "secret123")
                api.access_token = "garbage"

                assert await auth.get_session() is None
                assert auth.session is None

        asyncio.run(scenario())
