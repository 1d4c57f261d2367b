import uuid


class TestGoals:
    def test_create_list_update_delete(self, client, register):
        headers, _ = register()
        created = client.post("/api/goals", json={"goal_text": "Sleep 8h"}, headers=headers)
        assert created.status_code == 201
        goal_id = created.json()["id"]

        updated = client.put(
            f"/api/goals/{goal_id}", json={"goal_text": "Sleep 7.5h"}, headers=headers
        )
        assert updated.json()["goal_text"] == "Sleep 7.5h"

        goals = client.get("/api/goals", headers=headers).json()
        assert [g["goal_text"] for g in goals] == ["Sleep 7.5h"]

        assert client.delete(f"/api/goals/{goal_id}", headers=headers).status_code == 200
        assert client.get("/api/goals", headers=headers).json() == []

    def test_blank_goal_rejected(self, client, register):
        headers, _ = register()
        response = client.post("/api/goals", json={"goal_text": "  "}, headers=headers)
        assert response.status_code == 422

    def test_foreign_goal_is_not_found(self, client, register):
        sam, _ = register()
        alex, _ = register(email="alex@example.com", name="Alex")
        goal_id = client.post("/api/goals", json={"goal_text": "Sleep 8h"}, headers=sam).json()["id"]

        assert client.delete(f"/api/goals/{goal_id}", headers=alex).status_code == 404
        assert client.put(
            f"/api/goals/{goal_id}", json={"goal_text": "x"}, headers=alex
        ).status_code == 404


class TestReminders:
    def test_missing_row_reads_as_empty(self, client, register):
        headers, user_id = register()
        response = client.get(f"/api/reminders/{user_id}", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"reminders": ""}

    def test_save_overwrites(self, client, register):
        headers, user_id = register()
        client.post("/api/reminders", json={"userId": user_id, "reminders": "Bad knee"}, headers=headers)
        response = client.post(
            "/api/reminders", json={"userId": user_id, "reminders": "Bad knee, vegetarian"}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["reminders"] == "Bad knee, vegetarian"
        assert client.get(f"/api/reminders/{user_id}", headers=headers).json() == {
            "reminders": "Bad knee, vegetarian"
        }

    def test_user_id_is_optional(self, client, register):
        headers, user_id = register()
        client.post("/api/reminders", json={"reminders": "No dairy"}, headers=headers)
        assert client.get(f"/api/reminders/{user_id}", headers=headers).json()["reminders"] == "No dairy"

    def test_cannot_save_for_someone_else(self, client, register):
        headers, _ = register()
        response = client.post(
            "/api/reminders", json={"userId": str(uuid.uuid4()), "reminders": "x"}, headers=headers
        )
        assert response.status_code == 403

    def test_cannot_read_someone_else(self, client, register):
        _, sam_id = register()
        alex, _ = register(email="alex@example.com", name="Alex")
        response = client.get(f"/api/reminders/{sam_id}", headers=alex)
        assert response.status_code == 404
