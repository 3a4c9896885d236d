"""
Tests de l'historique d'exercices : GET /api/users/{id}/logs.
"""
from unittest.mock import patch
from uuid import uuid4

import pytest

from exercise_tracker.domain.services.exercise_service import exercise_service

DATES = ["2023-01-01", "2023-01-02", "2023-01-03", "2023-01-04", "2023-01-05"]


@pytest.fixture
def athlete(client, create_user):
    """Utilisateur avec cinq exercices, un par jour."""
    user = create_user("alice")
    for i, day in enumerate(DATES, start=1):
        response = client.post(
            f"/api/users/{user['id']}/exercises",
            json={"description": f"session {i}", "duration": 10 * i, "date": day},
        )
        assert "error" not in response.json()
    return user


class TestExerciseLog:
    def test_full_log_newest_first(self, client, athlete):
        body = client.get(f"/api/users/{athlete['id']}/logs").json()

        assert body["username"] == "alice"
        assert body["id"] == athlete["id"]
        assert body["count"] == 5
        assert [e["date"] for e in body["log"]] == [
            "Thu Jan 05 2023",
            "Wed Jan 04 2023",
            "Tue Jan 03 2023",
            "Mon Jan 02 2023",
            "Sun Jan 01 2023",
        ]

    def test_entry_shape(self, client, athlete):
        body = client.get(f"/api/users/{athlete['id']}/logs").json()

        assert list(body) == ["username", "id", "count", "log"]
        assert body["log"][0] == {
            "description": "session 5",
            "duration": 50,
            "date": "Thu Jan 05 2023",
        }

    def test_inclusive_date_window(self, client, athlete):
        body = client.get(
            f"/api/users/{athlete['id']}/logs",
            params={"from": "2023-01-02", "to": "2023-01-04"},
        ).json()

        assert body["count"] == 3
        assert [e["description"] for e in body["log"]] == ["session 4", "session 3", "session 2"]

    def test_from_only(self, client, athlete):
        body = client.get(f"/api/users/{athlete['id']}/logs", params={"from": "2023-01-04"}).json()
        assert [e["description"] for e in body["log"]] == ["session 5", "session 4"]

    def test_to_only(self, client, athlete):
        body = client.get(f"/api/users/{athlete['id']}/logs", params={"to": "2023-01-01"}).json()
        assert [e["description"] for e in body["log"]] == ["session 1"]

    def test_limit(self, client, athlete):
        body = client.get(f"/api/users/{athlete['id']}/logs", params={"limit": "2"}).json()

        assert body["count"] == 2
        assert [e["date"] for e in body["log"]] == ["Thu Jan 05 2023", "Wed Jan 04 2023"]

    def test_limit_with_window(self, client, athlete):
        body = client.get(
            f"/api/users/{athlete['id']}/logs",
            params={"from": "2023-01-02", "to": "2023-01-04", "limit": "1"},
        ).json()
        assert [e["description"] for e in body["log"]] == ["session 4"]

    def test_non_numeric_limit_is_ignored(self, client, athlete):
        body = client.get(f"/api/users/{athlete['id']}/logs", params={"limit": "abc"}).json()
        assert body["count"] == 5

    def test_logs_are_per_user(self, client, athlete, create_user):
        bob = create_user("bob")
        client.post(
            f"/api/users/{bob['id']}/exercises",
            json={"description": "bike", "duration": 60, "date": "2023-01-03"},
        )

        body = client.get(f"/api/users/{bob['id']}/logs").json()
        assert body["count"] == 1
        assert body["log"][0]["description"] == "bike"

    def test_user_without_exercises(self, client, create_user):
        bob = create_user("bob")
        body = client.get(f"/api/users/{bob['id']}/logs").json()
        assert body == {"username": "bob", "id": bob["id"], "count": 0, "log": []}


class TestExerciseLogErrors:
    def test_unknown_user(self, client):
        response = client.get(f"/api/users/{uuid4()}/logs")

        assert response.status_code == 200
        assert response.json() == {"error": "Error retrieving exercise logs"}

    def test_unknown_user_still_runs_query(self, client):
        with patch.object(exercise_service, "list_for_user", return_value=[]) as list_for_user:
            response = client.get(f"/api/users/{uuid4()}/logs")

        list_for_user.assert_called_once()
        assert response.json() == {"error": "Error retrieving exercise logs"}

    def test_invalid_from(self, client, athlete):
        response = client.get(f"/api/users/{athlete['id']}/logs", params={"from": "yesterday"})
        assert response.json() == {"error": "Error retrieving exercise logs"}

    def test_storage_error(self, client, athlete):
        with patch.object(exercise_service, "list_for_user", side_effect=RuntimeError("timeout")):
            response = client.get(f"/api/users/{athlete['id']}/logs")

        assert response.json() == {"error": "Error retrieving exercise logs"}
