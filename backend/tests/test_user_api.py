"""
Tests des routes utilisateurs : inscription et liste.
"""
from unittest.mock import patch

from exercise_tracker.domain.services.user_service import user_service


class TestCreateUser:
    def test_fresh_username(self, client):
        response = client.post("/api/users", json={"username": "alice"})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"username", "id"}
        assert body["username"] == "alice"
        assert body["id"]

    def test_duplicate_username(self, client, create_user):
        create_user("alice")

        response = client.post("/api/users", json={"username": "alice"})

        assert response.status_code == 200
        assert response.json() == {"error": "Username already taken"}
        users = client.get("/api/users").json()
        assert [u["username"] for u in users] == ["alice"]

    def test_urlencoded_body(self, client):
        response = client.post("/api/users", data={"username": "carol"})

        assert response.json()["username"] == "carol"

    def test_numeric_username_is_coerced(self, client):
        response = client.post("/api/users", json={"username": 123})

        body = response.json()
        assert body["username"] == "123"
        assert body["id"]

    def test_missing_username(self, client):
        response = client.post("/api/users", json={})
        assert response.json() == {"error": "Username already taken"}

    def test_empty_username(self, client):
        response = client.post("/api/users", data={"username": ""})
        assert response.json() == {"error": "Username already taken"}
        assert client.get("/api/users").json() == []

    def test_malformed_json_is_rejected_by_framework(self, client):
        response = client.post(
            "/api/users",
            content="{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400


class TestListUsers:
    def test_empty(self, client):
        assert client.get("/api/users").json() == []

    def test_lists_id_and_username_only(self, client, create_user):
        alice = create_user("alice")
        bob = create_user("bob")

        users = client.get("/api/users").json()

        assert len(users) == 2
        for user in users:
            assert set(user) == {"id", "username"}
        by_name = {u["username"]: u["id"] for u in users}
        assert by_name == {"alice": alice["id"], "bob": bob["id"]}

    def test_storage_error(self, client):
        with patch.object(user_service, "list_users", side_effect=RuntimeError("connexion perdue")):
            response = client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == {"error": "Error fetching users"}
