# =============================================================================
# tests/test_auth.py - Registration, login and the bearer-token guard
# =============================================================================

from datetime import datetime, timedelta, timezone

import jwt

from conftest import API, auth_header, register


class TestRegister:
    def test_register_returns_token_and_public_user(self, client, store):
        response = client.post(f"{API}/auth/register", json={
            "name": "Alice", "email": "alice@example.com", "password": "s3cret-pass"
        })

        assert response.status_code == 201
        body = response.get_json()
        assert body["ok"] is True
        assert body["data"]["user"]["email"] == "alice@example.com"
        assert "password" not in body["data"]["user"]
        assert "passwordHash" not in body["data"]["user"]
        payload = jwt.decode(body["data"]["token"], "test-secret", algorithms=["HS256"])
        assert payload["user_id"] == body["data"]["user"]["id"]

        stored = store.get_user_by_email("alice@example.com")
        assert stored["password_hash"] != "s3cret-pass"
        assert stored["password_hash"].startswith("$2b$10$")

    def test_token_is_valid_for_thirty_days(self, client):
        data = register(client, "alice@example.com")
        payload = jwt.decode(data["token"], "test-secret", algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 30 * 24 * 3600

    def test_name_is_optional(self, client):
        data = register(client, "anon@example.com")
        assert data["user"]["name"] is None

    def test_missing_password_is_rejected(self, client):
        response = client.post(f"{API}/auth/register", json={"email": "a@example.com"})
        assert response.status_code == 400
        assert response.get_json()["error"] == {
            "type": "ValidationError", "message": "Please provide email and password"
        }

    def test_duplicate_email_is_rejected_without_new_row(self, client, store):
        register(client, "alice@example.com")
        response = client.post(f"{API}/auth/register", json={
            "email": "alice@example.com", "password": "another-pass"
        })

        assert response.status_code == 400
        assert response.get_json()["error"]["message"] == "User already exists"
        assert len(store.tables["users"]) == 1

    def test_duplicate_insert_race_is_reported_as_existing_user(self, client, store, monkeypatch):
        register(client, "alice@example.com")
        # The lookup misses, as when another request inserts the same email first.
        monkeypatch.setattr(store, "get_user_by_email", lambda email: None)

        response = client.post(f"{API}/auth/register", json={
            "email": "alice@example.com", "password": "another-pass"
        })

        assert response.status_code == 400
        assert response.get_json()["error"] == {"type": "ValidationError", "message": "User already exists"}
        assert len(store.tables["users"]) == 1

    def test_password_over_72_bytes_is_rejected(self, client, store):
        response = client.post(f"{API}/auth/register", json={
            "email": "long@example.com", "password": "x" * 100
        })

        assert response.status_code == 400
        assert response.get_json()["error"] == {
            "type": "ValidationError", "message": "Password must be at most 72 bytes"
        }
        assert store.tables["users"] == {}

    def test_password_limit_counts_utf8_bytes(self, client, store):
        # 40 characters, 80 bytes
        response = client.post(f"{API}/auth/register", json={
            "email": "accent@example.com", "password": "\u00e9" * 40
        })
        assert response.status_code == 400
        assert store.tables["users"] == {}

        register(client, "edge@example.com", password="x" * 72)

    def test_non_string_name_is_rejected(self, client, store):
        response = client.post(f"{API}/auth/register", json={
            "email": "a@example.com", "password": "s3cret-pass", "name": ["Alice"]
        })
        assert response.status_code == 400
        assert response.get_json()["error"]["message"] == "name must be a string"
        assert store.tables["users"] == {}


class TestLogin:
    def test_login_with_correct_password(self, client):
        register(client, "alice@example.com", password="s3cret-pass")
        response = client.post(f"{API}/auth/login", json={
            "email": "alice@example.com", "password": "s3cret-pass"
        })

        assert response.status_code == 200
        body = response.get_json()
        assert body["data"]["user"]["email"] == "alice@example.com"
        assert body["data"]["token"]

    def test_wrong_password_and_unknown_email_look_identical(self, client):
        register(client, "alice@example.com", password="s3cret-pass")

        wrong_password = client.post(f"{API}/auth/login", json={
            "email": "alice@example.com", "password": "nope"
        })
        unknown_email = client.post(f"{API}/auth/login", json={
            "email": "nobody@example.com", "password": "nope"
        })

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.get_json() == unknown_email.get_json()
        assert wrong_password.get_json()["error"]["type"] == "InvalidCredentials"

    def test_overlong_password_is_invalid_credentials(self, client):
        register(client, "alice@example.com", password="s3cret-pass")

        known_email = client.post(f"{API}/auth/login", json={
            "email": "alice@example.com", "password": "x" * 100
        })
        unknown_email = client.post(f"{API}/auth/login", json={
            "email": "nobody@example.com", "password": "x" * 100
        })

        assert known_email.status_code == unknown_email.status_code == 401
        assert known_email.get_json() == unknown_email.get_json()
        assert known_email.get_json()["error"]["type"] == "InvalidCredentials"

    def test_non_string_credentials_are_invalid_credentials(self, client):
        response = client.post(f"{API}/auth/login", json={
            "email": {"$ne": ""}, "password": ["s3cret-pass"]
        })
        assert response.status_code == 401
        assert response.get_json()["error"]["type"] == "InvalidCredentials"


class TestGuard:
    def test_missing_header(self, client):
        response = client.get(f"{API}/users/me")
        assert response.status_code == 401
        assert response.get_json()["error"]["type"] == "Unauthenticated"

    def test_malformed_header(self, client, alice):
        token = alice["headers"]["Authorization"].split(" ")[1]
        response = client.get(f"{API}/users/me", headers={"Authorization": f"Token {token}"})
        assert response.status_code == 401

    def test_bad_signature(self, client, alice):
        forged = jwt.encode({"user_id": alice["id"]}, "other-secret", algorithm="HS256")
        response = client.get(f"{API}/users/me", headers=auth_header(forged))
        assert response.status_code == 401
        assert response.get_json()["error"]["message"] == "Not authorized, token failed"

    def test_expired_token(self, client, alice):
        expired = jwt.encode({
            "user_id": alice["id"],
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        }, "test-secret", algorithm="HS256")
        response = client.get(f"{API}/users/me", headers=auth_header(expired))
        assert response.status_code == 401

    def test_token_for_missing_user(self, client):
        token = jwt.encode({"user_id": "does-not-exist"}, "test-secret", algorithm="HS256")
        response = client.get(f"{API}/users/me", headers=auth_header(token))
        assert response.status_code == 401
        assert response.get_json()["error"]["message"] == "Not authorized, user not found"

    def test_me_returns_profile_without_hash(self, client, alice):
        response = client.get(f"{API}/users/me", headers=alice["headers"])

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["id"] == alice["id"]
        assert data["name"] == "Alice"
        assert data["email"] == "alice@example.com"
        assert "createdAt" in data
        assert "passwordHash" not in data
