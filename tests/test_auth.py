"""Tests for registration, login and the session guard."""

from datetime import timedelta

from fastapi.testclient import TestClient
from jose import jwt

from conftest import TEST_SECRET, bearer, register
from travelstory.core.security import TokenService


class TestRegistration:
    """POST /create-account."""

    def test_register_returns_user_and_token(self, client: TestClient) -> None:
        response = client.post(
            "/create-account",
            json={"fullName": "Ada Lovelace", "email": "ada@example.com", "password": "s3cret!"},
        )
        assert response.status_code == 201
        payload = response.json()
        assert payload["error"] is False
        assert payload["message"] == "Registration Successful"
        assert payload["user"] == {"fullName": "Ada Lovelace", "email": "ada@example.com"}
        assert "password" not in str(payload["user"]).lower()

        claims = jwt.decode(payload["accessToken"], TEST_SECRET, algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == int(timedelta(hours=48).total_seconds())

    def test_missing_fields(self, client: TestClient) -> None:
        for body in (
            {"email": "ada@example.com", "password": "pw"},
            {"fullName": "Ada", "password": "pw"},
            {"fullName": "Ada", "email": "ada@example.com", "password": ""},
            {},
        ):
            response = client.post("/create-account", json=body)
            assert response.status_code == 400
            assert response.json() == {"error": True, "message": "All fields are required"}

    def test_duplicate_email_is_rejected_once(self, client: TestClient) -> None:
        register(client, "ada@example.com")
        response = client.post(
            "/create-account",
            json={"fullName": "Someone Else", "email": "ada@example.com", "password": "other"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "User Already exists"}

        # The original account still logs in with its own password
        login = client.post("/login", json={"email": "ada@example.com", "password": "s3cret!"})
        assert login.status_code == 200
        assert login.json()["user"]["fullName"] == "Ada Lovelace"

    def test_email_match_is_case_sensitive(self, client: TestClient) -> None:
        register(client, "ada@example.com")
        register(client, "ADA@example.com")


class TestLogin:
    """POST /login."""

    def test_login_after_register(self, client: TestClient) -> None:
        register(client, "ada@example.com", "s3cret!")
        response = client.post("/login", json={"email": "ada@example.com", "password": "s3cret!"})
        assert response.status_code == 200
        payload = response.json()
        assert payload["message"] == "Login Successful"
        assert payload["user"] == {"fullName": "Ada Lovelace", "email": "ada@example.com"}

        claims = jwt.decode(payload["accessToken"], TEST_SECRET, algorithms=["HS256"])
        assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())

        me = client.get("/get-user", headers=bearer(payload["accessToken"]))
        assert me.status_code == 200

    def test_missing_fields(self, client: TestClient) -> None:
        response = client.post("/login", json={"email": "ada@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.post("/login", json={"email": "nobody@example.com", "password": "pw"})
        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "User not found"}

    def test_wrong_password(self, client: TestClient) -> None:
        register(client, "ada@example.com", "s3cret!")
        response = client.post("/login", json={"email": "ada@example.com", "password": "nope"})
        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "Invalid password"}


class TestCurrentUser:
    """GET /get-user and the bearer session guard."""

    def test_returns_user_without_password_hash(self, client: TestClient, token: str) -> None:
        response = client.get("/get-user", headers=bearer(token))
        assert response.status_code == 200
        payload = response.json()
        assert payload["message"] == ""
        user = payload["user"]
        assert user["fullName"] == "Ada Lovelace"
        assert user["email"] == "ada@example.com"
        assert isinstance(user["id"], int)
        assert "createdAt" in user
        assert not any("password" in key.lower() for key in user)

    def test_missing_header(self, client: TestClient) -> None:
        response = client.get("/get-user")
        assert response.status_code == 401
        assert response.json()["error"] is True

    def test_wrong_scheme(self, client: TestClient, token: str) -> None:
        response = client.get("/get-user", headers={"Authorization": f"Basic {token}"})
        assert response.status_code == 401

    def test_malformed_token(self, client: TestClient) -> None:
        response = client.get("/get-user", headers=bearer("not-a-jwt"))
        assert response.status_code == 401

    def test_token_signed_with_other_secret(self, client: TestClient) -> None:
        forged = TokenService("someone-elses-secret").issue(1, timedelta(hours=1))
        response = client.get("/get-user", headers=bearer(forged))
        assert response.status_code == 401

    def test_expired_token(self, client: TestClient) -> None:
        expired = TokenService(TEST_SECRET).issue(1, timedelta(seconds=-5))
        response = client.get("/get-user", headers=bearer(expired))
        assert response.status_code == 401

    def test_unknown_user_is_bare_401(self, client: TestClient) -> None:
        orphan = TokenService(TEST_SECRET).issue(9999, timedelta(hours=1))
        response = client.get("/get-user", headers=bearer(orphan))
        assert response.status_code == 401
        assert response.content == b""

    def test_guard_protects_story_routes(self, client: TestClient) -> None:
        assert client.get("/get-all-stories").status_code == 401
        assert client.get("/get-stories").status_code == 401
        assert client.get("/search", params={"query": "x"}).status_code == 401
        assert client.post("/add-travel-story", json={}).status_code == 401
        assert client.put("/edit-story/1", json={}).status_code == 401
        assert client.delete("/delete-story/1").status_code == 401
        assert client.put("/update-is-favourite/1", json={}).status_code == 401
        assert client.get("/travel-stories/filter").status_code == 401


class TestHealth:
    """GET /health."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0", "database": "healthy"}
