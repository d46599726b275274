"""Integration tests for signup, login, refresh, logout and /me."""

from datetime import timedelta

from fastapi.testclient import TestClient

from plaza_auth import JWTService
from tests.shared.fixtures.api_client import bearer, login, signup
from tests.shared.fixtures.factories import TEST_EMAIL


class TestSignup:
    """Tests for POST /signup."""

    def test_signup_success(self, test_client: TestClient):
        response = signup(test_client, email="  Kim@Example.COM ")

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "signup successful"
        assert data["data"]["email"] == TEST_EMAIL
        assert data["data"]["role"] == "USER"
        assert "password" not in data["data"]

    def test_signup_duplicate_email(self, test_client: TestClient):
        assert signup(test_client).status_code == 201

        response = signup(test_client, email=TEST_EMAIL.upper())

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_signup_weak_password(self, test_client: TestClient):
        response = signup(test_client, password="short")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_signup_invalid_email(self, test_client: TestClient):
        response = signup(test_client, email="not-an-email")

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["errors"]


class TestLogin:
    """Tests for POST /login."""

    def test_login_returns_tokens(self, test_client: TestClient):
        signup(test_client)

        response = login(test_client)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["accessToken"]
        assert data["refreshToken"]
        assert data["user"]["email"] == TEST_EMAIL

    def test_unknown_email_and_wrong_password_look_the_same(
        self,
        test_client: TestClient,
    ):
        signup(test_client)

        unknown = login(test_client, email="nobody@example.com")
        wrong = login(test_client, password="wrong-password")

        assert unknown.status_code == wrong.status_code == 400
        assert unknown.json() == wrong.json()

    def test_malformed_email_looks_like_unknown_email(self, test_client: TestClient):
        signup(test_client)

        malformed = login(test_client, email="not-an-email")
        unknown = login(test_client, email="nobody@example.com")

        assert malformed.status_code == unknown.status_code == 400
        assert malformed.json() == unknown.json()

    def test_account_locks_after_repeated_failures(self, test_client: TestClient):
        signup(test_client)
        for _ in range(3):
            assert login(test_client, password="wrong-password").status_code == 400

        response = login(test_client)

        assert response.status_code == 400
        assert "locked" in response.json()["message"]

    def test_locked_account_hides_lock_from_wrong_password(
        self,
        test_client: TestClient,
    ):
        signup(test_client)
        for _ in range(3):
            login(test_client, password="wrong-password")

        locked = login(test_client, password="wrong-password")
        unknown = login(test_client, email="nobody@example.com")

        assert locked.status_code == unknown.status_code == 400
        assert locked.json() == unknown.json()
        assert "locked" not in locked.json()["message"]


class TestRefresh:
    """Tests for POST /refresh."""

    def test_refresh_rotates_token(self, test_client: TestClient, user_tokens):
        old = user_tokens["refreshToken"]

        response = test_client.post("/refresh", json={"refreshToken": old})

        assert response.status_code == 200
        data = response.json()
        assert data["refreshToken"] != old
        assert data["accessToken"]

        reused = test_client.post("/refresh", json={"refreshToken": old})
        assert reused.status_code == 401
        assert reused.json()["success"] is False

    def test_refresh_with_garbage(self, test_client: TestClient):
        response = test_client.post("/refresh", json={"refreshToken": "garbage"})

        assert response.status_code == 401


class TestLogout:
    """Tests for POST /logout."""

    def test_logout_revokes_refresh_token(self, test_client: TestClient, user_tokens):
        headers = bearer(user_tokens["accessToken"])

        response = test_client.post(
            "/logout",
            headers=headers,
            json={"refreshToken": user_tokens["refreshToken"]},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "logged out"
        refreshed = test_client.post(
            "/refresh",
            json={"refreshToken": user_tokens["refreshToken"]},
        )
        assert refreshed.status_code == 401

    def test_logout_all_sessions(self, test_client: TestClient, user_tokens):
        second = login(test_client).json()

        response = test_client.post(
            "/logout",
            headers=bearer(user_tokens["accessToken"]),
            json={"allSessions": True},
        )

        assert response.status_code == 200
        for tokens in (user_tokens, second):
            refreshed = test_client.post(
                "/refresh",
                json={"refreshToken": tokens["refreshToken"]},
            )
            assert refreshed.status_code == 401

    def test_logout_requires_authentication(self, test_client: TestClient):
        response = test_client.post("/logout")

        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"


class TestBearerTokens:
    """Tests for the identity middleware and /me."""

    def test_me(self, test_client: TestClient, auth_headers):
        response = test_client.get("/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["email"] == TEST_EMAIL

    def test_expired_token(self, test_client: TestClient, api_settings, user_tokens):
        jwt_service = JWTService(api_settings.jwt_secret_key.get_secret_value())
        token = jwt_service.create_access_token(
            TEST_EMAIL,
            user_tokens["user"]["id"],
            expires_delta=timedelta(minutes=-5),
        )

        response = test_client.get("/me", headers=bearer(token))

        assert response.status_code == 401
        data = response.json()
        assert data["errorCode"] == "TOKEN_EXPIRED"
        assert data["path"] == "/me"

    def test_refresh_token_is_not_a_bearer_token(
        self,
        test_client: TestClient,
        user_tokens,
    ):
        response = test_client.get(
            "/me",
            headers=bearer(user_tokens["refreshToken"]),
        )

        assert response.status_code == 401
        assert response.json()["errorCode"] == "TOKEN_INVALID"

    def test_tampered_token_rejected_even_on_public_routes(
        self,
        test_client: TestClient,
    ):
        response = test_client.get("/health", headers=bearer("not.a.jwt"))

        assert response.status_code == 401
        assert response.json()["errorCode"] == "TOKEN_INVALID"

    def test_health_is_public(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "ok"}
