"""Integration tests for /api/admin endpoints."""

from fastapi.testclient import TestClient

from tests.shared.fixtures.api_client import login


class TestAdminAccess:
    def test_regular_user_is_denied(self, test_client: TestClient, auth_headers):
        response = test_client.get("/api/admin/users", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Access Denied"

    def test_anonymous_is_unauthorized(self, test_client: TestClient):
        response = test_client.get("/api/admin/users")

        assert response.status_code == 401


class TestAdminUsers:
    def test_list_users(self, test_client: TestClient, auth_headers, admin_headers):
        response = test_client.get("/api/admin/users", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert {u["role"] for u in data["items"]} == {"USER", "ADMIN"}

    def test_suspend_user_ends_their_sessions(
        self,
        test_client: TestClient,
        user_tokens,
        admin_headers,
    ):
        user_id = user_tokens["user"]["id"]

        response = test_client.patch(
            f"/api/admin/users/{user_id}/status",
            headers=admin_headers,
            json={"status": "SUSPENDED"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "SUSPENDED"
        refreshed = test_client.post(
            "/refresh",
            json={"refreshToken": user_tokens["refreshToken"]},
        )
        assert refreshed.status_code == 401
        relogin = login(test_client)
        assert relogin.status_code == 400
        assert relogin.json()["message"] == "account is suspended"

    def test_cannot_change_own_status(self, test_client: TestClient, admin_headers):
        me = test_client.get("/me", headers=admin_headers).json()["data"]

        response = test_client.patch(
            f"/api/admin/users/{me['id']}/status",
            headers=admin_headers,
            json={"status": "SUSPENDED"},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "CANNOT_CHANGE_OWN_STATUS"

    def test_unknown_user(self, test_client: TestClient, admin_headers):
        response = test_client.patch(
            "/api/admin/users/999/status",
            headers=admin_headers,
            json={"status": "ACTIVE"},
        )

        assert response.status_code == 404

    def test_prune_tokens(self, test_client: TestClient, admin_headers):
        response = test_client.post("/api/admin/tokens/prune", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"deleted": 0}
