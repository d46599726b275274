"""Request helpers shared by API tests."""

from fastapi.testclient import TestClient

from tests.shared.fixtures.factories import TEST_EMAIL, TEST_PASSWORD


def signup(
    client: TestClient,
    email: str = TEST_EMAIL,
    name: str = "Kim",
    password: str = TEST_PASSWORD,
):
    return client.post(
        "/signup",
        json={"email": email, "password": password, "name": name},
    )


def login(client: TestClient, email: str = TEST_EMAIL, password: str = TEST_PASSWORD):
    return client.post("/login", json={"email": email, "password": password})


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
