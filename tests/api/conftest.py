"""Shared fixtures and helpers for API tests."""
import pytest
from httpx import AsyncClient


USER_EMAIL = "debo@example.com"
USER_PASSWORD = "secret"


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


async def signup(client: AsyncClient, email: str, password: str = USER_PASSWORD) -> str:
    """Sign up a user through the API and return their access token."""
    response = await client.post("/auth/signup", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["access_token"]


@pytest.fixture
async def user_token(client: AsyncClient) -> str:
    """Access token for a freshly signed-up user."""
    return await signup(client, USER_EMAIL)


@pytest.fixture
def auth_headers(user_token: str) -> dict[str, str]:
    """Authorization headers for the signed-up user."""
    return bearer(user_token)


# Constant for non-existent entity ID
MISSING_ID = 999_999
