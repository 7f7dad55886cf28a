"""
Authentication enforcement tests.

Every way a bearer token can be unusable must produce the same 401 response,
so a client cannot learn which check failed.
"""
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from httpx import AsyncClient

from core.tokens import TokenService
from models.user import User
from tests.conftest import TEST_JWT_SECRET


UNAUTHENTICATED = {"detail": "Not authenticated"}


async def assert_rejected(client: AsyncClient, headers: dict[str, str]) -> None:
    response = await client.get("/users/me", headers=headers)
    assert response.status_code == 401
    assert response.json() == UNAUTHENTICATED
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.parametrize(
    "authorization",
    [
        "",
        "Bearer",
        "Bearer ",
        "Basic dXNlcjpwYXNz",
        "Token abc",
        "Bearer not-a-jwt",
        "Bearer a.b.c",
    ],
    ids=["empty", "scheme-only", "scheme-space", "basic", "other-scheme", "garbage", "bad-segments"],
)
async def test_malformed_authorization_header_returns_401(
    client: AsyncClient,
    authorization: str,
) -> None:
    await assert_rejected(client, {"Authorization": authorization})


async def test_expired_token_returns_401(
    client: AsyncClient,
    user_a: User,
    token_service: TokenService,
) -> None:
    issued = datetime.now(UTC) - timedelta(hours=1)
    token = token_service.issue(user_a.id, user_a.email, now=issued)

    await assert_rejected(client, {"Authorization": f"Bearer {token}"})


async def test_token_signed_with_other_secret_returns_401(
    client: AsyncClient,
    user_a: User,
) -> None:
    forged = TokenService("some-other-secret").issue(user_a.id, user_a.email)

    await assert_rejected(client, {"Authorization": f"Bearer {forged}"})


async def test_tampered_token_returns_401(
    client: AsyncClient,
    user_a: User,
    token_service: TokenService,
) -> None:
    header, payload, signature = token_service.issue(user_a.id, user_a.email).split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    await assert_rejected(client, {"Authorization": f"Bearer {tampered}"})


async def test_token_for_unknown_user_returns_401(
    client: AsyncClient,
    token_service: TokenService,
) -> None:
    token = token_service.issue(424242, "ghost@example.com")

    await assert_rejected(client, {"Authorization": f"Bearer {token}"})


async def test_token_with_non_numeric_subject_returns_401(client: AsyncClient) -> None:
    token = jwt.encode(
        {"sub": "admin", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        TEST_JWT_SECRET,
        algorithm="HS256",
    )

    await assert_rejected(client, {"Authorization": f"Bearer {token}"})


async def test_token_without_expiry_returns_401(
    client: AsyncClient,
    user_a: User,
) -> None:
    token = jwt.encode({"sub": str(user_a.id)}, TEST_JWT_SECRET, algorithm="HS256")

    await assert_rejected(client, {"Authorization": f"Bearer {token}"})


async def test_unsigned_token_returns_401(
    client: AsyncClient,
    user_a: User,
) -> None:
    """Tokens using the ``none`` algorithm are never accepted."""
    token = jwt.encode(
        {"sub": str(user_a.id), "exp": datetime.now(UTC) + timedelta(minutes=5)},
        None,
        algorithm="none",
    )

    await assert_rejected(client, {"Authorization": f"Bearer {token}"})


async def test_valid_token_is_accepted(
    client: AsyncClient,
    user_a: User,
    user_a_headers: dict[str, str],
) -> None:
    response = await client.get("/users/me", headers=user_a_headers)

    assert response.status_code == 200
    assert response.json()["id"] == user_a.id


async def test_lowercase_bearer_scheme_is_accepted(
    client: AsyncClient,
    user_a: User,
    token_service: TokenService,
) -> None:
    token = token_service.issue(user_a.id, user_a.email)

    response = await client.get("/users/me", headers={"Authorization": f"bearer {token}"})

    assert response.status_code == 200


async def test_token_with_out_of_range_subject_returns_401(client: AsyncClient) -> None:
    token = jwt.encode(
        {"sub": str(2**64), "exp": datetime.now(UTC) + timedelta(minutes=5)},
        TEST_JWT_SECRET,
        algorithm="HS256",
    )

    await assert_rejected(client, {"Authorization": f"Bearer {token}"})
