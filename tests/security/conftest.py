"""
Security test fixtures.

Two users, each with a bookmark, so tests can check that one user cannot
reach the other's data through direct IDs.
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import PasswordHasher
from core.tokens import TokenService
from models.bookmark import Bookmark
from models.user import User


async def make_user(db_session: AsyncSession, hasher: PasswordHasher, email: str) -> User:
    user = User(email=email, password_hash=hasher.hash("secret"))
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_a(db_session: AsyncSession, password_hasher: PasswordHasher) -> User:
    """Create the first test user (User A)."""
    return await make_user(db_session, password_hasher, "user-a@example.com")


@pytest.fixture
async def user_b(db_session: AsyncSession, password_hasher: PasswordHasher) -> User:
    """Create a second test user (User B) for IDOR testing."""
    return await make_user(db_session, password_hasher, "user-b@example.com")


@pytest.fixture
def user_a_headers(user_a: User, token_service: TokenService) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.issue(user_a.id, user_a.email)}"}


@pytest.fixture
def user_b_headers(user_b: User, token_service: TokenService) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.issue(user_b.id, user_b.email)}"}


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    bookmark = Bookmark(
        user_id=user_a.id,
        title="User A's Private Bookmark",
        description="This should only be accessible to User A",
        link="https://user-a-bookmark.example.com/",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    bookmark = Bookmark(
        user_id=user_b.id,
        title="User B's Private Bookmark",
        link="https://user-b-bookmark.example.com/",
    )
    db_session.add(bookmark)
    await db_session.flush()
    await db_session.refresh(bookmark)
    return bookmark
