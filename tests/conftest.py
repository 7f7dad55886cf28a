"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.config import Settings
from core.security import PasswordHasher
from core.tokens import TokenService
from models.base import Base


TEST_JWT_SECRET = "test-signing-secret"


@pytest.fixture(scope="session")
def database_url() -> Generator[str]:
    """
    Database URL for the test session.

    SQLite in memory by default. Set TEST_POSTGRES=1 to run the suite against
    a disposable PostgreSQL container instead.
    """
    if os.environ.get("TEST_POSTGRES"):
        from testcontainers.postgres import PostgresContainer  # noqa: PLC0415

        with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
            yield postgres.get_connection_url()
        return
    yield "sqlite+aiosqlite://"


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """
    Create an async engine with a fresh schema for each test.

    Tables are dropped afterwards so tests don't affect each other.
    """
    if database_url.startswith("sqlite"):
        # One shared connection, otherwise each connection gets its own empty database
        engine = create_async_engine(database_url, echo=False, poolclass=StaticPool)
    else:
        engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session for the test's database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def settings(database_url: str) -> Settings:
    """Settings for the app under test (low bcrypt cost keeps the suite fast)."""
    return Settings(
        _env_file=None,
        database_url=database_url,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def token_service(settings: Settings) -> TokenService:
    """Token service sharing the app's signing secret."""
    return TokenService.from_settings(settings)


@pytest.fixture
def password_hasher(settings: Settings) -> PasswordHasher:
    """Password hasher with the test work factor."""
    return PasswordHasher(rounds=settings.bcrypt_rounds)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Application built from the test settings."""
    from api.main import create_app  # noqa: PLC0415

    return create_app(settings)


@pytest.fixture
async def client(
    app: FastAPI,
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session override."""
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
