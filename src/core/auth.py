"""Authentication: resolving the bearer token on a request to a live user."""
import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import PasswordHasher
from core.tokens import TokenService
from db.session import get_async_session
from models.base import MAX_ID
from models.user import User
from services.exceptions import UnauthenticatedError

logger = logging.getLogger(__name__)


def get_token_service(request: Request) -> TokenService:
    """Return the token service composed at startup."""
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    """Return the password hasher composed at startup."""
    return request.app.state.password_hasher


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.

    Raises:
        UnauthenticatedError: If the header is missing or not a bearer credential.
    """
    if not authorization:
        raise UnauthenticatedError("missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthenticatedError("malformed Authorization header")
    return token


async def resolve_identity(
    db: AsyncSession,
    tokens: TokenService,
    authorization: str | None,
) -> User:
    """
    Resolve a raw Authorization header value to the user it was issued for.

    Checks, in order: header shape, token signature and expiry, and that the
    subject still exists. Every failure raises the same exception type so the
    client cannot tell which check failed.

    Raises:
        UnauthenticatedError: If any check fails.
    """
    token = extract_bearer_token(authorization)
    payload = tokens.decode(token)

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise UnauthenticatedError("token subject is not a user id")
    if not 0 < user_id <= MAX_ID:
        raise UnauthenticatedError("token subject is out of range")

    user = await db.get(User, user_id)
    if user is None:
        raise UnauthenticatedError(f"token subject {user_id} does not exist")
    return user


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """Dependency that validates the bearer token and returns the current user."""
    try:
        return await resolve_identity(db, tokens, request.headers.get("Authorization"))
    except UnauthenticatedError as e:
        logger.info("Authentication failed: %s", e.reason)
        raise
