"""Service layer for signup and signin."""
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import PasswordHasher
from core.tokens import TokenService
from models.user import User
from schemas.auth import AuthRequest
from services.exceptions import ConflictError, InvalidCredentialsError

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by exact (case-sensitive) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def signup(
    db: AsyncSession,
    hasher: PasswordHasher,
    tokens: TokenService,
    data: AuthRequest,
) -> str:
    """
    Create an account and return a token for it.

    Raises:
        ConflictError: If the email is already registered.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if await get_user_by_email(db, data.email) is not None:
        raise ConflictError("Credentials taken")

    password_hash = await asyncio.to_thread(hasher.hash, data.password)
    user = User(email=data.email, password_hash=password_hash)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # Another request registered the same email between the check and the insert
        raise ConflictError("Credentials taken") from e
    await db.refresh(user)

    logger.info("Created user %s", user.id)
    return tokens.issue(user.id, user.email)


async def signin(
    db: AsyncSession,
    hasher: PasswordHasher,
    tokens: TokenService,
    data: AuthRequest,
) -> str:
    """
    Verify credentials and return a fresh token.

    Unknown emails and wrong passwords raise the same error so the response
    does not reveal which accounts exist.

    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong.
    """
    user = await get_user_by_email(db, data.email)
    password_hash = user.password_hash if user is not None else hasher.dummy_hash
    verified = await asyncio.to_thread(hasher.verify, data.password, password_hash)
    if not verified or user is None:
        logger.info("Rejected signin attempt")
        raise InvalidCredentialsError

    return tokens.issue(user.id, user.email)
