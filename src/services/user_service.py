"""Service layer for the current user's profile."""
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.user import UserUpdate
from services.auth_service import get_user_by_email
from services.exceptions import ConflictError


async def update_user(
    db: AsyncSession,
    user: User,
    data: UserUpdate,
) -> User:
    """
    Apply the supplied fields to ``user`` and return the refreshed row.

    The target is always the authenticated user passed in by the caller;
    nothing in ``data`` can select a different account.

    Raises:
        ConflictError: If the new email belongs to another user.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    update_data = data.model_dump(exclude_unset=True)

    new_email = update_data.get("email")
    if new_email is not None and new_email != user.email:
        existing = await get_user_by_email(db, new_email)
        if existing is not None:
            raise ConflictError("Credentials taken")

    for field, value in update_data.items():
        setattr(user, field, value)

    if update_data:
        user.updated_at = func.now()
    try:
        await db.flush()
    except IntegrityError as e:
        raise ConflictError("Credentials taken") from e
    await db.refresh(user)
    return user
