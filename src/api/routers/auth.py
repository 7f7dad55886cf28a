"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_password_hasher, get_token_service
from core.security import PasswordHasher
from core.tokens import TokenService
from schemas.auth import AuthRequest, TokenResponse
from services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Create an account. Returns 409 if the email is already registered."""
    access_token = await auth_service.signup(db, hasher, tokens, data)
    return TokenResponse(access_token=access_token)


@router.post("/signin", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def signin(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """
    Exchange email and password for a bearer token.

    Unknown email and wrong password both return 403 with the same body.
    """
    access_token = await auth_service.signin(db, hasher, tokens, data)
    return TokenResponse(access_token=access_token)
