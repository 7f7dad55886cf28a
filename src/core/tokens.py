"""Issuing and decoding signed, time-bounded bearer tokens (HS256 JWTs)."""
from datetime import UTC, datetime, timedelta

import jwt

from core.config import Settings
from services.exceptions import ConfigurationError, UnauthenticatedError


class TokenService:
    """
    Signs and verifies session tokens with a server-held secret.

    Tokens are not stored anywhere. A token carries the user id as its ``sub``
    claim plus the email it was issued for, and is valid until ``exp``.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int = 15,
    ) -> None:
        if not secret:
            raise ConfigurationError("No token signing secret configured (set JWT_SECRET)")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Build the token service from application settings."""
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.jwt_expire_minutes,
        )

    def issue(self, user_id: int, email: str, now: datetime | None = None) -> str:
        """Create a signed token for the given user."""
        issued_at = now or datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> dict:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            UnauthenticatedError: If the token is malformed, tampered with,
                expired, or missing required claims.
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthenticatedError("token expired")
        except jwt.PyJWTError as e:
            raise UnauthenticatedError(f"invalid token: {e}")
