"""Shared exceptions for service layer operations."""


class ConfigurationError(Exception):
    """Raised at startup when the application cannot be configured (e.g. no signing secret)."""


class UnauthenticatedError(Exception):
    """
    Raised when a request does not carry a usable identity.

    Covers a missing or malformed Authorization header, a bad signature, an
    expired token, and a token whose subject no longer exists. The reason is
    kept for server-side logging only; clients always get the same 401.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class InvalidCredentialsError(Exception):
    """Raised when signin fails, whether the email is unknown or the password is wrong."""

    def __init__(self) -> None:
        super().__init__("Credentials incorrect")


class ConflictError(Exception):
    """Raised when a write would violate a uniqueness constraint (e.g. a taken email)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NotFoundError(Exception):
    """Raised when a resource does not exist or is not owned by the caller."""

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} not found")
