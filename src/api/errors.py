"""
Exception handlers.

Maps service-layer exceptions to fixed HTTP statuses. Response bodies carry a
short ``detail`` only; store errors and stack traces stay in the server log.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Return 400 for malformed or missing input, listing the offending fields."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": [
                {
                    "field": ".".join(str(loc) for loc in error["loc"]),
                    "message": error["msg"],
                }
                for error in exc.errors()
            ],
        },
    )


async def unauthenticated_exception_handler(
    _request: Request, _exc: UnauthenticatedError,
) -> JSONResponse:
    """Return the same 401 whatever check failed."""
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": "Not authenticated"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def invalid_credentials_exception_handler(
    _request: Request, exc: InvalidCredentialsError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc)},
    )


async def conflict_exception_handler(
    _request: Request, exc: ConflictError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc)},
    )


async def not_found_exception_handler(
    _request: Request, exc: NotFoundError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


async def unhandled_exception_handler(
    request: Request, _exc: Exception,
) -> JSONResponse:
    """Log anything unexpected and hide it behind a generic 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler above to ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UnauthenticatedError, unauthenticated_exception_handler)
    app.add_exception_handler(InvalidCredentialsError, invalid_credentials_exception_handler)
    app.add_exception_handler(ConflictError, conflict_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
