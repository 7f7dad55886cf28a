"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.errors import register_exception_handlers
from api.routers import auth, bookmarks, health, users
from core.config import Settings, get_settings
from core.logging_config import configure_logging
from core.security import PasswordHasher
from core.tokens import TokenService
from db.session import create_engine_from_settings, create_session_factory


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - release the connection pool on shutdown."""
    logger.info("Bookmarks API started")
    yield
    await app.state.engine.dispose()
    logger.info("Bookmarks API stopped")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its collaborators.

    Everything that needs configuration (token signing, password hashing,
    the database pool) is constructed here, before the first request, so a
    missing signing secret stops the process at startup.

    Raises:
        ConfigurationError: If settings are missing or the signing secret is empty.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Bookmarks API",
        description="Multi-user bookmark management with token authentication.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    engine = create_engine_from_settings(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    register_exception_handlers(app)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(bookmarks.router)
    return app


def run() -> None:
    """Start the API server on the configured host and port."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
