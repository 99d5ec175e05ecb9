"""FastAPI application entry point."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from edi_dashboard.api import v1
from edi_dashboard.config import settings
from edi_dashboard.db import Database
from edi_dashboard.logging import bind_request_context, setup_logging
from edi_dashboard.utils.request_helpers import get_client_ip

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application.

    A database passed in is used as-is and left open on shutdown (tests, CLI);
    otherwise one is created from settings for the app's lifetime.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan handler for startup/shutdown events."""
        # Startup
        logger.info("Starting EDI Dashboard API", debug=settings.debug)
        owned = database is None
        app.state.database = database or Database.from_settings()

        yield

        # Shutdown
        logger.info("Shutting down EDI Dashboard API")
        if owned:
            await app.state.database.dispose()
            logger.info("Database connections disposed")

    app = FastAPI(
        title="EDI Dashboard API",
        description="Order dashboard fed by vendor EDI exports",
        version="0.1.0",
        lifespan=lifespan,
    )
    if database is not None:
        # Available even when the lifespan is not run (e.g. ASGITransport in tests)
        app.state.database = database

    @app.middleware("http")
    async def log_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        bind_request_context(request.method, request.url.path, get_client_ip(request))
        return await call_next(request)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Signed-cookie sessions
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age,
        https_only=settings.session_https_only,
    )

    # API routes
    app.include_router(v1.router, prefix="/api/v1")

    return app


app = create_app()
