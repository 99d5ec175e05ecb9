"""Database engine and session configuration."""

from collections.abc import AsyncGenerator
from typing import Any

import structlog
from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

# Register all models with SQLAlchemy metadata
import edi_dashboard.models  # noqa: F401
from edi_dashboard.config import settings

logger = structlog.get_logger(__name__)


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy own BEGIN on SQLite so SAVEPOINTs nest inside the outer transaction."""

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


class Database:
    """Owned handle for the engine and session factory.

    Constructed once by the application (see main.create_app) and shared through
    app.state, so tests and the CLI can build their own against any URL.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        statement_timeout_ms: int | None = None,
    ):
        self.url = url
        engine_kwargs: dict[str, Any] = {"echo": echo, "future": True}

        parsed_url = make_url(url)
        if parsed_url.get_backend_name() == "postgresql":
            engine_kwargs.update(
                pool_size=5,
                max_overflow=10,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=300,  # Recycle connections after 5 minutes
            )
            if statement_timeout_ms and parsed_url.get_driver_name() == "asyncpg":
                # Backstop against runaway queries
                engine_kwargs["connect_args"] = {"server_settings": {"statement_timeout": str(statement_timeout_ms)}}

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_savepoints(self.engine)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls) -> "Database":
        """Build the application database from configuration."""
        return cls(
            settings.database_url,
            echo=False,  # SQL logging controlled via structlog configuration
            statement_timeout_ms=settings.database_statement_timeout_ms,
        )

    def session(self) -> AsyncSession:
        """Create a new session. Use as an async context manager."""
        return self.session_maker()

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    async def create_all(self) -> None:
        """Create all tables (development and tests; production uses Alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def ping(self) -> bool:
        """Check the database answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed", error=str(e))
            return False

    async def dispose(self) -> None:
        """Dispose of the engine and release all connections.

        Should be called during application shutdown.
        """
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency that returns the application's Database handle."""
    database: Database = request.app.state.database
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Dependency that provides an async database session."""
    async with get_database(request).session() as session:
        yield session
