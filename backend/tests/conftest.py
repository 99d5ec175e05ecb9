"""Shared fixtures: a throwaway SQLite database per test and an API client on top of it."""

from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from edi_dashboard.api.v1.dependencies import CurrentUser, get_optional_user
from edi_dashboard.db import Database
from edi_dashboard.main import create_app
from edi_dashboard.models.enums import UserRole
from edi_dashboard.models.user import User
from edi_dashboard.services.activity.activity_service import ActivityContext, ActivityLogService
from edi_dashboard.services.auth.auth_service import AuthService


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'edi.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


@pytest.fixture
def activity(database: Database) -> ActivityLogService:
    return ActivityLogService(database.session_maker)


@pytest.fixture
def activity_context() -> ActivityContext:
    return ActivityContext(session_id="01JTESTSESSION0000000000000", user_agent="pytest", ip_address="127.0.0.1")


async def _create_user(database: Database, username: str, password: str, role: UserRole) -> User:
    async with database.session() as session:
        return await AuthService(session).create_user(username, password, role=role)


@pytest.fixture
async def admin_user(database: Database) -> User:
    return await _create_user(database, "manager", "manager-pass", UserRole.ADMIN)


@pytest.fixture
async def regular_user(database: Database) -> User:
    return await _create_user(database, "operator", "operator-pass", UserRole.USER)


@pytest.fixture
def app(database: Database) -> FastAPI:
    return create_app(database=database)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture
def login_as(app: FastAPI) -> Callable[[User], CurrentUser]:
    """Authenticate every request as the given user, bypassing the session cookie."""

    def _login_as(user: User) -> CurrentUser:
        current = CurrentUser(
            user_id=user.id,
            username=user.username,
            role=user.role,
            session_id=f"test-session-{user.username}",
        )
        app.dependency_overrides[get_optional_user] = lambda: current
        return current

    return _login_as


@pytest.fixture
async def user_client(client: AsyncClient, login_as: Callable[[User], CurrentUser], regular_user: User) -> AsyncClient:
    login_as(regular_user)
    return client


@pytest.fixture
async def admin_client(client: AsyncClient, login_as: Callable[[User], CurrentUser], admin_user: User) -> AsyncClient:
    login_as(admin_user)
    return client
