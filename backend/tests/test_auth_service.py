"""Tests for login and user creation."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from edi_dashboard.config import settings
from edi_dashboard.models.enums import UserRole
from edi_dashboard.services.auth.auth_service import AuthService, hash_password, verify_password
from edi_dashboard.services.auth.exceptions import InvalidCredentials
from edi_dashboard.services.exceptions import ValidationError


def test_password_hashing() -> None:
    password_hash = hash_password("s3cret")

    assert password_hash != "s3cret"
    assert verify_password("s3cret", password_hash)
    assert not verify_password("wrong", password_hash)


async def test_authenticate_user_row(session: AsyncSession) -> None:
    service = AuthService(session)
    user = await service.create_user("operator", "operator-pass", email="op@example.com")
    assert user.last_login is None

    authenticated = await service.authenticate("operator", "operator-pass")

    assert authenticated.user_id == user.id
    assert authenticated.role == UserRole.USER
    await session.refresh(user)
    assert user.last_login is not None


async def test_wrong_password(session: AsyncSession) -> None:
    service = AuthService(session)
    await service.create_user("operator", "operator-pass")

    with pytest.raises(InvalidCredentials):
        await service.authenticate("operator", "nope")


async def test_inactive_user_cannot_log_in(session: AsyncSession) -> None:
    service = AuthService(session)
    user = await service.create_user("former", "former-pass")
    user.is_active = False
    await session.commit()

    with pytest.raises(InvalidCredentials):
        await service.authenticate("former", "former-pass")


async def test_bootstrap_admin(session: AsyncSession) -> None:
    authenticated = await AuthService(session).authenticate("admin", settings.admin_password)

    assert authenticated.username == "admin"
    assert authenticated.role == UserRole.ADMIN
    assert authenticated.user_id is None


async def test_bootstrap_password_only_works_for_admin(session: AsyncSession) -> None:
    with pytest.raises(InvalidCredentials):
        await AuthService(session).authenticate("someone", settings.admin_password)


async def test_bootstrap_admin_disabled_without_password(
    session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "admin_password", "")

    with pytest.raises(InvalidCredentials):
        await AuthService(session).authenticate("admin", "")


async def test_duplicate_username(session: AsyncSession) -> None:
    service = AuthService(session)
    await service.create_user("operator", "a")

    with pytest.raises(ValidationError, match="already exists"):
        await service.create_user("operator", "b")


async def test_blank_username(session: AsyncSession) -> None:
    with pytest.raises(ValidationError):
        await AuthService(session).create_user("  ", "pw")
