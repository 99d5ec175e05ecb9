"""Dashboard login and user management."""

import secrets
from dataclasses import dataclass

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from edi_dashboard.config import settings
from edi_dashboard.models.enums import UserRole
from edi_dashboard.models.user import User
from edi_dashboard.services.auth.exceptions import InvalidCredentials
from edi_dashboard.services.exceptions import ValidationError
from edi_dashboard.utils.datetime_utils import utc_now

logger = structlog.get_logger(__name__)

BOOTSTRAP_ADMIN_USERNAME = "admin"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity stored in the session after a successful login."""

    user_id: int | None
    username: str
    role: UserRole


class AuthService:
    """Checks credentials against the users table with a bootstrap admin fallback."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def authenticate(self, username: str, password: str) -> AuthenticatedUser:
        """Validate credentials and stamp last_login.

        Raises:
            InvalidCredentials: neither a user row nor the bootstrap admin accepted them
        """
        try:
            result = await self.session.execute(
                select(User).where(User.username == username, User.is_active == True)  # noqa: E712
            )
            user = result.scalars().first()

            authenticated: AuthenticatedUser | None = None
            if user is not None and user.password_hash and verify_password(password, user.password_hash):
                authenticated = AuthenticatedUser(user_id=user.id, username=user.username, role=user.role)
            elif self._is_bootstrap_admin(username, password):
                authenticated = AuthenticatedUser(
                    user_id=user.id if user is not None else None,
                    username=BOOTSTRAP_ADMIN_USERNAME,
                    role=UserRole.ADMIN,
                )

            if authenticated is None:
                await self.session.rollback()
                logger.info("Login rejected", username=username)
                raise InvalidCredentials()

            if user is not None:
                user.last_login = utc_now()
            await self.session.commit()
        except InvalidCredentials:
            raise
        except BaseException:
            await self.session.rollback()
            raise

        logger.info("Login accepted", username=authenticated.username, user_id=authenticated.user_id)
        return authenticated

    @staticmethod
    def _is_bootstrap_admin(username: str, password: str) -> bool:
        if username != BOOTSTRAP_ADMIN_USERNAME or not settings.admin_password:
            return False
        return secrets.compare_digest(password.encode(), settings.admin_password.encode())

    async def create_user(
        self,
        username: str,
        password: str,
        *,
        email: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a login account with a bcrypt password hash."""
        username = username.strip()
        if not username:
            raise ValidationError("Username must not be empty")
        if not password:
            raise ValidationError("Password must not be empty")

        user = User(username=username, password_hash=hash_password(password), email=email, role=role)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValidationError(f"User {username!r} already exists") from None

        logger.info("Created user", username=username, role=role)
        return user
