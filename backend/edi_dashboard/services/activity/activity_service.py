"""Activity log: write-only audit sink plus the paginated feed."""

from dataclasses import dataclass

import structlog
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlmodel import select

from edi_dashboard.models.activity import ActivityLog
from edi_dashboard.models.enums import ActivityAction
from edi_dashboard.models.user import User

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActivityContext:
    """Who performed an action and from where."""

    session_id: str
    user_id: int | None = None
    user_agent: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True)
class ActivityEntry:
    """Activity log row joined with the acting user's name."""

    log: ActivityLog
    username: str | None

    @property
    def description(self) -> str:
        try:
            action = ActivityAction(self.log.action)
        except ValueError:
            return self.log.action
        return action.description


class ActivityLogService:
    """Records user actions in the activity_logs table.

    Each record is written in its own short-lived session so it does not
    depend on (or interfere with) the caller's transaction: the audit row for a
    rolled-back upload still lands. A failure to write is logged and swallowed
    so it never masks the primary response.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def record(self, context: ActivityContext, action: ActivityAction, details: str | None = None) -> bool:
        """Append one activity row. Returns False if the write failed."""
        try:
            async with self.session_maker() as session:
                session.add(
                    ActivityLog(
                        session_id=context.session_id,
                        user_id=context.user_id,
                        action=action.value,
                        details=details,
                        user_agent=context.user_agent,
                        ip_address=context.ip_address,
                    )
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to record activity", action=action.value, error=str(e))
            return False

        logger.debug("Activity logged", action=action.value, session_id=context.session_id[:8])
        return True

    async def list_recent(self, *, skip: int = 0, limit: int = 10) -> tuple[list[ActivityEntry], int]:
        """Newest-first activity entries with pagination. Returns (entries, total_count)."""
        async with self.session_maker() as session:
            statement = (
                select(ActivityLog, User.username)
                .join(User, ActivityLog.user_id == User.id, isouter=True)  # type: ignore[arg-type]
                .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())  # type: ignore[attr-defined,union-attr]
                .offset(skip)
                .limit(limit)
            )
            rows = (await session.execute(statement)).all()

            count_result = await session.execute(select(func.count()).select_from(ActivityLog))
            total = count_result.scalar() or 0

        return [ActivityEntry(log=log, username=username) for log, username in rows], total
