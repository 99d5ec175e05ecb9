"""Forecast entries: batch upsert, listing, bulk clear and planning stats."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import structlog
from sqlalchemy import delete, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from edi_dashboard.models.forecast import ForecastEntry
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.services.forecast.exceptions import InvalidForecastBatch
from edi_dashboard.utils.datetime_utils import utc_now

logger = structlog.get_logger(__name__)

_MONTH_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


@dataclass(frozen=True)
class ForecastInput:
    """One submitted forecast cell."""

    drawing_number: str
    month_date: str | None
    quantity: int


@dataclass(frozen=True)
class SkippedForecast:
    entry: ForecastInput
    reason: str


@dataclass
class ForecastBatchResult:
    saved: int = 0
    skipped: list[SkippedForecast] = field(default_factory=list)


@dataclass(frozen=True)
class DeliveryDateCount:
    delivery_date: str
    order_count: int


@dataclass(frozen=True)
class ForecastStats:
    """Forecast totals (non-zero entries) and the span of order delivery dates."""

    product_count: int
    total_entries: int
    total_quantity: int
    avg_quantity: float | None
    unique_delivery_dates: int
    earliest_delivery_date: str | None
    latest_delivery_date: str | None
    dated_orders: int


def parse_month_date(value: str | None) -> date | None:
    """Parse a strict YYYY-MM-DD month date; None if malformed or not a real date."""
    if value is None or not _MONTH_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _has_delivery_date() -> list[Any]:
    return [EdiOrder.delivery_date.is_not(None), EdiOrder.delivery_date != ""]  # type: ignore[union-attr]


class ForecastService:
    """Service for forecast entry operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_forecasts(self) -> list[ForecastEntry]:
        """All forecast entries ordered by drawing number, then month."""
        statement = (
            select(ForecastEntry)
            .order_by(ForecastEntry.drawing_number, ForecastEntry.month_date)
            .execution_options(populate_existing=True)  # upserts bypass the identity map
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def save_batch(self, entries: Sequence[ForecastInput], *, updated_by: int | None) -> ForecastBatchResult:
        """Upsert a batch of forecast entries in one transaction.

        Entries with a malformed month date or an empty drawing number are
        reported as skipped and do not fail the batch. Within one batch the
        last entry for a (drawing_number, month_date) key wins, matching the
        overwrite semantics between batches, and `saved` counts distinct keys.
        """
        result = ForecastBatchResult()
        rows: dict[tuple[str, date], dict[str, Any]] = {}
        now = utc_now()

        for entry in entries:
            drawing_number = entry.drawing_number.strip()
            if not drawing_number:
                result.skipped.append(SkippedForecast(entry, "missing drawing number"))
                continue
            month_date = parse_month_date(entry.month_date)
            if month_date is None:
                logger.warning("Skipping forecast with invalid date", month_date=entry.month_date)
                result.skipped.append(SkippedForecast(entry, "invalid date format"))
                continue
            rows[(drawing_number, month_date)] = {
                "drawing_number": drawing_number,
                "month_date": month_date,
                "quantity": entry.quantity,
                "updated_by": updated_by,
                "updated_at": now,
            }

        result.saved = len(rows)
        if rows:
            try:
                await self.session.execute(self._upsert_statement(list(rows.values())))
                await self.session.commit()
            except BaseException:
                await self.session.rollback()
                raise

        logger.info("Saved forecast batch", saved=result.saved, skipped=len(result.skipped))
        return result

    def _upsert_statement(self, rows: list[dict[str, Any]]) -> Any:
        assert self.session.bind is not None
        dialect = self.session.bind.dialect.name
        try:
            insert = _UPSERT_INSERTS[dialect]
        except KeyError:
            raise InvalidForecastBatch(f"Forecast upsert is not supported on {dialect}") from None

        statement = insert(ForecastEntry).values(rows)
        return statement.on_conflict_do_update(
            index_elements=["drawing_number", "month_date"],
            set_={
                "quantity": statement.excluded.quantity,
                "updated_by": statement.excluded.updated_by,
                "updated_at": statement.excluded.updated_at,
            },
        )

    async def clear_all(self) -> int:
        """Delete every forecast entry. Returns the number removed."""
        result = await self.session.execute(delete(ForecastEntry))
        await self.session.commit()
        removed: int = result.rowcount  # type: ignore[attr-defined]
        logger.info("Cleared forecasts", removed=removed)
        return removed

    async def delivery_dates(self) -> list[DeliveryDateCount]:
        """Distinct non-empty order delivery dates with their order counts."""
        statement = (
            select(EdiOrder.delivery_date, func.count(EdiOrder.id))
            .where(*_has_delivery_date())
            .group_by(EdiOrder.delivery_date)
            .order_by(EdiOrder.delivery_date)
        )
        rows = (await self.session.execute(statement)).all()
        return [DeliveryDateCount(delivery_date=d, order_count=count) for d, count in rows]

    async def get_stats(self) -> ForecastStats:
        forecast_row = (
            await self.session.execute(
                select(
                    func.count(func.distinct(ForecastEntry.drawing_number)),
                    func.count(ForecastEntry.id),
                    func.sum(ForecastEntry.quantity),
                    func.avg(ForecastEntry.quantity),
                ).where(ForecastEntry.quantity > 0)
            )
        ).one()
        order_row = (
            await self.session.execute(
                select(
                    func.count(func.distinct(EdiOrder.delivery_date)),
                    func.min(EdiOrder.delivery_date),
                    func.max(EdiOrder.delivery_date),
                    func.count(EdiOrder.id),
                ).where(*_has_delivery_date())
            )
        ).one()

        return ForecastStats(
            product_count=forecast_row[0] or 0,
            total_entries=forecast_row[1] or 0,
            total_quantity=int(forecast_row[2] or 0),
            avg_quantity=float(forecast_row[3]) if forecast_row[3] is not None else None,
            unique_delivery_dates=order_row[0] or 0,
            earliest_delivery_date=order_row[1],
            latest_delivery_date=order_row[2],
            dated_orders=order_row[3] or 0,
        )
