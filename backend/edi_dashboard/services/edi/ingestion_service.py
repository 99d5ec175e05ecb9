"""Order ingestion: deduplicate parsed EDI records and insert them atomically."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from edi_dashboard.models.enums import EdiOrderStatus
from edi_dashboard.models.order import EdiOrder
from edi_dashboard.services.edi.parser import EdiOrderRecord

logger = structlog.get_logger(__name__)

ALREADY_EXISTS = "already exists"


@dataclass(frozen=True)
class Added:
    """Record inserted as a new order."""

    order_number: str
    order_id: str


@dataclass(frozen=True)
class Skipped:
    """Record matched an existing order and was left alone."""

    order_number: str
    reason: str = ALREADY_EXISTS


@dataclass(frozen=True)
class Errored:
    """Insert was rejected by the database (e.g. a concurrent upload won the race)."""

    order_number: str
    reason: str


RecordOutcome = Added | Skipped | Errored


@dataclass
class IngestionSummary:
    """Per-record outcomes of one upload, in input order."""

    outcomes: list[RecordOutcome] = field(default_factory=list)

    @property
    def new_records(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Added))

    @property
    def skipped_records(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Skipped))

    @property
    def error_records(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Errored))


class EdiIngestionService:
    """Inserts parsed EDI records as orders.

    The whole upload runs in one transaction. Each insert gets its own
    savepoint, so a unique-constraint violation only affects that record; any
    other failure rolls back every insert of the upload and propagates.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def ingest(self, records: Sequence[EdiOrderRecord], *, uploaded_by: int | None = None) -> IngestionSummary:
        """Ingest records in order. Re-ingesting the same records adds nothing."""
        summary = IngestionSummary()
        try:
            for record in records:
                summary.outcomes.append(await self._ingest_record(record, uploaded_by))
            await self.session.commit()
        except BaseException:
            await self.session.rollback()
            logger.error("EDI ingestion rolled back", processed=len(summary.outcomes), total=len(records))
            raise

        logger.info(
            "EDI ingestion complete",
            new=summary.new_records,
            skipped=summary.skipped_records,
            errors=summary.error_records,
        )
        return summary

    async def _exists(self, order_number: str) -> bool:
        # Sees orders flushed earlier in this same upload too
        result = await self.session.execute(select(EdiOrder.id).where(EdiOrder.order_number == order_number))
        return result.scalar_one_or_none() is not None

    async def _ingest_record(self, record: EdiOrderRecord, uploaded_by: int | None) -> RecordOutcome:
        if await self._exists(record.order_number):
            logger.debug("Order already exists, skipping", order_number=record.order_number)
            return Skipped(order_number=record.order_number)

        order = EdiOrder(
            order_number=record.order_number,
            product_code=record.product_code,
            product_name=record.product_name,
            product_spec=record.product_spec,
            order_quantity=record.order_quantity,
            delivery_date=record.delivery_date,
            status=EdiOrderStatus.DEFAULT,
            uploaded_by=uploaded_by,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(order)
        except IntegrityError as e:
            reason = str(e.orig) if e.orig is not None else str(e)
            logger.warning("Order insert rejected", order_number=record.order_number, error=reason)
            return Errored(order_number=record.order_number, reason=reason)

        logger.debug("Added order", order_number=record.order_number, product_code=record.product_code)
        return Added(order_number=record.order_number, order_id=order.id)
