"""EDI upload pipeline: validate -> decode -> parse -> ingest -> audit."""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from edi_dashboard.models.enums import ActivityAction
from edi_dashboard.services.activity.activity_service import ActivityContext, ActivityLogService
from edi_dashboard.services.edi.encoding import LEGACY_ENCODING, decode_edi_bytes
from edi_dashboard.services.edi.ingestion_service import EdiIngestionService, IngestionSummary
from edi_dashboard.services.edi.layout import DEFAULT_LAYOUT, DEFAULT_PRODUCT_CATALOG, EdiColumnLayout, ProductCatalog
from edi_dashboard.services.edi.parser import EdiParseResult, parse_edi_text
from edi_dashboard.services.edi.upload_validation import (
    DEFAULT_ALLOWED_EXTENSIONS,
    DEFAULT_MAX_UPLOAD_BYTES,
    validate_edi_upload,
)

logger = structlog.get_logger(__name__)


@dataclass
class EdiUploadResult:
    """Everything the caller needs to report on one upload."""

    filename: str
    encoding: str
    parse: EdiParseResult
    ingestion: IngestionSummary

    @property
    def message(self) -> str:
        return (
            f"Successfully processed {self.parse.extracted_rows} records. "
            f"{self.ingestion.new_records} new orders added, "
            f"{self.ingestion.skipped_records} duplicates skipped, "
            f"{self.ingestion.error_records} errors."
        )


class EdiUploadService:
    """Runs an uploaded EDI file through the ingestion pipeline.

    Parsing happens entirely in memory before the database is touched. The
    outcome (success or failure) is written to the activity log; a failure is
    re-raised after logging.
    """

    def __init__(
        self,
        session: AsyncSession,
        activity: ActivityLogService,
        *,
        encoding: str = LEGACY_ENCODING,
        allowed_extensions: Sequence[str] = DEFAULT_ALLOWED_EXTENSIONS,
        max_size: int = DEFAULT_MAX_UPLOAD_BYTES,
        layout: EdiColumnLayout = DEFAULT_LAYOUT,
        catalog: ProductCatalog = DEFAULT_PRODUCT_CATALOG,
    ):
        self.session = session
        self.activity = activity
        self.encoding = encoding
        self.allowed_extensions = allowed_extensions
        self.max_size = max_size
        self.layout = layout
        self.catalog = catalog

    async def process_upload(
        self,
        filename: str | None,
        content: bytes,
        *,
        uploaded_by: int | None,
        context: ActivityContext,
    ) -> EdiUploadResult:
        log = logger.bind(filename=filename, size=len(content))
        try:
            name = validate_edi_upload(
                filename, content, allowed_extensions=self.allowed_extensions, max_size=self.max_size
            )

            log.info("Processing EDI file")
            decoded = decode_edi_bytes(content, self.encoding)
            parsed = parse_edi_text(decoded.text, self.layout, self.catalog)
            summary = await EdiIngestionService(self.session).ingest(parsed.records, uploaded_by=uploaded_by)
        except Exception as e:
            log.error("EDI upload failed", error=str(e))
            await self.activity.record(
                context,
                ActivityAction.EDI_UPLOAD_FAILED,
                f"File: {filename or 'unknown'}, Error: {e}",
            )
            raise

        result = EdiUploadResult(filename=name, encoding=decoded.encoding, parse=parsed, ingestion=summary)
        await self.activity.record(
            context,
            ActivityAction.EDI_UPLOAD_SUCCESS,
            f"File: {name}, New: {summary.new_records}, Skipped: {summary.skipped_records}, "
            f"Errors: {summary.error_records}",
        )
        log.info(
            "EDI upload complete",
            encoding=decoded.encoding,
            new=summary.new_records,
            skipped=summary.skipped_records,
            errors=summary.error_records,
        )
        return result
