"""API schemas for EDI upload endpoints."""

from typing import Literal

from pydantic import BaseModel

from edi_dashboard.services.edi.ingestion_service import Added, Errored, RecordOutcome
from edi_dashboard.services.edi.upload_service import EdiUploadResult


class RecordOutcomeResponse(BaseModel):
    """What happened to one extracted record."""

    order_number: str
    result: Literal["added", "skipped", "error"]
    order_id: str | None = None
    reason: str | None = None

    @classmethod
    def from_outcome(cls, outcome: RecordOutcome) -> "RecordOutcomeResponse":
        match outcome:
            case Added(order_number=order_number, order_id=order_id):
                return cls(order_number=order_number, result="added", order_id=order_id)
            case Errored(order_number=order_number, reason=reason):
                return cls(order_number=order_number, result="error", reason=reason)
            case _:
                return cls(order_number=outcome.order_number, result="skipped", reason=outcome.reason)


class EdiUploadResponse(BaseModel):
    """Upload summary."""

    filename: str
    encoding: str
    total_rows: int
    extracted_rows: int
    skipped_rows: int
    new_records: int
    skipped_records: int
    error_records: int
    outcomes: list[RecordOutcomeResponse]
    message: str

    @classmethod
    def from_result(cls, result: EdiUploadResult) -> "EdiUploadResponse":
        return cls(
            filename=result.filename,
            encoding=result.encoding,
            total_rows=result.parse.total_rows,
            extracted_rows=result.parse.extracted_rows,
            skipped_rows=result.parse.skipped_rows,
            new_records=result.ingestion.new_records,
            skipped_records=result.ingestion.skipped_records,
            error_records=result.ingestion.error_records,
            outcomes=[RecordOutcomeResponse.from_outcome(o) for o in result.ingestion.outcomes],
            message=result.message,
        )
