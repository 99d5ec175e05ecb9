"""EDI file upload endpoint."""

from typing import Annotated

import structlog
from fastapi import APIRouter, File, HTTPException, UploadFile

from edi_dashboard.api.v1.dependencies import ActivityContextDep, CurrentUserDep, UploadServiceDep
from edi_dashboard.api.v1.edi.schemas import EdiUploadResponse
from edi_dashboard.services.exceptions import ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["edi"])


@router.post("/edi/upload", response_model=EdiUploadResponse, operation_id="uploadEdiFile")
async def upload_edi_file(
    service: UploadServiceDep,
    user: CurrentUserDep,
    context: ActivityContextDep,
    edi_file: Annotated[UploadFile | None, File(description="Vendor EDI export (tab-delimited)")] = None,
) -> EdiUploadResponse:
    """Parse an EDI export and add its new orders.

    Orders whose number already exists are skipped, so re-uploading a file is safe.
    """
    filename: str | None = None
    content = b""
    if edi_file is not None:
        filename = edi_file.filename
        # One byte over the limit is enough to reject the file
        content = await edi_file.read(service.max_size + 1)
        await edi_file.close()

    try:
        result = await service.process_upload(filename, content, uploaded_by=user.user_id, context=context)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e) or "Invalid EDI file")
    except Exception:
        logger.exception("EDI upload processing failed", filename=filename)
        raise HTTPException(status_code=500, detail="Upload processing failed")

    return EdiUploadResponse.from_result(result)
