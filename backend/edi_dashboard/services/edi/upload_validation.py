"""EDI upload checks performed before any decoding."""

from collections.abc import Sequence
from pathlib import PurePath

from edi_dashboard.services.edi.exceptions import EdiFileTooLarge, InvalidEdiUpload

DEFAULT_ALLOWED_EXTENSIONS = (".edidat", ".txt", ".dat")
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MB


def is_allowed_edi_filename(filename: str, allowed_extensions: Sequence[str] = DEFAULT_ALLOWED_EXTENSIONS) -> bool:
    """Allow known EDI extensions, or any name that mentions "edi"."""
    name = PurePath(filename).name.lower()
    if PurePath(name).suffix in allowed_extensions:
        return True
    return "edi" in name


def validate_edi_upload(
    filename: str | None,
    content: bytes,
    *,
    allowed_extensions: Sequence[str] = DEFAULT_ALLOWED_EXTENSIONS,
    max_size: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> str:
    """Validate an uploaded EDI file and return its filename.

    Raises:
        InvalidEdiUpload: Missing filename, disallowed extension or empty file
        EdiFileTooLarge: File exceeds max_size
    """
    if not filename:
        raise InvalidEdiUpload("No file uploaded")

    if not is_allowed_edi_filename(filename, allowed_extensions):
        allowed = ", ".join(allowed_extensions)
        raise InvalidEdiUpload(f"Invalid file type. Only {allowed} files are allowed")

    if len(content) > max_size:
        raise EdiFileTooLarge(len(content), max_size)

    if not content:
        raise InvalidEdiUpload("File is empty")

    return filename
