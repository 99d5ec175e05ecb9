"""EDI upload and parsing exceptions."""

from edi_dashboard.services.exceptions import ValidationError


class InvalidEdiUpload(ValidationError):
    """Uploaded file was rejected before parsing (name, size, emptiness)."""

    pass


class EdiFileTooLarge(InvalidEdiUpload):
    """Uploaded file exceeds the size limit."""

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(f"File too large: {size} bytes (maximum is {max_size // (1024 * 1024)} MB)")


class EdiFormatError(ValidationError):
    """Decoded document does not match the expected column layout."""

    pass
