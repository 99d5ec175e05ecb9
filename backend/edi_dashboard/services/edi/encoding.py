"""Decoding of raw EDI upload bytes into text."""

from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

# Windows Shift-JIS, including NEC and IBM vendor extensions
LEGACY_ENCODING = "cp932"
# utf-8-sig also strips a leading BOM if present
FALLBACK_ENCODING = "utf-8-sig"


@dataclass(frozen=True)
class DecodedText:
    """Decoded document and the codec that produced it."""

    text: str
    encoding: str
    used_fallback: bool = False


def decode_edi_bytes(data: bytes, legacy_encoding: str = LEGACY_ENCODING) -> DecodedText:
    """Decode upload bytes, trying the legacy encoding first.

    Only a decode error triggers the fallback; no content heuristics are applied.
    The fallback replaces undecodable bytes, so this never raises.
    """
    try:
        return DecodedText(text=data.decode(legacy_encoding), encoding=legacy_encoding)
    except UnicodeDecodeError as e:
        logger.info(
            "Legacy decode failed, falling back",
            encoding=legacy_encoding,
            fallback=FALLBACK_ENCODING,
            position=e.start,
        )
    return DecodedText(
        text=data.decode(FALLBACK_ENCODING, errors="replace"),
        encoding=FALLBACK_ENCODING,
        used_fallback=True,
    )
