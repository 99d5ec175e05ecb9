"""ULID identifiers and their column type."""

from typing import Any
from uuid import UUID

from sqlalchemy import Uuid
from sqlalchemy.types import TypeDecorator
from ulid import ULID


def new_ulid() -> str:
    """Generate a new ULID string."""
    return str(ULID())


def to_ulid(value: str | ULID) -> ULID:
    """Coerce a ULID or its 26-character text form.

    Raises:
        ValueError: value is not a well-formed ULID
    """
    if isinstance(value, ULID):
        return value
    if isinstance(value, str):
        return ULID.from_str(value)
    raise ValueError(f"Cannot convert {type(value).__name__} to ULID")


class ULIDType(TypeDecorator[str]):
    """Order IDs: ULID text in Python, a native UUID column where the database has one.

    SQLite stores the same 16 bytes as CHAR(32), so ordering by ID still
    follows creation time on both backends.
    """

    impl = Uuid
    cache_ok = True

    def process_bind_param(self, value: str | ULID | None, dialect: Any) -> UUID | None:
        if value is None:
            return None
        return to_ulid(value).to_uuid()

    def process_result_value(self, value: UUID | None, dialect: Any) -> str | None:
        return None if value is None else str(ULID.from_uuid(value))
