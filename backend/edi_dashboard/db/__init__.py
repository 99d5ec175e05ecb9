"""Database package with engine ownership and session management."""

from edi_dashboard.db.session import Database, get_database, get_session

__all__ = [
    "Database",
    "get_database",
    "get_session",
]
