"""Database layer for ledgernotes application."""

from ledgernotes.database.base import Database
from ledgernotes.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
