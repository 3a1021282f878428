"""Database layer for churchbook application."""

from churchbook.database.base import Database
from churchbook.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
