"""Database layer for bankdedupe."""

from bankdedupe.database.base import Database
from bankdedupe.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
