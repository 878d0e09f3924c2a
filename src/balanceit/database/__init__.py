"""Database layer for balanceit application."""

from balanceit.database.base import Database
from balanceit.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
