"""Database layer for paydesk application."""

from paydesk.database.base import Database
from paydesk.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
