"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from paydesk.database.sqlalchemy_db import DEFAULT_INVOICE_PREFIX, SQLAlchemyDatabase


def create_sqlite_database(
    database_path: Optional[str] = None, invoice_prefix: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks PAYDESK_DB_PATH
            environment variable, then defaults to ~/.paydesk/paydesk.db
        invoice_prefix: Invoice number prefix. If None, checks PAYDESK_INVOICE_PREFIX
            environment variable, then defaults to "INV-"

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("PAYDESK_DB_PATH")

    if database_path is None:
        # Default to ~/.paydesk/paydesk.db
        db_dir = Path.home() / ".paydesk"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "paydesk.db")

    if invoice_prefix is None:
        invoice_prefix = os.environ.get("PAYDESK_INVOICE_PREFIX", DEFAULT_INVOICE_PREFIX)

    return SQLAlchemyDatabase(f"sqlite:///{database_path}", invoice_prefix=invoice_prefix)
