"""Database module for the short-link service."""
from shortlink.db.base import (
    DatabaseHealthCheck,
    create_tables,
    dispose_engine,
    get_engine,
    get_session,
)
from shortlink.db.session import db_transaction, get_db

__all__ = [
    "DatabaseHealthCheck",
    "create_tables",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_db",
    "db_transaction",
]
