"""
Database module for SQLite persistence with FTS5 full-text search.

Provides connection management, schema definitions, and operations
on the document index.
"""

from .connection import get_connection, get_cursor, configure_database, DatabaseManager
from .schema import init_schema, reset_schema, get_statistics
from .repository import PDFRepository, PDFRecord

__all__ = [
    "get_connection",
    "get_cursor",
    "configure_database",
    "DatabaseManager",
    "init_schema",
    "reset_schema",
    "get_statistics",
    "PDFRepository",
    "PDFRecord"
]
