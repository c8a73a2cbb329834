"""
Database schema definitions for pdfshelf.

Defines the pdfs table, the FTS5 external-content table over the
document text, and the triggers keeping both in sync.
"""

import sqlite3

from ..core import get_config, get_logger, DatabaseError
from .connection import get_cursor, get_connection

logger = get_logger(__name__)


PDFS_TABLE = """
CREATE TABLE IF NOT EXISTS pdfs (
    id INTEGER PRIMARY KEY,
    path TEXT NOT NULL,
    pages INTEGER,
    sig TEXT NOT NULL,
    text TEXT,
    title TEXT,
    cover BLOB,
    added_at TEXT
)
"""

PDFS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS pdfs_sig ON pdfs(sig)",
    "CREATE INDEX IF NOT EXISTS pdfs_path ON pdfs(path)"
]


def _get_fts_table_sql() -> str:
    """Generate FTS5 table creation SQL with configured tokenizer."""
    tokenizer = get_config().search.tokenizer

    return f"""
    CREATE VIRTUAL TABLE IF NOT EXISTS pdfs_fts USING fts5(
        text,
        content='pdfs',
        content_rowid='id',
        tokenize='{tokenizer}'
    )
    """


FTS_TRIGGERS = [
    """
    CREATE TRIGGER IF NOT EXISTS pdfs_ai AFTER INSERT ON pdfs BEGIN
        INSERT INTO pdfs_fts(rowid, text) VALUES (new.id, new.text);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS pdfs_ad AFTER DELETE ON pdfs BEGIN
        INSERT INTO pdfs_fts(pdfs_fts, rowid, text)
        VALUES ('delete', old.id, old.text);
    END
    """,
    """
    CREATE TRIGGER IF NOT EXISTS pdfs_au AFTER UPDATE OF text ON pdfs BEGIN
        INSERT INTO pdfs_fts(pdfs_fts, rowid, text)
        VALUES ('delete', old.id, old.text);
        INSERT INTO pdfs_fts(rowid, text) VALUES (new.id, new.text);
    END
    """
]


def init_schema() -> None:
    """
    Initialize database schema if not exists.

    Creates the pdfs table, its indexes, the FTS5 virtual table and
    the synchronization triggers.
    """
    logger.debug("Initializing database schema")

    with get_cursor() as cur:
        cur.execute(PDFS_TABLE)

        for index_sql in PDFS_INDEXES:
            cur.execute(index_sql)

        try:
            cur.execute(_get_fts_table_sql())
        except sqlite3.OperationalError as e:
            if "already exists" not in str(e):
                raise DatabaseError(f"Failed to create FTS table: {e}")

        for trigger_sql in FTS_TRIGGERS:
            try:
                cur.execute(trigger_sql)
            except sqlite3.OperationalError as e:
                if "already exists" not in str(e):
                    raise DatabaseError(f"Failed to create trigger: {e}")

    logger.debug("Schema initialization complete")


def reset_schema() -> None:
    """
    Drop and recreate all tables.

    Warning: This deletes all indexed data.
    """
    logger.warning("Resetting database schema - all data will be deleted")

    with get_cursor() as cur:
        cur.execute("DROP TRIGGER IF EXISTS pdfs_ai")
        cur.execute("DROP TRIGGER IF EXISTS pdfs_ad")
        cur.execute("DROP TRIGGER IF EXISTS pdfs_au")
        cur.execute("DROP TABLE IF EXISTS pdfs_fts")
        cur.execute("DROP TABLE IF EXISTS pdfs")

    init_schema()

    logger.info("Schema reset complete")


def get_statistics() -> dict:
    """
    Get database statistics.

    Returns:
        Dictionary with document, page and title counts.
    """
    with get_connection() as conn:
        stats = {}

        row = conn.execute("SELECT COUNT(*) AS count FROM pdfs").fetchone()
        stats["total_documents"] = row["count"]

        row = conn.execute("SELECT SUM(pages) AS total FROM pdfs").fetchone()
        stats["total_pages"] = row["total"] or 0

        row = conn.execute(
            "SELECT COUNT(*) AS count FROM pdfs WHERE title IS NOT NULL AND title != ''"
        ).fetchone()
        stats["documents_with_title"] = row["count"]

        row = conn.execute(
            "SELECT MIN(added_at) AS oldest, MAX(added_at) AS newest FROM pdfs"
        ).fetchone()
        stats["oldest_entry"] = row["oldest"]
        stats["newest_entry"] = row["newest"]

    return stats
