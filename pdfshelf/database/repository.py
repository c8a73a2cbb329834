"""
Repository for operations on the pdfs table.

Provides a clean interface for inserting, querying, and deleting
indexed PDF documents.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ..core import get_logger
from .connection import get_connection, get_cursor

logger = get_logger(__name__)


@dataclass
class PDFRecord:
    """Represents one indexed document, without its text and cover."""
    id: int
    path: str
    pages: int
    sig: str
    title: str
    added_at: str


class PDFRepository:
    """
    Repository for document storage.

    Provides methods for inserting, looking up, listing and deleting
    indexed documents.
    """

    def insert(
        self,
        path: Union[str, Path],
        pages: int,
        sig: str,
        text: Optional[str],
        title: str,
        cover: Optional[bytes]
    ) -> int:
        """
        Insert a document.

        Args:
            path: Path of the PDF file.
            pages: Number of pages.
            sig: SHA-256 signature of the file content.
            text: Extracted full text, None when not stored.
            title: Inferred title, "" when unknown.
            cover: Single-page PDF of the first page.

        Returns:
            Inserted row ID.
        """
        added_at = datetime.now().isoformat(timespec="seconds")

        with get_cursor() as cur:
            cur.execute("""
                INSERT INTO pdfs (path, pages, sig, text, title, cover, added_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (str(path), pages, sig, text, title, cover, added_at))

            return cur.lastrowid

    def exists_signature(self, sig: str) -> bool:
        """
        Check if a document with this content is already indexed.

        Args:
            sig: SHA-256 signature to look up.

        Returns:
            True if a document with the signature exists.
        """
        with get_connection() as conn:
            row = conn.execute(
                "SELECT EXISTS (SELECT 1 FROM pdfs WHERE sig = ?) AS found",
                (sig,)
            ).fetchone()
            return bool(row["found"])

    def get_by_id(self, doc_id: int) -> Optional[PDFRecord]:
        """
        Fetch a document by its ID.

        Args:
            doc_id: Document row ID.

        Returns:
            PDFRecord or None.
        """
        with get_connection() as conn:
            row = conn.execute(
                "SELECT id, path, pages, sig, title, added_at FROM pdfs WHERE id = ?",
                (doc_id,)
            ).fetchone()

            if row:
                return self._row_to_record(row)
            return None

    def get_cover(self, doc_id: int) -> Optional[bytes]:
        """
        Fetch the stored cover of a document.

        Args:
            doc_id: Document row ID.

        Returns:
            Cover PDF bytes, or None if the document does not exist.
        """
        with get_connection() as conn:
            row = conn.execute(
                "SELECT cover FROM pdfs WHERE id = ?",
                (doc_id,)
            ).fetchone()

            if row is None:
                return None
            return bytes(row["cover"] or b"")

    def list_like(self, pattern: str) -> List[PDFRecord]:
        """
        List documents whose path matches an SQL LIKE pattern.

        Args:
            pattern: LIKE expression, e.g. "%/papers/%".

        Returns:
            Matching records ordered by ID.
        """
        with get_connection() as conn:
            rows = conn.execute(
                "SELECT id, path, pages, sig, title, added_at FROM pdfs "
                "WHERE path LIKE ? ORDER BY id",
                (pattern,)
            ).fetchall()

            return [self._row_to_record(row) for row in rows]

    def delete(self, doc_id: int) -> int:
        """
        Delete a document.

        Args:
            doc_id: Document row ID.

        Returns:
            Number of rows deleted.
        """
        with get_cursor() as cur:
            cur.execute("DELETE FROM pdfs WHERE id = ?", (doc_id,))
            deleted = cur.rowcount

        if deleted > 0:
            logger.debug(f"Deleted document {doc_id}")

        return deleted

    def count(self) -> int:
        """
        Get total document count.

        Returns:
            Number of indexed documents.
        """
        with get_connection() as conn:
            row = conn.execute("SELECT COUNT(*) AS count FROM pdfs").fetchone()
            return row["count"]

    @staticmethod
    def _row_to_record(row) -> PDFRecord:
        """Convert a database row to a PDFRecord."""
        return PDFRecord(
            id=row["id"],
            path=row["path"],
            pages=row["pages"],
            sig=row["sig"],
            title=row["title"] or "",
            added_at=row["added_at"]
        )
