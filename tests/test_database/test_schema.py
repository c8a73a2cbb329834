"""
Tests for database schema management.

Tests schema initialization, FTS synchronization, reset and statistics.

SAFETY NOTE: All tests use the `configured_db` fixture which:
- Creates a temporary directory via tempfile.mkdtemp()
- Configures the database singleton to use a temp path
- Cleans up all temp files after the test
- Never touches real data directories
"""

from pdfshelf.database.schema import init_schema, reset_schema, get_statistics
from pdfshelf.database.connection import get_connection, get_cursor
from pdfshelf.database.repository import PDFRepository


def object_names(kind: str) -> set:
    """Names of schema objects of one kind."""
    with get_connection() as conn:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = ?", (kind,)
        ).fetchall()
    return {row["name"] for row in rows}


def fts_match_count(term: str) -> int:
    """Number of FTS rows matching term."""
    with get_connection() as conn:
        row = conn.execute(
            "SELECT COUNT(*) AS count FROM pdfs_fts WHERE pdfs_fts MATCH ?", (term,)
        ).fetchone()
    return row["count"]


class TestInitSchema:
    """Tests for schema initialization."""

    def test_creates_tables(self, configured_db):
        """Test that the pdfs and pdfs_fts tables exist."""
        init_schema()

        tables = object_names("table")
        assert "pdfs" in tables
        assert "pdfs_fts" in tables

    def test_creates_indexes_and_triggers(self, configured_db):
        """Test that indexes and sync triggers exist."""
        init_schema()

        assert {"pdfs_sig", "pdfs_path"} <= object_names("index")
        assert object_names("trigger") == {"pdfs_ai", "pdfs_ad", "pdfs_au"}

    def test_init_is_idempotent(self, configured_db):
        """Test that init_schema can run repeatedly."""
        init_schema()
        init_schema()

        assert "pdfs" in object_names("table")


class TestFtsSync:
    """Tests for the triggers keeping pdfs_fts in sync."""

    def test_insert_indexes_text(self, configured_db):
        """Test that inserted text becomes searchable."""
        init_schema()
        PDFRepository().insert("/a.pdf", 1, "sig-a", "turbine blades", "", b"")

        assert fts_match_count("turbine") == 1

    def test_delete_removes_text(self, configured_db):
        """Test that deleted rows leave the index."""
        init_schema()
        repository = PDFRepository()
        doc_id = repository.insert("/a.pdf", 1, "sig-a", "turbine blades", "", b"")

        repository.delete(doc_id)

        assert fts_match_count("turbine") == 0

    def test_update_reindexes_text(self, configured_db):
        """Test that updating text replaces indexed terms."""
        init_schema()
        doc_id = PDFRepository().insert("/a.pdf", 1, "sig-a", "turbine blades", "", b"")

        with get_cursor() as cur:
            cur.execute("UPDATE pdfs SET text = ? WHERE id = ?", ("compressor stage", doc_id))

        assert fts_match_count("turbine") == 0
        assert fts_match_count("compressor") == 1


class TestResetSchema:
    """Tests for schema reset."""

    def test_reset_drops_data(self, configured_db):
        """Test that reset leaves an empty, working schema."""
        init_schema()
        repository = PDFRepository()
        repository.insert("/a.pdf", 1, "sig-a", "turbine", "", b"")

        reset_schema()

        assert repository.count() == 0
        assert fts_match_count("turbine") == 0


class TestStatistics:
    """Tests for get_statistics."""

    def test_empty_database(self, configured_db):
        """Test statistics of an empty index."""
        init_schema()

        stats = get_statistics()

        assert stats["total_documents"] == 0
        assert stats["total_pages"] == 0
        assert stats["documents_with_title"] == 0
        assert stats["oldest_entry"] is None

    def test_counts(self, configured_db):
        """Test document, page and title counts."""
        init_schema()
        repository = PDFRepository()
        repository.insert("/a.pdf", 3, "sig-a", "one", "A Title", b"")
        repository.insert("/b.pdf", 5, "sig-b", "two", "", b"")

        stats = get_statistics()

        assert stats["total_documents"] == 2
        assert stats["total_pages"] == 8
        assert stats["documents_with_title"] == 1
        assert stats["newest_entry"] is not None
