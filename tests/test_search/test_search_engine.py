"""
Tests for the FTS5 search engine.

Tests search execution, ranking, snippets and error handling.

SAFETY NOTE: All tests use the `configured_db` fixture which:
- Creates a temporary directory via tempfile.mkdtemp()
- Configures the database singleton to use a temp path
- Cleans up all temp files after the test
- Never touches real data directories
"""

import pytest

from pdfshelf.core.exceptions import SearchError
from pdfshelf.database.schema import init_schema
from pdfshelf.database.repository import PDFRepository
from pdfshelf.search.models import MATCH_START, MATCH_END
from pdfshelf.search.search_engine import SearchEngine


@pytest.fixture
def populated_database(configured_db):
    """Create a database with test documents in temp DB."""
    init_schema()
    repo = PDFRepository()

    test_docs = [
        ("/docs/turbines.pdf", "Turbine Design", "Gas turbine blades and turbine cooling"),
        ("/docs/aviation.pdf", "Civil Aviation", "Civil aviation rules and aviation safety"),
        ("/docs/maritime.pdf", "", "Maritime safety and navigation"),
        ("/docs/engines.pdf", "Engines", "Jet engines use a turbine stage"),
    ]

    for i, (path, title, text) in enumerate(test_docs):
        repo.insert(path=path, pages=i + 1, sig=f"sig{i}", text=text, title=title, cover=b"")

    return repo


class TestSearchEngine:
    """Tests for SearchEngine class."""

    def test_limits_from_config(self, configured_db):
        """Test that defaults come from config."""
        engine = SearchEngine()

        assert engine.default_limit == 20
        assert engine.snippet_tokens == 8

    def test_search_returns_results(self, populated_database):
        """Test that matching documents are returned."""
        results = SearchEngine().search("turbine")

        assert {r.path for r in results} == {"/docs/turbines.pdf", "/docs/engines.pdf"}

    def test_results_ranked(self, populated_database):
        """Test that the denser match ranks first."""
        results = SearchEngine().search("turbine")

        assert results[0].path == "/docs/turbines.pdf"
        assert results[0].score <= results[1].score

    def test_result_fields(self, populated_database):
        """Test that results carry id, title, pages and snippet."""
        result = SearchEngine().search("navigation")[0]

        assert result.id == 3
        assert result.title == ""
        assert result.pages == 3
        assert f"{MATCH_START}navigation{MATCH_END}" in result.snippet

    def test_limit(self, populated_database):
        """Test that limit caps the number of results."""
        assert len(SearchEngine().search("safety", limit=1)) == 1

    def test_fts_syntax(self, populated_database):
        """Test that raw FTS5 operators are accepted."""
        assert len(SearchEngine().search("safety NOT maritime")) == 1
        assert len(SearchEngine().search('"civil aviation"')) == 1
        assert len(SearchEngine().search("avia*")) == 1
        assert len(SearchEngine().search("maritime OR engines")) == 2

    def test_no_match(self, populated_database):
        """Test that an unmatched query gives no results."""
        assert SearchEngine().search("submarine") == []

    def test_empty_query_raises(self, populated_database):
        """Test that an empty query is rejected."""
        with pytest.raises(SearchError):
            SearchEngine().search("   ")

    def test_invalid_query_raises(self, populated_database):
        """Test that FTS5 syntax errors become SearchError."""
        with pytest.raises(SearchError) as exc_info:
            SearchEngine().search('"unterminated')

        assert exc_info.value.query == '"unterminated'
