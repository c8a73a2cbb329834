"""
Tests for search data models.
"""

from pdfshelf.search.models import SearchResult, MATCH_START, MATCH_END


class TestSearchResult:
    """Tests for SearchResult."""

    def test_highlighted_replaces_markers(self):
        """Test that match markers are replaced."""
        result = SearchResult(
            id=1,
            path="/a.pdf",
            title="",
            pages=1,
            snippet=f"the {MATCH_START}turbine{MATCH_END} blades",
            score=-1.0
        )

        assert result.highlighted("<b>", "</b>") == "the <b>turbine</b> blades"
        assert result.highlighted("", "") == "the turbine blades"
