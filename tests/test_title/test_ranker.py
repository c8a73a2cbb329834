"""
Tests for the title ranker.

Tests ordering, rendering and the short-candidate fallback.
"""

import pytest

from pdfshelf.core import TitleConfig
from pdfshelf.title.models import Phrase
from pdfshelf.title.ranker import TitleRanker


def phrase(text, size):
    """Build a closed phrase holding text."""
    p = Phrase(font="F", font_size=size, spacing_threshold=0.16 * size, last_x=0, last_y=0)
    p.write(text)
    return p.close()


@pytest.fixture
def ranker():
    """Create a TitleRanker with default settings."""
    return TitleRanker()


class TestRank:
    """Tests for TitleRanker.rank."""

    def test_empty_input(self, ranker):
        """Test that no phrases give an empty candidate."""
        assert ranker.rank([]) == ""

    def test_largest_font_wins(self, ranker):
        """Test that the largest phrase is the candidate."""
        phrases = [phrase("Body text here", 10), phrase("Real Title", 24), phrase("Footer", 8)]

        assert ranker.rank(phrases) == "Real Title"

    def test_ties_keep_document_order(self, ranker):
        """Test that equal sizes keep their original order."""
        phrases = [phrase("First Heading", 18), phrase("Second Heading", 18)]

        assert ranker.rank(phrases) == "First Heading"

    def test_order_is_stable(self, ranker):
        """Test that ordering is descending and stable."""
        a, b, c, d = phrase("a", 12), phrase("b", 20), phrase("c", 12), phrase("d", 20)

        assert ranker.order([a, b, c, d]) == [b, d, a, c]

    def test_short_candidate_falls_back(self, ranker):
        """Test that a drop-cap letter yields to the runner-up."""
        phrases = [phrase("A", 40), phrase("Long Title Here", 20)]

        assert ranker.rank(phrases) == "Long Title Here"

    def test_fallback_is_not_checked_again(self, ranker):
        """Test that a short runner-up is used as is."""
        phrases = [phrase("A", 40), phrase("B", 20), phrase("Third Phrase", 10)]

        assert ranker.rank(phrases) == "B"

    def test_fallback_exhaustion_keeps_candidate(self, ranker):
        """Test that a short only phrase stays the candidate."""
        assert ranker.rank([phrase("Hi", 30)]) == "Hi"

    def test_length_four_is_not_short(self, ranker):
        """Test that the minimum length itself is accepted."""
        phrases = [phrase("Four", 30), phrase("Other Title", 20)]

        assert ranker.rank(phrases) == "Four"

    def test_short_after_collapse(self, ranker):
        """Test that length is measured on the rendered text."""
        phrases = [phrase("  A   ", 30), phrase("Title", 20)]

        assert ranker.rank(phrases) == "Title"


class TestRender:
    """Tests for candidate rendering."""

    def test_whitespace_collapsed(self, ranker):
        """Test that whitespace runs become one space and ends are trimmed."""
        assert ranker.render(phrase("  Design   of\t Systems ", 20)) == "Design of Systems"

    def test_capped_to_eighty_characters(self, ranker):
        """Test that long candidates are capped."""
        text = " ".join(["word"] * 40)

        result = ranker.render(phrase(text, 20))

        assert len(result) == 80
        assert result == text[:80]

    def test_cap_on_multibyte_text(self, ranker):
        """Test that the cap counts characters and never splits one."""
        text = "é" * 100

        result = ranker.render(phrase(text, 20))

        assert result == "é" * 80
        result.encode("utf-8")

    def test_configured_cap(self):
        """Test that max_title_length is honored."""
        ranker = TitleRanker(TitleConfig(max_title_length=10))

        assert ranker.render(phrase("abcdefghijklmnop", 20)) == "abcdefghij"
