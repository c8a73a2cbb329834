"""
Data models for search functionality.
"""

from dataclasses import dataclass


# Snippet markers around matched terms, replaced by the caller
MATCH_START = "{{{"
MATCH_END = "}}}"


@dataclass
class SearchResult:
    """
    Represents a single search result.

    Attributes:
        id: Document row ID, usable with the cover command.
        path: Path of the PDF file.
        title: Inferred title, "" when unknown.
        pages: Number of pages.
        snippet: Text excerpt with matches wrapped in MATCH_START/MATCH_END.
        score: FTS5 rank (lower is better).
    """
    id: int
    path: str
    title: str
    pages: int
    snippet: str
    score: float

    def highlighted(self, start: str, end: str) -> str:
        """Snippet with the match markers replaced by start and end."""
        return self.snippet.replace(MATCH_START, start).replace(MATCH_END, end)
