"""
Search module for FTS5 full-text search.

Provides search execution and result models for pdfshelf.
"""

from .models import SearchResult, MATCH_START, MATCH_END
from .search_engine import SearchEngine

__all__ = [
    "SearchResult",
    "MATCH_START",
    "MATCH_END",
    "SearchEngine"
]
