"""
Full-text search engine using SQLite FTS5.

Executes raw FTS5 queries ranked by relevance and generates snippets
with marked matches.
"""

import sqlite3
import time
from typing import List

from ..core import get_config, get_logger, SearchError
from ..database import get_connection
from .models import SearchResult, MATCH_START, MATCH_END

logger = get_logger(__name__)


class SearchEngine:
    """
    Full-text search over the indexed documents.

    Queries use FTS5 syntax as is (see https://www.sqlite.org/fts5.html):
    implicit AND, OR, NOT, "quoted phrases" and prefix* terms.
    """

    def __init__(self):
        """Initialize the search engine with configuration."""
        self.config = get_config()

        self.default_limit = self.config.search.default_limit
        self.snippet_tokens = self.config.search.snippet_tokens

    def search(self, query: str, limit: int = None) -> List[SearchResult]:
        """
        Execute a full-text search.

        Args:
            query: FTS5 query string.
            limit: Maximum number of documents. Defaults to config value.

        Returns:
            Results ordered by relevance.

        Raises:
            SearchError: If the query is empty or rejected by FTS5.
        """
        if not query or not query.strip():
            raise SearchError("Empty search query", query=query)

        limit = limit or self.default_limit
        start_time = time.time()

        sql = f"""
            SELECT
                p.id,
                p.path,
                p.title,
                p.pages,
                snippet(pdfs_fts, 0, '{MATCH_START}', '{MATCH_END}', '...', {self.snippet_tokens}) AS snippet,
                pdfs_fts.rank AS score
            FROM pdfs_fts
            JOIN pdfs p ON pdfs_fts.rowid = p.id
            WHERE pdfs_fts MATCH ?
            ORDER BY pdfs_fts.rank
            LIMIT ?
        """

        try:
            with get_connection() as conn:
                rows = conn.execute(sql, (query, limit)).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Search failed: {e}")
            raise SearchError(
                f"Search for {query!r} failed: {e}",
                query=query
            )

        results = [
            SearchResult(
                id=row["id"],
                path=row["path"],
                title=row["title"] or "",
                pages=row["pages"],
                snippet=row["snippet"] or "",
                score=row["score"]
            )
            for row in rows
        ]

        execution_time = (time.time() - start_time) * 1000
        logger.debug(
            f"Search {query!r}: {len(results)} results in {execution_time:.1f}ms"
        )

        return results
