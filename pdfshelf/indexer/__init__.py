"""
Indexer module for orchestrating the PDF indexing pipeline.

Coordinates file scanning, extraction, title inference and database
storage to build the full-text search index.
"""

from .index_builder import IndexBuilder, IndexingStats, ExtractedDocument

__all__ = [
    "IndexBuilder",
    "IndexingStats",
    "ExtractedDocument"
]
