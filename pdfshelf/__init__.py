"""
pdfshelf package.

Indexes PDF collections into SQLite with FTS5 full-text search, keeps the
first page of every document as a viewable cover, and infers a best-guess
title from the typography of that first page.
"""

__version__ = "1.0.0"
