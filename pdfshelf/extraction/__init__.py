"""
PDF extraction module for pdfshelf.

Provides file discovery and extraction with multiple backends (pypdf and
pdfplumber): full text with automatic fallback, page counts, covers, and
the first-page glyph runs consumed by title inference.
"""

from .document import PDFDocument
from .file_scanner import FileScanner
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .extractor import PDFExtractor

__all__ = [
    "PDFDocument",
    "FileScanner",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "PDFExtractor"
]
