"""
Custom exception hierarchy for pdfshelf.

Provides specific exception types for different failure modes:
configuration errors, extraction and reader failures, database issues,
and search problems.
"""


class PDFShelfError(Exception):
    """Base exception for all pdfshelf errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PDFShelfError):
    """Raised when configuration is invalid or missing."""
    pass


class ExtractionError(PDFShelfError):
    """Raised when extracting data from a PDF fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Path to the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class ReaderInitError(ExtractionError):
    """Raised when a content-stream reader cannot be built from the input."""
    pass


class ReaderAbortError(ExtractionError):
    """Raised when the reader aborts while traversing the first page."""
    pass


class MalformedEncodingAbort(ReaderAbortError):
    """
    Reader abort caused by an invalid encoded string literal.

    Common with scanned or damaged real-world PDFs, so callers report it
    at a lower severity than other aborts.
    """
    pass


class DatabaseError(PDFShelfError):
    """Raised when SQLite operations fail."""
    pass


class SearchError(PDFShelfError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query
