"""
Unified PDF extraction interface with automatic fallback.

Wraps the extraction backends: full text is tried on the primary backend
and falls back to the secondary one when it fails or returns nothing.
Page counts and covers come from pypdf, first-page glyph runs from
pdfplumber.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from ..core import get_config, get_logger, ExtractionError
from ..title import TextRun, TitleEngine
from ..utils import clean_text
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .source import PDFSource, source_name

logger = get_logger(__name__)


BACKENDS = {
    "pypdf": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class PDFExtractor:
    """
    Unified PDF extraction with automatic backend fallback.

    Tries the primary backend first, falls back to secondary
    if extraction fails or produces empty results.
    """

    def __init__(
        self,
        primary_backend: str = None,
        fallback_backend: str = None
    ):
        """
        Initialize the extractor with configured backends.

        Args:
            primary_backend: Name of primary backend ("pypdf" or "pdfplumber").
            fallback_backend: Name of fallback backend.
        """
        config = get_config()

        primary_name = primary_backend or config.extraction.primary_backend
        fallback_name = fallback_backend or config.extraction.fallback_backend

        if primary_name not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {primary_name}")

        self.primary = BACKENDS[primary_name]()
        self.fallback = BACKENDS[fallback_name]() if fallback_name in BACKENDS else None

        self.pages_backend = PyPDFBackend()
        self.runs_backend = PDFPlumberBackend()

        logger.debug(
            f"Initialized extractor: primary={primary_name}, fallback={fallback_name}"
        )

    def extract(self, source: PDFSource) -> List[Tuple[int, str]]:
        """
        Extract text from a PDF using available backends.

        Tries primary backend first, falls back if needed.

        Args:
            source: Path to the PDF file or its raw bytes.

        Returns:
            List of (page_number, text) tuples.

        Raises:
            ExtractionError: If all backends fail.
        """
        name = source_name(source)
        primary_error = None

        try:
            results = self.primary.extract(source)

            if results:
                return results

            logger.debug(f"Primary backend returned empty results: {name}")

        except ExtractionError as e:
            primary_error = e
            logger.debug(f"Primary backend failed: {e.message}")

        if self.fallback:
            try:
                logger.debug(f"Trying fallback backend for: {name}")
                results = self.fallback.extract(source)

                if results:
                    return results

            except ExtractionError as e:
                logger.debug(f"Fallback backend also failed: {e.message}")

        if primary_error:
            raise primary_error

        return []

    def extract_text(self, source: PDFSource, max_bytes: int = None) -> Optional[str]:
        """
        Extract the full text of a PDF as one cleaned string.

        Args:
            source: Path to the PDF file or its raw bytes.
            max_bytes: Largest text to keep, measured in UTF-8 bytes.

        Returns:
            The text, or None if it exceeds max_bytes.
        """
        pages = self.extract(source)
        text = "\n\n".join(clean_text(content) for _, content in pages)

        if max_bytes is not None and len(text.encode("utf-8")) > max_bytes:
            logger.warning(f"Text of {source_name(source)} exceeds {max_bytes} bytes, not stored")
            return None

        return text

    def page_count(self, source: PDFSource) -> int:
        """Number of pages of a PDF."""
        return self.pages_backend.page_count(source)

    def cover(self, source: PDFSource, max_bytes: int = None) -> bytes:
        """Single-page PDF holding the first page of a document."""
        return self.pages_backend.cover(source, max_bytes)

    def first_page_runs(self, source: PDFSource) -> List[TextRun]:
        """Positioned glyph runs of the first page."""
        return self.runs_backend.first_page_runs(source)

    def extract_title(self, source: PDFSource, engine: TitleEngine) -> str:
        """
        Infer the title of a PDF from its first page.

        Args:
            source: Path to the PDF file or its raw bytes.
            engine: Title engine to run on the glyph runs.

        Returns:
            The inferred title, "" when there is no confident one.

        Raises:
            ReaderInitError: If the reader cannot open the document.
            ReaderAbortError: If the reader aborts on the first page.
        """
        return engine.infer(self.first_page_runs(source))


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m pdfshelf.extraction.extractor <pdf_file>")
        sys.exit(1)

    pdf_path = Path(sys.argv[1])
    if not pdf_path.exists():
        print(f"File not found: {pdf_path}")
        sys.exit(1)

    extractor = PDFExtractor()

    try:
        text = extractor.extract_text(pdf_path) or ""
        print(f"Extracted {len(text):,} characters from {pdf_path.name}")
        print(f"Title: {extractor.extract_title(pdf_path, TitleEngine())!r}")

    except ExtractionError as e:
        print(f"Extraction failed: {e.message}")
